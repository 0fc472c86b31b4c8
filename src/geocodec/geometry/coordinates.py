"""Coordinate nesting utilities.

Leaf converters turn one raw coordinate (a list of numbers) into a typed
tuple; ``map_nested`` applies a leaf converter through a fixed number of
sequence levels. ``to_lists`` is the reverse used by encoders.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from numbers import Real
from typing import Any, TypeVar

from geocodec.exceptions import MalformedCoordinate

T = TypeVar("T")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _as_float(value: Any, seq: Any) -> float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedCoordinate(f"Non-numeric coordinate component {value!r}", seq)
    try:
        return float(value)
    except OverflowError as e:
        raise MalformedCoordinate("Coordinate component out of float range", seq) from e


def pair_from_sequence(seq: Any) -> tuple[float, float]:
    """Convert a raw coordinate into an (x, y) tuple.

    Components past the second are ignored.

    Args:
        seq: Sequence of at least two numbers.

    Returns:
        (x, y) as floats.

    Raises:
        MalformedCoordinate: If fewer than two numbers are given.
    """
    if not _is_sequence(seq) or len(seq) < 2:
        raise MalformedCoordinate("Coordinate needs at least 2 components", seq)
    return (_as_float(seq[0], seq), _as_float(seq[1], seq))


def triple_from_sequence(seq: Any) -> tuple[float, float, float]:
    """Convert a raw coordinate into an (x, y, z) tuple.

    Args:
        seq: Sequence of exactly three numbers.

    Returns:
        (x, y, z) as floats.

    Raises:
        MalformedCoordinate: If the sequence does not hold exactly three numbers.
    """
    if not _is_sequence(seq) or len(seq) != 3:
        raise MalformedCoordinate("Coordinate needs exactly 3 components", seq)
    return (_as_float(seq[0], seq), _as_float(seq[1], seq), _as_float(seq[2], seq))


def map_nested(leaf: Callable[[Any], T], value: Any, depth: int) -> Any:
    """Apply ``leaf`` to every coordinate inside ``depth`` levels of sequences.

    Args:
        leaf: Converter for a single coordinate.
        value: Raw nested sequences.
        depth: Sequence levels above the leaves (0 converts ``value`` itself).

    Returns:
        The same nesting built from tuples.

    Raises:
        MalformedCoordinate: If a level that should be a sequence is not.

    Example:
        >>> map_nested(pair_from_sequence, [[[0, 0], [1, 1]]], depth=2)
        (((0.0, 0.0), (1.0, 1.0)),)
    """
    if depth == 0:
        return leaf(value)
    if not _is_sequence(value):
        raise MalformedCoordinate(f"Expected a sequence at nesting depth {depth}", value)
    return tuple(map_nested(leaf, item, depth - 1) for item in value)


def to_lists(value: Any) -> Any:
    """Convert nested tuples back into nested lists."""
    if isinstance(value, tuple | list):
        return [to_lists(item) for item in value]
    return value
