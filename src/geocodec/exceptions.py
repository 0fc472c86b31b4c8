"""Custom exceptions for geometry decoding and encoding.

Every error keeps the offending input in ``value`` so callers can log or
inspect it. No codec ever returns a partially decoded geometry; it raises
one of these instead.
"""

from __future__ import annotations

import reprlib
from typing import Any

# Longest rendering of the offending value kept in the message
_MAX_VALUE_REPR = 120

# Bounded repr: deep or huge inputs render in bounded time and size
_value_repr = reprlib.Repr()
_value_repr.maxlevel = 4
_value_repr.maxstring = _MAX_VALUE_REPR
_value_repr.maxother = _MAX_VALUE_REPR


def _render_value(value: Any) -> str:
    rendered = _value_repr.repr(value)
    if len(rendered) > _MAX_VALUE_REPR:
        rendered = rendered[: _MAX_VALUE_REPR - 3] + "..."
    return rendered


class GeoCodecError(Exception):
    """Base exception for all geocodec errors."""

    def __init__(self, message: str, value: Any = None) -> None:
        """Initialize error with optional offending-value context.

        Args:
            message: Human-readable error description.
            value: The input that could not be converted.
        """
        self.message = message
        self.value = value
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending value if available."""
        if self.value is None:
            return self.message
        return f"{self.message} (value: {_render_value(self.value)})"


# =============================================================================
# Structured tree and text decoding
# =============================================================================


class DecodeError(GeoCodecError):
    """Raised when an input document cannot be turned into a geometry."""


class UnrecognizedDocument(DecodeError):
    """Raised when a GeoJSON tree matches none of the known top-level shapes.

    The tree is a geometry when it has ``geometries`` or ``coordinates``,
    a Feature or a FeatureCollection by its ``type``. Anything else lands
    here.
    """

    def __init__(self, value: Any) -> None:
        super().__init__("Unable to decode document", value)


class UnrecognizedType(DecodeError):
    """Raised when a geometry type tag (or its coordinate arity) is unknown."""

    def __init__(self, type_name: Any, value: Any = None) -> None:
        self.type_name = type_name
        super().__init__(f"{type_name} is not a valid type", value)


class MalformedCoordinate(DecodeError):
    """Raised when a coordinate leaf has the wrong arity or is not numeric."""


class MalformedText(DecodeError):
    """Raised when well-known text does not follow the grammar.

    Attributes:
        position: Character offset where parsing failed.
    """

    def __init__(self, message: str, value: str, position: int) -> None:
        self.position = position
        super().__init__(message, value)

    def _format_message(self) -> str:
        rendered = _render_value(self.value)
        return f"{self.message} at position {self.position} (value: {rendered})"


# =============================================================================
# Spatial reference
# =============================================================================


class SridError(GeoCodecError):
    """Base exception for spatial reference metadata errors."""


class InvalidSrid(SridError):
    """Raised when a spatial reference identifier is not usable.

    This error is raised when:
    - An ``EPSG:`` name is not followed by an integer
    - A string SRID is written to well-known binary
    - An integer SRID does not fit in an unsigned 32-bit field
    """


class UnsupportedCrs(SridError):
    """Raised when CRS metadata is not a ``{"type": "name", ...}`` object."""

    def __init__(self, value: Any) -> None:
        super().__init__("Unsupported CRS metadata", value)


# =============================================================================
# Well-known binary
# =============================================================================


class BinaryError(GeoCodecError):
    """Base exception for well-known binary errors."""


class TruncatedBuffer(BinaryError):
    """Raised when a read runs past the end of the buffer.

    Attributes:
        offset: Byte offset of the read that failed.
        needed: Number of bytes the read required.
        available: Number of bytes left at ``offset``.
    """

    def __init__(self, offset: int, needed: int, available: int) -> None:
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Buffer truncated at offset {offset}: "
            f"needed {needed} bytes, {available} available"
        )


class UnknownTypeCode(BinaryError):
    """Raised when the geometry type word is not a supported code.

    Attributes:
        code: The type word as read, flags included.
    """

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or f"Unknown geometry type code {code:#010x}")


class InvalidByteOrder(BinaryError):
    """Raised when the leading byte-order flag is neither 0 nor 1."""

    def __init__(self, flag: int, offset: int) -> None:
        self.flag = flag
        self.offset = offset
        super().__init__(f"Invalid byte order flag {flag} at offset {offset}")


class TrailingBytes(BinaryError):
    """Raised when bytes remain after a complete top-level geometry."""

    def __init__(self, offset: int, remaining: int) -> None:
        self.offset = offset
        self.remaining = remaining
        super().__init__(f"{remaining} unexpected bytes after offset {offset}")


class NestingTooDeep(BinaryError):
    """Raised when GeometryCollections nest deeper than the supported limit.

    Attributes:
        offset: Byte offset of the header that crossed the limit.
        limit: The maximum nesting depth.
    """

    def __init__(self, offset: int, limit: int) -> None:
        self.offset = offset
        self.limit = limit
        super().__init__(
            f"GeometryCollection nesting exceeds {limit} levels at offset {offset}"
        )


# =============================================================================
# Encoding
# =============================================================================


class EncodeError(GeoCodecError):
    """Raised when a value handed to an encoder is not a canonical geometry."""
