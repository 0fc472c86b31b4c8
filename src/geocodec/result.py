"""Checked results for the non-raising codec entry points.

Every codec exposes a raising call (``decode``) and a checked call
(``try_decode``). The checked call runs the same function through
``Result.capture``, so the success value is identical either way.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from geocodec.exceptions import GeoCodecError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a checked codec call.

    Exactly one of ``value`` and ``error`` is meaningful: ``error`` is None
    on success. ``value`` may itself be None on success (a Feature with a
    null geometry decodes to None).

    Attributes:
        value: The decoded or encoded output.
        error: The codec error that stopped the call.
    """

    value: T | None = None
    error: GeoCodecError | None = None

    @property
    def ok(self) -> bool:
        """Return True if the call succeeded."""
        return self.error is None

    def unwrap(self) -> T | None:
        """Return the value, raising the captured error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def capture(cls, func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
        """Run ``func`` and wrap its outcome.

        Only geocodec errors are captured; anything else is a bug and
        propagates.
        """
        try:
            return cls(value=func(*args, **kwargs))
        except GeoCodecError as exc:
            return cls(error=exc)
