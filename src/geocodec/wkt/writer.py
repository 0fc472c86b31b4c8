"""Well-known text formatting.

Output follows the PostGIS ``ST_AsEWKT`` layout: ``SRID=<n>;`` prefix for
integer SRIDs, upper-case keywords, ``Z`` tag for three-dimensional
variants, ``EMPTY`` for geometries without coordinates.
"""

from __future__ import annotations

import math
from typing import Any

from geocodec.config import settings
from geocodec.exceptions import EncodeError, InvalidSrid
from geocodec.geometry.primitives import SIMPLE_VARIANTS, Geometry, GeometryCollection
from geocodec.wkt.parser import KEYWORDS

_TAGS = {type_name: keyword for keyword, type_name in KEYWORDS.items()}

# Integral floats below this magnitude are written without a fraction
_INTEGRAL_LIMIT = 1e15


def format_number(value: float, decimals: int | None = None) -> str:
    """Format a coordinate component.

    Raises:
        EncodeError: If the value is NaN or infinite, which has no WKT form.

    Example:
        >>> format_number(2.0), format_number(0.1), format_number(1 / 3, 4)
        ('2', '0.1', '0.3333')
    """
    value = float(value)
    if not math.isfinite(value):
        raise EncodeError("Non-finite coordinate component", value)
    if decimals is not None:
        value = round(value, decimals)
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return str(int(value))
    return repr(value)


class WKTWriter:
    """Writer producing (extended) well-known text.

    Args:
        decimals: Round components to this many decimals; None keeps the
            shortest representation that round-trips.
    """

    def __init__(self, decimals: int | None = None) -> None:
        self.decimals = decimals

    def write(self, geometry: Geometry) -> str:
        """Format ``geometry``, with an ``SRID=`` prefix when it has one.

        Raises:
            InvalidSrid: If the SRID is not an integer.
            EncodeError: If ``geometry`` is not a canonical geometry.
        """
        srid = geometry.srid if isinstance(geometry, Geometry) else None
        if srid is None:
            return self._format_geometry(geometry)
        if isinstance(srid, bool) or not isinstance(srid, int):
            raise InvalidSrid("Extended well-known text only carries integer SRIDs", srid)
        return f"SRID={srid};{self._format_geometry(geometry)}"

    def _format_coordinate(self, coordinate: tuple[float, ...]) -> str:
        return " ".join(format_number(value, self.decimals) for value in coordinate)

    def _format_nested(self, value: Any, depth: int) -> str:
        if depth == 0:
            return f"({self._format_coordinate(value)})"
        if depth == 1:
            return "(" + ",".join(self._format_coordinate(item) for item in value) + ")"
        return "(" + ",".join(self._format_nested(item, depth - 1) for item in value) + ")"

    def _format_geometry(self, geometry: Geometry) -> str:
        if isinstance(geometry, GeometryCollection):
            if geometry.is_empty:
                return "GEOMETRYCOLLECTION EMPTY"
            members = ",".join(self._format_geometry(member) for member in geometry.geometries)
            return f"GEOMETRYCOLLECTION({members})"

        if type(geometry) not in SIMPLE_VARIANTS:
            raise EncodeError("Not a canonical geometry", geometry)

        tag = _TAGS[geometry.type_name]
        if geometry.has_z:
            tag += " Z"
        if geometry.is_empty:
            return f"{tag} EMPTY"

        coordinates = geometry.coordinates  # type: ignore[attr-defined]
        if geometry.type_name == "MultiPoint":
            body = "(" + ",".join(self._format_nested(point, 0) for point in coordinates) + ")"
        else:
            body = self._format_nested(coordinates, geometry.depth)
        separator = " " if geometry.has_z else ""
        return f"{tag}{separator}{body}"


def default_writer() -> WKTWriter:
    """Build a writer using the configured ``WKT_DECIMALS``."""
    return WKTWriter(decimals=settings.WKT_DECIMALS)
