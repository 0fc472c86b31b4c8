"""Spatial reference resolution for GeoJSON ``crs`` members.

Only the named-CRS form is understood::

    {"type": "name", "properties": {"name": "EPSG:4326"}}

An ``EPSG:`` name yields an integer SRID; any other name is kept as the
raw string.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from geocodec.exceptions import InvalidSrid, UnsupportedCrs

_EPSG_PREFIX = "EPSG:"


def resolve_srid(crs: Any) -> int | str | None:
    """Extract the SRID from CRS metadata.

    Args:
        crs: The value of a GeoJSON ``crs`` member, or None.

    Returns:
        Integer SRID for ``EPSG:<digits>`` names, the raw name for any other
        name, or None when no CRS is given.

    Raises:
        InvalidSrid: If an ``EPSG:`` name is not followed by an integer.
        UnsupportedCrs: If the metadata is not a named CRS object.
    """
    if crs is None:
        return None

    if not isinstance(crs, Mapping) or crs.get("type") != "name":
        raise UnsupportedCrs(crs)
    properties = crs.get("properties")
    if not isinstance(properties, Mapping) or not isinstance(properties.get("name"), str):
        raise UnsupportedCrs(crs)

    name: str = properties["name"]
    if not name.startswith(_EPSG_PREFIX):
        return name

    digits = name[len(_EPSG_PREFIX) :]
    if not digits.isascii() or not digits.isdigit():
        raise InvalidSrid(f"EPSG code {digits!r} is not an integer", crs)
    return int(digits)


def crs_from_srid(srid: int | str | None) -> dict[str, Any] | None:
    """Build the named-CRS object for an SRID (reverse of ``resolve_srid``).

    Example:
        >>> crs_from_srid(4326)
        {'type': 'name', 'properties': {'name': 'EPSG:4326'}}
    """
    if srid is None:
        return None
    name = f"{_EPSG_PREFIX}{srid}" if isinstance(srid, int) else srid
    return {"type": "name", "properties": {"name": name}}
