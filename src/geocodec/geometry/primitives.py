"""Canonical geometry model for geocodec.

This module provides immutable Pydantic models for every geometry variant
the codecs read and write. Coordinates are stored as nested tuples of
floats; the nesting depth is fixed per variant and the leaf arity is fixed
by whether the variant is a Z (three-dimensional) one.

Variants and nesting:
    - Point / PointZ: a single coordinate, or None for an empty point
    - LineString / MultiPoint (+Z): a sequence of coordinates
    - Polygon / MultiLineString (+Z): a sequence of coordinate sequences
    - MultiPolygon (+Z): three levels of sequences
    - GeometryCollection: a sequence of member geometries
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from geocodec.exceptions import UnrecognizedType

Coord2 = tuple[float, float]
Coord3 = tuple[float, float, float]

# Deepest GeometryCollection nesting any decoder accepts
MAX_NESTING_DEPTH = 256


class Geometry(BaseModel, frozen=True):
    """Fields shared by every geometry variant.

    Attributes:
        srid: Spatial reference identifier. None means unspecified.
        properties: Passenger data carried through decode and encode.
    """

    type_name: ClassVar[str] = ""
    has_z: ClassVar[bool] = False
    # Number of sequence levels above the coordinate leaves
    depth: ClassVar[int] = 0

    srid: int | str | None = Field(default=None, description="Spatial reference ID")
    properties: dict[str, Any] = Field(
        default_factory=dict, description="Passenger key/value data"
    )

    @property
    def is_empty(self) -> bool:
        """Return True if the geometry holds no coordinates."""
        coordinates = getattr(self, "coordinates", None)
        return not coordinates


class Point(Geometry, frozen=True):
    """A 2D point. ``coordinates=None`` is the empty point."""

    type_name: ClassVar[str] = "Point"

    coordinates: Coord2 | None = None


class PointZ(Geometry, frozen=True):
    """A 3D point. ``coordinates=None`` is the empty point."""

    type_name: ClassVar[str] = "Point"
    has_z: ClassVar[bool] = True

    coordinates: Coord3 | None = None


class LineString(Geometry, frozen=True):
    """An ordered sequence of 2D vertices."""

    type_name: ClassVar[str] = "LineString"
    depth: ClassVar[int] = 1

    coordinates: tuple[Coord2, ...] = ()


class LineStringZ(Geometry, frozen=True):
    """An ordered sequence of 3D vertices."""

    type_name: ClassVar[str] = "LineString"
    has_z: ClassVar[bool] = True
    depth: ClassVar[int] = 1

    coordinates: tuple[Coord3, ...] = ()


class Polygon(Geometry, frozen=True):
    """A 2D polygon: exterior ring first, then any interior rings."""

    type_name: ClassVar[str] = "Polygon"
    depth: ClassVar[int] = 2

    coordinates: tuple[tuple[Coord2, ...], ...] = ()


class PolygonZ(Geometry, frozen=True):
    """A 3D polygon: exterior ring first, then any interior rings."""

    type_name: ClassVar[str] = "Polygon"
    has_z: ClassVar[bool] = True
    depth: ClassVar[int] = 2

    coordinates: tuple[tuple[Coord3, ...], ...] = ()


class MultiPoint(Geometry, frozen=True):
    type_name: ClassVar[str] = "MultiPoint"
    depth: ClassVar[int] = 1

    coordinates: tuple[Coord2, ...] = ()


class MultiPointZ(Geometry, frozen=True):
    type_name: ClassVar[str] = "MultiPoint"
    has_z: ClassVar[bool] = True
    depth: ClassVar[int] = 1

    coordinates: tuple[Coord3, ...] = ()


class MultiLineString(Geometry, frozen=True):
    type_name: ClassVar[str] = "MultiLineString"
    depth: ClassVar[int] = 2

    coordinates: tuple[tuple[Coord2, ...], ...] = ()


class MultiLineStringZ(Geometry, frozen=True):
    type_name: ClassVar[str] = "MultiLineString"
    has_z: ClassVar[bool] = True
    depth: ClassVar[int] = 2

    coordinates: tuple[tuple[Coord3, ...], ...] = ()


class MultiPolygon(Geometry, frozen=True):
    """A set of 2D polygons, each a sequence of rings."""

    type_name: ClassVar[str] = "MultiPolygon"
    depth: ClassVar[int] = 3

    coordinates: tuple[tuple[tuple[Coord2, ...], ...], ...] = ()


class MultiPolygonZ(Geometry, frozen=True):
    """A set of 3D polygons, each a sequence of rings."""

    type_name: ClassVar[str] = "MultiPolygon"
    has_z: ClassVar[bool] = True
    depth: ClassVar[int] = 3

    coordinates: tuple[tuple[tuple[Coord3, ...], ...], ...] = ()


class GeometryCollection(Geometry, frozen=True):
    """An ordered, possibly heterogeneous, collection of geometries.

    The collection's ``properties`` and ``srid`` are its own; members keep
    theirs independently.
    """

    type_name: ClassVar[str] = "GeometryCollection"

    geometries: tuple[Geometry, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return True if the collection has no members."""
        return not self.geometries


SIMPLE_VARIANTS: tuple[type[Geometry], ...] = (
    Point,
    PointZ,
    LineString,
    LineStringZ,
    Polygon,
    PolygonZ,
    MultiPoint,
    MultiPointZ,
    MultiLineString,
    MultiLineStringZ,
    MultiPolygon,
    MultiPolygonZ,
)

_VARIANTS: dict[tuple[str, bool], type[Geometry]] = {
    (cls.type_name, cls.has_z): cls for cls in (*SIMPLE_VARIANTS, GeometryCollection)
}


def geometry_class(type_name: str, has_z: bool = False) -> type[Geometry]:
    """Look up the variant for a type tag and Z-ness.

    Args:
        type_name: Base type tag without a Z suffix (e.g., "LineString").
        has_z: Whether the three-dimensional sibling is wanted.

    Returns:
        The geometry class.

    Raises:
        UnrecognizedType: If no variant exists for the pair.

    Example:
        >>> geometry_class("Polygon", has_z=True).__name__
        'PolygonZ'
    """
    try:
        return _VARIANTS[(type_name, has_z)]
    except KeyError:
        label = f"{type_name}Z" if has_z else type_name
        raise UnrecognizedType(label) from None
