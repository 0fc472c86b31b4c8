"""Geometry module for geocodec.

This package provides the canonical geometry model every codec converges
to, plus the shared helpers the codecs use to build it.

Key Components:
    - Primitives: frozen Pydantic models, one per geometry variant
    - Coordinates: leaf converters and nested-sequence mapping
    - SRID: spatial reference extraction from GeoJSON CRS metadata

Example:
    from geocodec.geometry import LineString, geometry_class

    line = LineString(coordinates=[(0, 0), (1, 1)], srid=4326)
    assert geometry_class("LineString") is LineString
"""

from geocodec.geometry.coordinates import (
    map_nested,
    pair_from_sequence,
    to_lists,
    triple_from_sequence,
)
from geocodec.geometry.primitives import (
    MAX_NESTING_DEPTH,
    SIMPLE_VARIANTS,
    Geometry,
    GeometryCollection,
    LineString,
    LineStringZ,
    MultiLineString,
    MultiLineStringZ,
    MultiPoint,
    MultiPointZ,
    MultiPolygon,
    MultiPolygonZ,
    Point,
    PointZ,
    Polygon,
    PolygonZ,
    geometry_class,
)
from geocodec.geometry.srid import crs_from_srid, resolve_srid

__all__ = [
    "MAX_NESTING_DEPTH",
    "SIMPLE_VARIANTS",
    "Geometry",
    "GeometryCollection",
    "LineString",
    "LineStringZ",
    "MultiLineString",
    "MultiLineStringZ",
    "MultiPoint",
    "MultiPointZ",
    "MultiPolygon",
    "MultiPolygonZ",
    "Point",
    "PointZ",
    "Polygon",
    "PolygonZ",
    "crs_from_srid",
    "geometry_class",
    "map_nested",
    "pair_from_sequence",
    "resolve_srid",
    "to_lists",
    "triple_from_sequence",
]
