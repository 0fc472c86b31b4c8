"""geocodec: convert geometries between GeoJSON, WKT and WKB.

Every codec decodes into, and encodes from, the canonical model in
``geocodec.geometry``. Each entry point comes in a raising form and a
checked ``try_*`` form returning a ``Result``.

Example:
    from geocodec import geojson, wkb, wkt

    geometry = geojson.decode({"type": "Point", "coordinates": [1, 2]})
    wkt.encode(geometry)  # 'POINT(1 2)'
    wkb.decode(wkb.encode(geometry)) == geometry  # True
"""

from geocodec import geojson, wkb, wkt
from geocodec.exceptions import (
    BinaryError,
    DecodeError,
    EncodeError,
    GeoCodecError,
    InvalidByteOrder,
    InvalidSrid,
    MalformedCoordinate,
    MalformedText,
    NestingTooDeep,
    SridError,
    TrailingBytes,
    TruncatedBuffer,
    UnknownTypeCode,
    UnrecognizedDocument,
    UnrecognizedType,
    UnsupportedCrs,
)
from geocodec.geometry import (
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
)
from geocodec.result import Result

__version__ = "0.1.0"

__all__ = [
    "BinaryError",
    "DecodeError",
    "EncodeError",
    "GeoCodecError",
    "Geometry",
    "GeometryCollection",
    "InvalidByteOrder",
    "InvalidSrid",
    "LineString",
    "LineStringZ",
    "MalformedCoordinate",
    "MalformedText",
    "MultiLineString",
    "MultiLineStringZ",
    "MultiPoint",
    "MultiPointZ",
    "MultiPolygon",
    "MultiPolygonZ",
    "NestingTooDeep",
    "Point",
    "PointZ",
    "Polygon",
    "PolygonZ",
    "Result",
    "SridError",
    "TrailingBytes",
    "TruncatedBuffer",
    "UnknownTypeCode",
    "UnrecognizedDocument",
    "UnrecognizedType",
    "UnsupportedCrs",
    "geojson",
    "wkb",
    "wkt",
]
