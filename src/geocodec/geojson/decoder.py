"""GeoJSON decode engine.

Turns an already-parsed GeoJSON tree (plain dicts, lists and scalars) into
canonical geometries. The top-level shape is tested in a fixed order:

1. ``geometries`` key: a GeometryCollection
2. ``coordinates`` key: a single geometry
3. ``type == "Feature"``: the feature's geometry, or None if it is null
4. ``type == "FeatureCollection"``: a GeometryCollection of the non-null
   feature geometries

A ``crs`` member is honoured on top-level geometries and collections only.
Collection members inherit the collection's srid and any ``crs`` of their
own is ignored. Feature geometries always come back with ``srid=None``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from geocodec.exceptions import DecodeError, UnrecognizedDocument, UnrecognizedType
from geocodec.geometry.coordinates import (
    map_nested,
    pair_from_sequence,
    triple_from_sequence,
)
from geocodec.geometry.primitives import (
    MAX_NESTING_DEPTH,
    SIMPLE_VARIANTS,
    Geometry,
    GeometryCollection,
    Point,
    PointZ,
)
from geocodec.geometry.srid import resolve_srid
from geocodec.result import Result
from geocodec.utils.logging import codec_context, get_logger

logger = get_logger(__name__)

# Type tags decoded by nesting depth alone. Z variants are selected only by
# an explicit "<Type>Z" tag; plain "Point" is handled by arity instead.
_TAGGED_VARIANTS: dict[str, type[Geometry]] = {
    (f"{cls.type_name}Z" if cls.has_z else cls.type_name): cls
    for cls in SIMPLE_VARIANTS
    if cls is not Point
}

# Coordinate arities accepted by a plain "Point" tag
_POINT_ARITIES = (0, 2, 3)


def decode(tree: Any) -> Geometry | None:
    """Decode a GeoJSON tree, raising on failure.

    Args:
        tree: Parsed GeoJSON object (geometry, Feature or FeatureCollection).

    Returns:
        The decoded geometry, or None for a Feature with a null geometry.

    Raises:
        UnrecognizedDocument: If the tree matches no known top-level shape.
        UnrecognizedType: If a geometry type tag is unknown.
        MalformedCoordinate: If a coordinate has the wrong arity.
        InvalidSrid: If a ``crs`` names a non-integer EPSG code.
        UnsupportedCrs: If a ``crs`` is not a named CRS.
        DecodeError: If GeometryCollections nest too deeply.
    """
    return _decode_document(tree)


def try_decode(tree: Any) -> Result[Geometry]:
    """Decode a GeoJSON tree, returning the error instead of raising."""
    return Result.capture(_decode_document, tree)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _properties(tree: Mapping[str, Any]) -> dict[str, Any]:
    properties = tree.get("properties")
    if properties is None:
        return {}
    if not isinstance(properties, Mapping):
        raise DecodeError("GeoJSON 'properties' must be an object", properties)
    return dict(properties)


@codec_context("geojson", "decode")
def _decode_document(tree: Any) -> Geometry | None:
    if not isinstance(tree, Mapping):
        raise UnrecognizedDocument(tree)

    if "geometries" in tree:
        geometry: Geometry | None = _decode_collection(tree, resolve_srid(tree.get("crs")))
    elif "coordinates" in tree:
        geometry = _decode_geometry(
            tree.get("type"),
            tree["coordinates"],
            _properties(tree),
            resolve_srid(tree.get("crs")),
        )
    elif tree.get("type") == "Feature":
        geometry = _decode_feature(tree)
    elif tree.get("type") == "FeatureCollection":
        geometry = _decode_feature_collection(tree)
    else:
        raise UnrecognizedDocument(tree)

    logger.debug(
        "geojson_decoded",
        geometry_type=type(geometry).__name__ if geometry is not None else None,
    )
    return geometry


def _decode_collection(
    tree: Mapping[str, Any],
    srid: int | str | None,
    properties: dict[str, Any] | None = None,
    depth: int = 0,
) -> GeometryCollection:
    if depth >= MAX_NESTING_DEPTH:
        raise DecodeError(f"GeometryCollection nesting exceeds {MAX_NESTING_DEPTH} levels")
    members = tree["geometries"]
    if not _is_sequence(members):
        raise UnrecognizedDocument(tree)

    geometries: list[Geometry] = []
    for member in members:
        if not isinstance(member, Mapping):
            raise UnrecognizedDocument(member)
        if "geometries" in member:
            geometries.append(_decode_collection(member, srid, depth=depth + 1))
        else:
            geometries.append(
                _decode_geometry(
                    member.get("type"),
                    member.get("coordinates"),
                    _properties(member),
                    srid,
                )
            )

    return GeometryCollection(
        geometries=tuple(geometries),
        properties=_properties(tree) if properties is None else properties,
        srid=srid,
    )


def _decode_feature(feature: Any) -> Geometry | None:
    if not isinstance(feature, Mapping):
        raise UnrecognizedDocument(feature)

    geometry = feature.get("geometry")
    if geometry is None:
        return None
    if not isinstance(geometry, Mapping):
        raise UnrecognizedDocument(feature)

    properties = _properties(feature)
    if "geometries" in geometry:
        return _decode_collection(geometry, None, properties)
    return _decode_geometry(
        geometry.get("type"), geometry.get("coordinates"), properties, None
    )


def _decode_feature_collection(tree: Mapping[str, Any]) -> GeometryCollection:
    features = tree.get("features")
    if not _is_sequence(features):
        raise UnrecognizedDocument(tree)

    decoded = [_decode_feature(feature) for feature in features]
    geometries = tuple(geometry for geometry in decoded if geometry is not None)
    if len(geometries) < len(decoded):
        logger.debug(
            "null_feature_geometries_dropped",
            dropped=len(decoded) - len(geometries),
        )
    return GeometryCollection(geometries=geometries)


def _decode_geometry(
    type_name: Any,
    coordinates: Any,
    properties: dict[str, Any],
    srid: int | str | None,
) -> Geometry:
    """Dispatch one geometry on its type tag and coordinate arity."""
    if (
        type_name == "Point"
        and _is_sequence(coordinates)
        and len(coordinates) in _POINT_ARITIES
    ):
        if len(coordinates) == 3:
            return PointZ(
                coordinates=triple_from_sequence(coordinates),
                srid=srid,
                properties=properties,
            )
        if len(coordinates) == 2:
            return Point(
                coordinates=pair_from_sequence(coordinates),
                srid=srid,
                properties=properties,
            )
        return Point(coordinates=None, srid=srid, properties=properties)

    # Only an explicit tag can mark an empty point as three-dimensional
    if type_name == "PointZ" and _is_sequence(coordinates) and not coordinates:
        return PointZ(coordinates=None, srid=srid, properties=properties)

    if isinstance(type_name, str) and type_name in _TAGGED_VARIANTS:
        cls = _TAGGED_VARIANTS[type_name]
        leaf = triple_from_sequence if cls.has_z else pair_from_sequence
        return cls(
            coordinates=map_nested(leaf, coordinates, cls.depth),
            srid=srid,
            properties=properties,
        )

    # Truncation rule: an unmatched [x, y, z] is retried as [x, y]
    if _is_sequence(coordinates) and len(coordinates) == 3:
        logger.debug("third_component_dropped", type_name=type_name)
        return _decode_geometry(type_name, coordinates[:2], properties, srid)

    raise UnrecognizedType(type_name, coordinates)
