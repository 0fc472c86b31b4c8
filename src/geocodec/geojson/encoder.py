"""GeoJSON encoder: canonical geometries back to plain trees.

The output uses only dicts, lists, floats, strings and None, ready for any
JSON serializer. Type tags mirror what the decoder accepts: ``"Point"`` for
non-empty points of either dimension (arity tells them apart), and
``"<Type>Z"`` for every other three-dimensional geometry, the empty PointZ
included.

Only the outermost geometry carries a ``crs`` member. Collection members
are written without one because the decoder gives every member the
collection's srid.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from geocodec.exceptions import EncodeError
from geocodec.geometry.coordinates import to_lists
from geocodec.geometry.primitives import (
    SIMPLE_VARIANTS,
    Geometry,
    GeometryCollection,
)
from geocodec.geometry.srid import crs_from_srid
from geocodec.result import Result
from geocodec.utils.logging import codec_context, get_logger

logger = get_logger(__name__)


@codec_context("geojson", "encode")
def encode(geometry: Geometry | None, *, feature: bool = False) -> dict[str, Any]:
    """Encode a geometry as a GeoJSON tree.

    Args:
        geometry: The geometry to encode. None is only allowed with
            ``feature=True`` and yields a Feature with a null geometry.
        feature: Wrap the geometry in a Feature, moving its properties to
            the Feature.

    Returns:
        GeoJSON object as plain Python containers.

    Raises:
        EncodeError: If ``geometry`` is not a canonical geometry.
    """
    if feature:
        tree = _encode_feature(geometry)
    elif geometry is None:
        raise EncodeError("Cannot encode a missing geometry outside a Feature")
    else:
        tree = _encode_geometry(geometry)
    logger.debug("geojson_encoded", type_tag=tree["type"])
    return tree


def try_encode(geometry: Geometry | None, *, feature: bool = False) -> Result[dict[str, Any]]:
    """Encode a geometry, returning the error instead of raising."""
    return Result.capture(encode, geometry, feature=feature)


@codec_context("geojson", "encode")
def encode_features(geometries: Iterable[Geometry | None]) -> dict[str, Any]:
    """Encode geometries as a FeatureCollection, one Feature each."""
    features = [_encode_feature(geometry) for geometry in geometries]
    logger.debug("geojson_encoded", type_tag="FeatureCollection", count=len(features))
    return {"type": "FeatureCollection", "features": features}


def _type_tag(geometry: Geometry) -> str:
    # A non-empty point's arity already says whether it has z
    if geometry.has_z and (geometry.type_name != "Point" or geometry.is_empty):
        return f"{geometry.type_name}Z"
    return geometry.type_name


def _encode_geometry(
    geometry: Geometry, *, with_properties: bool = True, with_crs: bool = True
) -> dict[str, Any]:
    if isinstance(geometry, GeometryCollection):
        tree: dict[str, Any] = {
            "type": "GeometryCollection",
            "geometries": [
                _encode_geometry(member, with_crs=False) for member in geometry.geometries
            ],
        }
    elif type(geometry) in SIMPLE_VARIANTS:
        coordinates = geometry.coordinates  # type: ignore[attr-defined]
        tree = {
            "type": _type_tag(geometry),
            "coordinates": [] if coordinates is None else to_lists(coordinates),
        }
    else:
        raise EncodeError("Not a canonical geometry", geometry)

    # Members take the collection's srid on decode, so only the top level has a crs
    crs = crs_from_srid(geometry.srid) if with_crs else None
    if crs is not None:
        tree["crs"] = crs
    if with_properties and geometry.properties:
        tree["properties"] = dict(geometry.properties)
    return tree


def _encode_feature(geometry: Geometry | None) -> dict[str, Any]:
    if geometry is None:
        return {"type": "Feature", "geometry": None, "properties": {}}
    return {
        "type": "Feature",
        "geometry": _encode_geometry(geometry, with_properties=False),
        "properties": dict(geometry.properties),
    }
