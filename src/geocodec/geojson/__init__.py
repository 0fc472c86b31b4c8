"""GeoJSON codec for geocodec.

The engine works on parsed trees; ``loads`` and ``dumps`` add the JSON
text step on top using the standard ``json`` module.

Example:
    from geocodec import geojson

    line = geojson.decode({"type": "LineString", "coordinates": [[0, 0], [1, 1]]})
    tree = geojson.encode(line)
"""

from __future__ import annotations

import json
from typing import Any

from geocodec.exceptions import DecodeError
from geocodec.geojson.decoder import decode, try_decode
from geocodec.geojson.encoder import encode, encode_features, try_encode
from geocodec.geometry.primitives import Geometry

__all__ = [
    "decode",
    "dumps",
    "encode",
    "encode_features",
    "loads",
    "try_decode",
    "try_encode",
]


def loads(text: str | bytes) -> Geometry | None:
    """Parse GeoJSON text and decode it.

    Raises:
        DecodeError: If the text is not valid JSON, or any decode error.
    """
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e.msg}", text) from e
    except RecursionError as e:
        raise DecodeError("Invalid JSON: nesting too deep") from e
    return decode(tree)


def dumps(geometry: Geometry | None, *, feature: bool = False, **kwargs: Any) -> str:
    """Encode a geometry and serialize it as GeoJSON text.

    Extra keyword arguments are passed to ``json.dumps``.
    """
    return json.dumps(encode(geometry, feature=feature), **kwargs)
