"""Well-known text codec for geocodec.

Example:
    from geocodec import wkt

    polygon = wkt.decode("SRID=4326;POLYGON((0 0,1 0,1 1,0 0))")
    assert wkt.encode(polygon) == "SRID=4326;POLYGON((0 0,1 0,1 1,0 0))"
"""

from __future__ import annotations

from geocodec.exceptions import DecodeError
from geocodec.geometry.primitives import Geometry
from geocodec.result import Result
from geocodec.utils.logging import codec_context, get_logger
from geocodec.wkt.parser import KEYWORDS, Token, WKTParser, tokenize
from geocodec.wkt.writer import WKTWriter, default_writer, format_number

__all__ = [
    "KEYWORDS",
    "Token",
    "WKTParser",
    "WKTWriter",
    "decode",
    "encode",
    "format_number",
    "tokenize",
    "try_decode",
    "try_encode",
]

logger = get_logger(__name__)


@codec_context("wkt", "decode")
def decode(text: str) -> Geometry:
    """Parse (extended) well-known text into a geometry.

    Raises:
        MalformedText: On a syntax error.
        UnrecognizedType: On an unknown keyword or unsupported dimension.
        MalformedCoordinate: If a coordinate has the wrong arity.
    """
    if not isinstance(text, str):
        raise DecodeError("Well-known text must be a string", text)
    geometry = WKTParser(text).parse()
    logger.debug("wkt_decoded", geometry_type=type(geometry).__name__)
    return geometry


def try_decode(text: str) -> Result[Geometry]:
    """Parse well-known text, returning the error instead of raising."""
    return Result.capture(decode, text)


@codec_context("wkt", "encode")
def encode(geometry: Geometry, *, decimals: int | None = None) -> str:
    """Format a geometry as (extended) well-known text.

    Args:
        geometry: The geometry to format.
        decimals: Round components; defaults to settings.WKT_DECIMALS.
    """
    writer = WKTWriter(decimals) if decimals is not None else default_writer()
    text = writer.write(geometry)
    logger.debug("wkt_encoded", geometry_type=type(geometry).__name__, length=len(text))
    return text


def try_encode(geometry: Geometry, *, decimals: int | None = None) -> Result[str]:
    """Format a geometry, returning the error instead of raising."""
    return Result.capture(encode, geometry, decimals=decimals)
