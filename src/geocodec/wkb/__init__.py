"""Well-known binary codec for geocodec.

Reads ISO WKB and PostGIS EWKB (including embedded SRIDs), writes ISO type
codes with the SRID flag when a geometry has an integer SRID.

Example:
    from geocodec import wkb
    from geocodec.geometry import Point

    data = wkb.encode(Point(coordinates=(1, 2), srid=4326))
    assert wkb.decode(data) == Point(coordinates=(1, 2), srid=4326)

    # PostGIS returns hex strings
    point = wkb.decode_hex("0101000000000000000000F03F0000000000000040")
"""

from __future__ import annotations

import binascii
from collections.abc import Iterable

from geocodec.config import resolve_byte_order
from geocodec.exceptions import BinaryError
from geocodec.geometry.primitives import Geometry
from geocodec.result import Result
from geocodec.utils.logging import codec_context, get_logger
from geocodec.wkb.reader import WKBReader, as_buffer
from geocodec.wkb.types import TypeWord, parse_type_word
from geocodec.wkb.writer import WKBWriter

__all__ = [
    "TypeWord",
    "WKBReader",
    "WKBWriter",
    "decode",
    "decode_hex",
    "encode",
    "encode_chunks",
    "encode_hex",
    "parse_type_word",
    "try_decode",
    "try_encode",
]

logger = get_logger(__name__)

BinaryInput = bytes | bytearray | memoryview | Iterable[bytes]


@codec_context("wkb", "decode")
def decode(data: BinaryInput) -> Geometry:
    """Decode well-known binary into a geometry.

    Args:
        data: One contiguous buffer or an iterable of byte chunks.

    Returns:
        The decoded geometry.

    Raises:
        TruncatedBuffer: If the buffer is shorter than its declared contents.
        UnknownTypeCode: If a type word is not supported.
        InvalidByteOrder: If a byte-order flag is not 0 or 1.
        TrailingBytes: If bytes remain after the geometry.
        NestingTooDeep: If GeometryCollections nest too deeply.
    """
    buffer = as_buffer(data)
    geometry = WKBReader(buffer).read()
    logger.debug("wkb_decoded", geometry_type=type(geometry).__name__, size=len(buffer))
    return geometry


def try_decode(data: BinaryInput) -> Result[Geometry]:
    """Decode well-known binary, returning the error instead of raising."""
    return Result.capture(decode, data)


def decode_hex(text: str) -> Geometry:
    """Decode hex-encoded well-known binary (as returned by PostGIS).

    Raises:
        BinaryError: If ``text`` is not valid hex, or any decode error.
    """
    try:
        data = binascii.unhexlify(text.strip())
    except (binascii.Error, ValueError) as e:
        raise BinaryError(f"Invalid hex input: {e}", text) from e
    return decode(data)


@codec_context("wkb", "encode")
def encode_chunks(geometry: Geometry, *, byte_order: str | None = None) -> list[bytes]:
    """Encode a geometry as a list of byte chunks.

    Args:
        geometry: The geometry to encode.
        byte_order: "little" or "big"; defaults to settings.WKB_BYTE_ORDER.

    Raises:
        ConfigError: If the byte order is invalid.
        InvalidSrid: If an SRID cannot be embedded.
        EncodeError: If ``geometry`` is not a canonical geometry.
    """
    return WKBWriter(resolve_byte_order(byte_order)).write(geometry)


@codec_context("wkb", "encode")
def encode(geometry: Geometry, *, byte_order: str | None = None) -> bytes:
    """Encode a geometry as one well-known binary buffer."""
    data = b"".join(encode_chunks(geometry, byte_order=byte_order))
    logger.debug("wkb_encoded", geometry_type=type(geometry).__name__, size=len(data))
    return data


def encode_hex(geometry: Geometry, *, byte_order: str | None = None) -> str:
    """Encode a geometry as upper-case hex well-known binary."""
    return encode(geometry, byte_order=byte_order).hex().upper()


def try_encode(geometry: Geometry, *, byte_order: str | None = None) -> Result[bytes]:
    """Encode a geometry, returning the error instead of raising."""
    return Result.capture(encode, geometry, byte_order=byte_order)
