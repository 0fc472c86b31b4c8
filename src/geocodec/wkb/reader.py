"""Well-known binary decoding.

Decoding is a depth-first recursive descent over one buffer. Every
geometry starts with its own header (byte order, type word, optional
SRID); the byte order read there applies to everything in that geometry's
payload. Coordinate runs are bounds-checked before they are unpacked, so
a short buffer always raises ``TruncatedBuffer`` and never yields a
geometry with fewer coordinates than declared. GeometryCollections may
nest at most ``MAX_NESTING_DEPTH`` levels deep.

A Point whose components are all NaN is the empty point; the writer
refuses to produce one from real coordinates, so the reading is unambiguous
for data written by this package.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from typing import Any

from geocodec.exceptions import (
    BinaryError,
    InvalidByteOrder,
    MalformedCoordinate,
    NestingTooDeep,
    TrailingBytes,
    TruncatedBuffer,
    UnknownTypeCode,
)
from geocodec.geometry.primitives import (
    MAX_NESTING_DEPTH,
    Geometry,
    GeometryCollection,
    geometry_class,
)
from geocodec.wkb.types import TypeWord, parse_type_word

_UINT32 = {"<": struct.Struct("<I"), ">": struct.Struct(">I")}
_BYTE_ORDERS = {0: ">", 1: "<"}

# Member type expected inside each multi-part container
_MULTI_MEMBERS = {
    "MultiPoint": "Point",
    "MultiLineString": "LineString",
    "MultiPolygon": "Polygon",
}


def as_buffer(data: bytes | bytearray | memoryview | Iterable[bytes]) -> bytes:
    """Join contiguous or chunked input into one immutable buffer.

    Raises:
        BinaryError: If ``data`` is text or holds non-bytes chunks.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, bytearray | memoryview):
        return bytes(data)
    if isinstance(data, str):
        raise BinaryError("Expected bytes, got text; use decode_hex for hex strings")
    chunks = list(data)
    if not all(isinstance(chunk, bytes | bytearray | memoryview) for chunk in chunks):
        raise BinaryError("Chunked input must contain only bytes-like chunks")
    return b"".join(chunks)


class WKBReader:
    """Reader for a single well-known binary geometry.

    Usage:
        geometry = WKBReader(data).read()
    """

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def read(self) -> Geometry:
        """Decode the buffer as exactly one geometry.

        Raises:
            TruncatedBuffer: If the buffer ends early.
            UnknownTypeCode: If a type word is not supported.
            InvalidByteOrder: If a byte-order flag is not 0 or 1.
            TrailingBytes: If bytes remain after the geometry.
            NestingTooDeep: If GeometryCollections nest too deeply.
        """
        geometry = self._read_geometry()
        remaining = len(self.data) - self.offset
        if remaining:
            raise TrailingBytes(self.offset, remaining)
        return geometry

    # -------------------------------------------------------------------------
    # Primitive reads
    # -------------------------------------------------------------------------

    def _require(self, needed: int) -> None:
        available = len(self.data) - self.offset
        if needed > available:
            raise TruncatedBuffer(self.offset, needed, available)

    def _read_uint32(self, order: str) -> int:
        self._require(4)
        (value,) = _UINT32[order].unpack_from(self.data, self.offset)
        self.offset += 4
        return value

    def _read_doubles(self, order: str, count: int) -> tuple[float, ...]:
        self._require(count * 8)
        values = struct.unpack_from(f"{order}{count}d", self.data, self.offset)
        self.offset += count * 8
        return values

    def _read_header(self) -> tuple[str, TypeWord, int | None]:
        self._require(1)
        flag = self.data[self.offset]
        order = _BYTE_ORDERS.get(flag)
        if order is None:
            raise InvalidByteOrder(flag, self.offset)
        self.offset += 1

        type_word = parse_type_word(self._read_uint32(order))
        srid = self._read_uint32(order) if type_word.has_srid else None
        return order, type_word, srid

    # -------------------------------------------------------------------------
    # Payloads
    # -------------------------------------------------------------------------

    def _read_sequence(self, order: str, width: int) -> tuple[tuple[float, ...], ...]:
        count = self._read_uint32(order)
        flat = self._read_doubles(order, count * width)
        return tuple(flat[i : i + width] for i in range(0, len(flat), width))

    def _read_rings(self, order: str, width: int) -> tuple[Any, ...]:
        count = self._read_uint32(order)
        return tuple(self._read_sequence(order, width) for _ in range(count))

    def _read_payload(self, order: str, type_name: str, width: int) -> Any:
        if type_name == "Point":
            coordinate = self._read_doubles(order, width)
            # An empty point is written as all-NaN components
            if all(math.isnan(component) for component in coordinate):
                return None
            return coordinate
        if type_name == "LineString":
            return self._read_sequence(order, width)
        if type_name == "Polygon":
            return self._read_rings(order, width)

        member_type = _MULTI_MEMBERS[type_name]
        count = self._read_uint32(order)
        members = []
        for _ in range(count):
            member = self._read_member(member_type, has_z=width == 3)
            if member is None:
                raise MalformedCoordinate("Empty point inside a MultiPoint")
            members.append(member)
        return tuple(members)

    def _read_member(self, type_name: str, *, has_z: bool) -> Any:
        """Read one nested part of a multi-part geometry, returning its coordinates."""
        order, type_word, _ = self._read_header()
        if type_word.type_name != type_name or type_word.has_z != has_z:
            raise UnknownTypeCode(
                type_word.to_int(),
                f"Expected {type_name}{'Z' if has_z else ''} member, "
                f"got {type_word.type_name}{'Z' if type_word.has_z else ''}",
            )
        return self._read_payload(order, type_name, 3 if has_z else 2)

    def _read_geometry(self, depth: int = 0) -> Geometry:
        start = self.offset
        order, type_word, srid = self._read_header()

        if type_word.type_name == "GeometryCollection":
            if depth >= MAX_NESTING_DEPTH:
                raise NestingTooDeep(start, MAX_NESTING_DEPTH)
            count = self._read_uint32(order)
            geometries = []
            for _ in range(count):
                geometries.append(self._read_geometry(depth + 1))
            return GeometryCollection(geometries=tuple(geometries), srid=srid)

        cls = geometry_class(type_word.type_name, type_word.has_z)
        width = 3 if type_word.has_z else 2
        coordinates = self._read_payload(order, type_word.type_name, width)
        return cls(coordinates=coordinates, srid=srid)
