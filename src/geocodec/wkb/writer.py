"""Well-known binary encoding.

The writer mirrors the reader: header first, then counted sequences of
8-byte floats. Output is accumulated as a list of byte chunks so callers
can stream it without an extra copy. A single byte order is used for the
whole value, nested members included.

All-NaN doubles mark the empty point, so NaN and infinite components of
real coordinates are rejected with EncodeError.
"""

from __future__ import annotations

import math
import struct
from itertools import chain
from typing import Any

from geocodec.exceptions import EncodeError, InvalidSrid
from geocodec.geometry.primitives import SIMPLE_VARIANTS, Geometry, GeometryCollection
from geocodec.wkb.types import TypeWord

_UINT32_MAX = 0xFFFFFFFF
_NAN = float("nan")

# Member type written inside each multi-part container
_MULTI_MEMBERS = {
    "MultiPoint": "Point",
    "MultiLineString": "LineString",
    "MultiPolygon": "Polygon",
}


class WKBWriter:
    """Writer producing well-known binary for one geometry.

    Args:
        byte_order: "little" (NDR, flag 1) or "big" (XDR, flag 0).
    """

    def __init__(self, byte_order: str = "little") -> None:
        self.order = "<" if byte_order == "little" else ">"
        self.flag = b"\x01" if byte_order == "little" else b"\x00"
        self._uint32 = struct.Struct(f"{self.order}I")
        self.chunks: list[bytes] = []

    def write(self, geometry: Geometry) -> list[bytes]:
        """Encode ``geometry`` and return the output chunks.

        Raises:
            EncodeError: If ``geometry`` is not a canonical geometry.
            InvalidSrid: If an SRID is not an unsigned 32-bit integer.
        """
        self.chunks = []
        self._write_geometry(geometry)
        return self.chunks

    def _write_header(self, type_name: str, has_z: bool, srid: Any = None) -> None:
        type_word = TypeWord(type_name=type_name, has_z=has_z, has_srid=srid is not None)
        self.chunks.append(self.flag)
        self.chunks.append(self._uint32.pack(type_word.to_int()))
        if srid is not None:
            if isinstance(srid, bool) or not isinstance(srid, int):
                raise InvalidSrid("Well-known binary only embeds integer SRIDs", srid)
            if not 0 <= srid <= _UINT32_MAX:
                raise InvalidSrid("SRID does not fit in 32 bits", srid)
            self.chunks.append(self._uint32.pack(srid))

    def _write_coordinates(self, values: tuple[float, ...] | list[float]) -> None:
        # NaN is reserved for the empty point
        if not all(map(math.isfinite, values)):
            raise EncodeError("Non-finite coordinate component", values)
        self._write_doubles(values)

    def _write_doubles(self, values: tuple[float, ...] | list[float]) -> None:
        self.chunks.append(struct.pack(f"{self.order}{len(values)}d", *values))

    def _write_sequence(self, coordinates: tuple[tuple[float, ...], ...]) -> None:
        self.chunks.append(self._uint32.pack(len(coordinates)))
        self._write_coordinates(list(chain.from_iterable(coordinates)))

    def _write_payload(self, type_name: str, has_z: bool, coordinates: Any) -> None:
        if type_name == "Point":
            if coordinates is None:
                self._write_doubles((_NAN,) * (3 if has_z else 2))
            else:
                self._write_coordinates(coordinates)
        elif type_name == "LineString":
            self._write_sequence(coordinates)
        elif type_name == "Polygon":
            self.chunks.append(self._uint32.pack(len(coordinates)))
            for ring in coordinates:
                self._write_sequence(ring)
        else:
            member_type = _MULTI_MEMBERS[type_name]
            self.chunks.append(self._uint32.pack(len(coordinates)))
            for member in coordinates:
                self._write_header(member_type, has_z)
                self._write_payload(member_type, has_z, member)

    def _write_geometry(self, geometry: Geometry) -> None:
        if isinstance(geometry, GeometryCollection):
            self._write_header("GeometryCollection", False, geometry.srid)
            self.chunks.append(self._uint32.pack(len(geometry.geometries)))
            for member in geometry.geometries:
                self._write_geometry(member)
        elif type(geometry) in SIMPLE_VARIANTS:
            self._write_header(geometry.type_name, geometry.has_z, geometry.srid)
            self._write_payload(
                geometry.type_name,
                geometry.has_z,
                geometry.coordinates,  # type: ignore[attr-defined]
            )
        else:
            raise EncodeError("Not a canonical geometry", geometry)
