"""Unit tests for well-known binary encoding."""

from __future__ import annotations

import struct

import pytest

from geocodec import wkb
from geocodec.config import ConfigError
from geocodec.exceptions import EncodeError, InvalidSrid
from geocodec.geometry import (
    GeometryCollection,
    LineString,
    MultiPoint,
    Point,
    PointZ,
)
from geocodec.geometry.primitives import Geometry
from geocodec.wkb.writer import WKBWriter

POINT_LE = "0101000000000000000000F03F0000000000000040"
POINT_BE = "00000000013FF00000000000004000000000000000"
POINT_SRID_LE = "0101000020E6100000000000000000F03F0000000000000040"
POINT_ISO_Z_LE = "01E9030000000000000000F03F00000000000000400000000000000840"


class TestEncodeKnownBytes:
    """Tests against hand-checked byte strings."""

    def test_little_endian_point(self) -> None:
        data = wkb.encode(Point(coordinates=(1, 2)), byte_order="little")
        assert data == bytes.fromhex(POINT_LE)

    def test_big_endian_point(self) -> None:
        data = wkb.encode(Point(coordinates=(1, 2)), byte_order="big")
        assert data == bytes.fromhex(POINT_BE)

    def test_srid_sets_flag(self) -> None:
        point = Point(coordinates=(1, 2), srid=4326)
        assert wkb.encode_hex(point, byte_order="little") == POINT_SRID_LE

    def test_z_uses_iso_code(self) -> None:
        point = PointZ(coordinates=(1, 2, 3))
        assert wkb.encode_hex(point, byte_order="little") == POINT_ISO_Z_LE

    def test_z_with_srid(self) -> None:
        data = wkb.encode(PointZ(coordinates=(1, 2, 3), srid=3857), byte_order="little")
        assert data[1:5].hex().upper() == "E9030020"
        assert struct.unpack_from("<I", data, 5)[0] == 3857

    def test_empty_point_is_nan(self) -> None:
        data = wkb.encode(Point(), byte_order="little")
        assert len(data) == 21
        x, y = struct.unpack_from("<dd", data, 5)
        assert x != x and y != y

    def test_multipoint_members_carry_headers(self) -> None:
        data = wkb.encode(
            MultiPoint(coordinates=((1, 2), (3, 4)), srid=4326), byte_order="little"
        )
        # header + srid + count, then two 21-byte points without SRIDs
        assert len(data) == 1 + 4 + 4 + 4 + 2 * 21
        assert data[13:34] == wkb.encode(Point(coordinates=(1, 2)), byte_order="little")

    def test_collection_members_keep_their_srid(self) -> None:
        collection = GeometryCollection(
            geometries=(Point(coordinates=(1, 2), srid=4326),)
        )
        data = wkb.encode(collection, byte_order="little")
        assert data[9:].hex().upper() == POINT_SRID_LE


class TestEncodeOutput:
    """Tests for the output forms."""

    def test_chunks_join_to_encoded_bytes(self) -> None:
        line = LineString(coordinates=((0, 0), (1, 1)))
        chunks = wkb.encode_chunks(line, byte_order="big")
        assert all(isinstance(chunk, bytes) for chunk in chunks)
        assert b"".join(chunks) == wkb.encode(line, byte_order="big")

    def test_writer_is_reusable(self) -> None:
        writer = WKBWriter("little")
        first = b"".join(writer.write(Point(coordinates=(1, 2))))
        second = b"".join(writer.write(Point(coordinates=(1, 2))))
        assert first == second == bytes.fromhex(POINT_LE)

    def test_default_byte_order_is_little(self) -> None:
        assert wkb.encode(Point(coordinates=(1, 2)))[:1] == b"\x01"

    def test_invalid_byte_order(self) -> None:
        with pytest.raises(ConfigError):
            wkb.encode(Point(coordinates=(1, 2)), byte_order="middle")


class TestEncodeErrors:
    """Tests for geometries that cannot be written."""

    def test_named_srid_rejected(self) -> None:
        with pytest.raises(InvalidSrid):
            wkb.encode(Point(coordinates=(1, 2), srid="urn:ogc:def:crs:OGC:1.3:CRS84"))

    @pytest.mark.parametrize("srid", [-1, 0x100000000])
    def test_out_of_range_srid(self, srid: int) -> None:
        with pytest.raises(InvalidSrid):
            wkb.encode(Point(coordinates=(1, 2), srid=srid))

    def test_not_a_geometry(self) -> None:
        with pytest.raises(EncodeError):
            wkb.encode({"type": "Point"})  # type: ignore[arg-type]

    def test_try_encode_captures_error(self) -> None:
        result = wkb.try_encode(Point(coordinates=(1, 2), srid="CRS84"))
        assert not result.ok
        assert isinstance(result.error, InvalidSrid)

    def test_all_nan_point_rejected(self) -> None:
        """Test a NaN point is refused rather than written as the empty point."""
        result = wkb.try_encode(Point(coordinates=(float("nan"), float("nan"))))
        assert not result.ok
        assert isinstance(result.error, EncodeError)
        assert "Non-finite" in str(result.error)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_component_rejected(self, value: float) -> None:
        with pytest.raises(EncodeError, match="Non-finite"):
            wkb.encode(LineString(coordinates=((0, 0), (1, value))))

    def test_non_finite_multipoint_member_rejected(self) -> None:
        with pytest.raises(EncodeError):
            wkb.encode(MultiPoint(coordinates=((0, 0), (float("inf"), 1))))

    def test_empty_point_still_written(self) -> None:
        assert wkb.decode(wkb.encode(Point())) == Point()


class TestRoundTrip:
    """Tests that decode(encode(g)) gives g back."""

    @pytest.mark.parametrize("byte_order", ["little", "big"])
    def test_every_geometry(self, every_geometry: list[Geometry], byte_order: str) -> None:
        for geometry in every_geometry:
            assert wkb.decode(wkb.encode(geometry, byte_order=byte_order)) == geometry

    def test_every_geometry_with_srid(self, every_geometry: list[Geometry]) -> None:
        for geometry in every_geometry:
            with_srid = geometry.model_copy(update={"srid": 4326})
            assert wkb.decode(wkb.encode(with_srid)) == with_srid

    def test_hex_round_trip(self, every_geometry: list[Geometry]) -> None:
        for geometry in every_geometry:
            assert wkb.decode_hex(wkb.encode_hex(geometry)) == geometry
