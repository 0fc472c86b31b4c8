"""Tests for geocodec.geometry.srid."""

from __future__ import annotations

from typing import Any

import pytest

from geocodec.exceptions import InvalidSrid, SridError, UnsupportedCrs
from geocodec.geometry.srid import crs_from_srid, resolve_srid


def _named(name: Any) -> dict[str, Any]:
    return {"type": "name", "properties": {"name": name}}


class TestResolveSrid:
    """Tests for resolve_srid."""

    def test_none(self) -> None:
        assert resolve_srid(None) is None

    def test_epsg_name(self) -> None:
        assert resolve_srid(_named("EPSG:4326")) == 4326

    def test_epsg_name_is_int(self) -> None:
        assert isinstance(resolve_srid(_named("EPSG:3857")), int)

    def test_other_name_returned_raw(self) -> None:
        name = "urn:ogc:def:crs:OGC:1.3:CRS84"
        assert resolve_srid(_named(name)) == name

    @pytest.mark.parametrize("name", ["EPSG:", "EPSG:abc", "EPSG:43x6", "EPSG:-1"])
    def test_non_numeric_epsg(self, name: str) -> None:
        with pytest.raises(InvalidSrid):
            resolve_srid(_named(name))

    @pytest.mark.parametrize(
        "crs",
        [
            {"type": "link", "properties": {"href": "http://example.com/crs"}},
            {"type": "name"},
            {"type": "name", "properties": {}},
            {"type": "name", "properties": {"name": 4326}},
            "EPSG:4326",
            4326,
        ],
    )
    def test_unsupported_shapes(self, crs: Any) -> None:
        """Test any shape other than a named CRS is rejected, not ignored."""
        with pytest.raises(UnsupportedCrs) as exc_info:
            resolve_srid(crs)
        assert exc_info.value.value == crs

    def test_errors_share_base(self) -> None:
        assert issubclass(InvalidSrid, SridError)
        assert issubclass(UnsupportedCrs, SridError)


class TestCrsFromSrid:
    """Tests for crs_from_srid."""

    def test_none(self) -> None:
        assert crs_from_srid(None) is None

    def test_int(self) -> None:
        assert crs_from_srid(4326) == _named("EPSG:4326")

    def test_str(self) -> None:
        assert crs_from_srid("urn:x") == _named("urn:x")

    @pytest.mark.parametrize("srid", [4326, 3857, "urn:ogc:def:crs:OGC::CRS84"])
    def test_reverses_resolve(self, srid: int | str) -> None:
        assert resolve_srid(crs_from_srid(srid)) == srid
