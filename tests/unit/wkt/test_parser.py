"""Unit tests for well-known text parsing."""

from __future__ import annotations

import pytest

from geocodec import wkt
from geocodec.exceptions import (
    DecodeError,
    MalformedCoordinate,
    MalformedText,
    UnrecognizedType,
)
from geocodec.geometry import (
    MAX_NESTING_DEPTH,
    GeometryCollection,
    LineString,
    LineStringZ,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    MultiPolygonZ,
    Point,
    PointZ,
    Polygon,
)
from geocodec.wkt import Token, tokenize


class TestTokenize:
    """Tests for the tokenizer."""

    def test_tokens_and_positions(self) -> None:
        tokens = tokenize("point (1 -2.5)")
        assert tokens == [
            Token("word", "POINT", 0),
            Token("punct", "(", 6),
            Token("number", "1", 7),
            Token("number", "-2.5", 9),
            Token("punct", ")", 13),
            Token("end", "", 14),
        ]

    def test_exponent_numbers(self) -> None:
        tokens = tokenize("1e+16 .5 -3E-2")
        assert [token.text for token in tokens[:-1]] == ["1e+16", ".5", "-3E-2"]

    def test_unexpected_character(self) -> None:
        with pytest.raises(MalformedText) as exc_info:
            tokenize("POINT(1 2)#")
        assert exc_info.value.position == 10


class TestDecodeSimple:
    """Tests for each geometry keyword."""

    def test_point(self) -> None:
        assert wkt.decode("POINT(1 2)") == Point(coordinates=(1, 2))

    def test_keywords_are_case_insensitive(self) -> None:
        assert wkt.decode("  Point ( 1  2 )  ") == Point(coordinates=(1, 2))

    def test_linestring(self) -> None:
        assert wkt.decode("LINESTRING(0 0, 1 1, 2 0)") == LineString(
            coordinates=((0, 0), (1, 1), (2, 0))
        )

    def test_polygon_with_hole(self) -> None:
        text = "POLYGON((0 0,4 0,4 4,0 0),(1 1,2 1,2 2,1 1))"
        assert wkt.decode(text) == Polygon(
            coordinates=(
                ((0, 0), (4, 0), (4, 4), (0, 0)),
                ((1, 1), (2, 1), (2, 2), (1, 1)),
            )
        )

    @pytest.mark.parametrize(
        "text", ["MULTIPOINT(1 2, 3 4)", "MULTIPOINT((1 2), (3 4))", "MULTIPOINT((1 2), 3 4)"]
    )
    def test_multipoint_forms(self, text: str) -> None:
        assert wkt.decode(text) == MultiPoint(coordinates=((1, 2), (3, 4)))

    def test_multilinestring(self) -> None:
        assert wkt.decode("MULTILINESTRING((0 0,1 1),(2 2,3 3))") == MultiLineString(
            coordinates=(((0, 0), (1, 1)), ((2, 2), (3, 3)))
        )

    def test_multipolygon(self) -> None:
        text = "MULTIPOLYGON(((0 0,1 0,0 1,0 0)),((5 5,6 5,5 6,5 5)))"
        assert wkt.decode(text) == MultiPolygon(
            coordinates=(
                (((0, 0), (1, 0), (0, 1), (0, 0)),),
                (((5, 5), (6, 5), (5, 6), (5, 5)),),
            )
        )

    def test_geometry_collection(self) -> None:
        text = "GEOMETRYCOLLECTION(POINT(1 2),GEOMETRYCOLLECTION(LINESTRING(0 0,1 1)))"
        assert wkt.decode(text) == GeometryCollection(
            geometries=(
                Point(coordinates=(1, 2)),
                GeometryCollection(geometries=(LineString(coordinates=((0, 0), (1, 1))),)),
            )
        )


class TestDecodeDimensions:
    """Tests for the Z tag and untagged third components."""

    @pytest.mark.parametrize("text", ["POINT Z (1 2 3)", "POINTZ(1 2 3)", "point z(1 2 3)"])
    def test_z_tag_forms(self, text: str) -> None:
        assert wkt.decode(text) == PointZ(coordinates=(1, 2, 3))

    def test_untagged_three_number_point(self) -> None:
        assert wkt.decode("POINT(1 2 3)") == PointZ(coordinates=(1, 2, 3))

    def test_untagged_linestring_drops_z(self) -> None:
        assert wkt.decode("LINESTRING(0 0 9,1 1 9)") == LineString(
            coordinates=((0, 0), (1, 1))
        )

    def test_tagged_linestring(self) -> None:
        assert wkt.decode("LINESTRING Z (0 0 0,1 1 1)") == LineStringZ(
            coordinates=((0, 0, 0), (1, 1, 1))
        )

    def test_tagged_multipolygon(self) -> None:
        assert wkt.decode("MULTIPOLYGONZ(((0 0 1,1 0 1,0 1 1,0 0 1)))") == MultiPolygonZ(
            coordinates=((((0, 0, 1), (1, 0, 1), (0, 1, 1), (0, 0, 1)),),)
        )

    def test_z_tag_requires_three_numbers(self) -> None:
        with pytest.raises(MalformedCoordinate):
            wkt.decode("LINESTRING Z (0 0,1 1)")

    def test_single_number_rejected(self) -> None:
        with pytest.raises(MalformedCoordinate):
            wkt.decode("POINT(1)")

    @pytest.mark.parametrize(
        "text", ["POINT M (1 2 3)", "POINT ZM (1 2 3 4)", "POINTM(1 2 3)", "POINTZM(1 2 3 4)"]
    )
    def test_measured_rejected(self, text: str) -> None:
        with pytest.raises(UnrecognizedType):
            wkt.decode(text)


class TestDecodeEmptyAndSrid:
    """Tests for EMPTY bodies and the SRID prefix."""

    def test_empty_point(self) -> None:
        assert wkt.decode("POINT EMPTY") == Point(coordinates=None)

    def test_empty_point_z(self) -> None:
        assert wkt.decode("POINT Z EMPTY") == PointZ(coordinates=None)

    def test_empty_polygon(self) -> None:
        assert wkt.decode("POLYGON EMPTY") == Polygon(coordinates=())

    def test_empty_collection(self) -> None:
        assert wkt.decode("GEOMETRYCOLLECTION EMPTY") == GeometryCollection()

    def test_srid_prefix(self) -> None:
        assert wkt.decode("SRID=4326;POINT(1 2)") == Point(coordinates=(1, 2), srid=4326)

    def test_srid_applies_to_collection_only(self) -> None:
        collection = wkt.decode("SRID=3857;GEOMETRYCOLLECTION(POINT(1 2))")
        assert collection.srid == 3857
        assert collection.geometries[0].srid is None  # type: ignore[attr-defined]

    def test_non_integer_srid(self) -> None:
        with pytest.raises(MalformedText, match="integer SRID"):
            wkt.decode("SRID=4326.5;POINT(1 2)")


class TestDecodeErrors:
    """Tests for malformed input."""

    def test_unknown_keyword(self) -> None:
        with pytest.raises(UnrecognizedType) as exc_info:
            wkt.decode("CIRCLE(0 0)")
        assert exc_info.value.type_name == "CIRCLE"

    def test_missing_paren_position(self) -> None:
        with pytest.raises(MalformedText) as exc_info:
            wkt.decode("LINESTRING(0 0,1 1")
        assert exc_info.value.position == 18

    def test_trailing_input(self) -> None:
        with pytest.raises(MalformedText, match="end of input"):
            wkt.decode("POINT(1 2) POINT(3 4)")

    def test_empty_text(self) -> None:
        with pytest.raises(MalformedText):
            wkt.decode("")

    def test_not_a_string(self) -> None:
        with pytest.raises(DecodeError):
            wkt.decode(b"POINT(1 2)")  # type: ignore[arg-type]

    def test_try_decode(self) -> None:
        assert wkt.try_decode("POINT(1 2)").value == Point(coordinates=(1, 2))
        result = wkt.try_decode("POINT(")
        assert not result.ok
        assert isinstance(result.error, MalformedText)


class TestNestingLimit:
    """Tests for the GeometryCollection nesting limit."""

    def test_runaway_nesting_rejected(self) -> None:
        """Test unclosed nesting fails at the first collection past the limit."""
        result = wkt.try_decode("GEOMETRYCOLLECTION(" * 2000)
        assert not result.ok
        assert isinstance(result.error, MalformedText)
        assert result.error.position == MAX_NESTING_DEPTH * len("GEOMETRYCOLLECTION(")
        assert "nesting exceeds" in str(result.error)

    def test_nesting_at_limit_accepted(self) -> None:
        depth = MAX_NESTING_DEPTH - 1
        text = "GEOMETRYCOLLECTION(" * depth + "GEOMETRYCOLLECTION EMPTY" + ")" * depth
        result = wkt.try_decode(text)
        assert result.ok
        assert isinstance(result.value, GeometryCollection)
