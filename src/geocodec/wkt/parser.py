"""Well-known text parsing.

A small tokenizer feeds a recursive-descent parser. The grammar accepted::

    text       := [ "SRID" "=" integer ";" ] geometry
    geometry   := keyword [ "Z" ] ( "EMPTY" | body )
    keyword    := POINT | LINESTRING | POLYGON | MULTIPOINT
                | MULTILINESTRING | MULTIPOLYGON | GEOMETRYCOLLECTION

Keywords are case-insensitive and the Z tag may be glued (``POINTZ``).
The parser collects raw number lists and hands them to the shared
coordinate helpers, so leaf arity rules match the GeoJSON decoder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from geocodec.exceptions import MalformedText, UnrecognizedType
from geocodec.geometry.coordinates import (
    map_nested,
    pair_from_sequence,
    triple_from_sequence,
)
from geocodec.geometry.primitives import (
    MAX_NESTING_DEPTH,
    Geometry,
    GeometryCollection,
    PointZ,
    geometry_class,
)

KEYWORDS: dict[str, str] = {
    "POINT": "Point",
    "LINESTRING": "LineString",
    "POLYGON": "Polygon",
    "MULTIPOINT": "MultiPoint",
    "MULTILINESTRING": "MultiLineString",
    "MULTIPOLYGON": "MultiPolygon",
    "GEOMETRYCOLLECTION": "GeometryCollection",
}

_TOKEN_RE = re.compile(
    r"""
    (?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)
    | (?P<word>[A-Za-z]+)
    | (?P<punct>[(),;=])
    | (?P<space>\s+)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        kind: "number", "word", "punct" or "end".
        text: Source text of the token (upper-cased for words).
        position: Character offset in the input.
    """

    kind: str
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split well-known text into tokens, ending with an "end" token.

    Raises:
        MalformedText: On a character that starts no token.
    """
    tokens: list[Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise MalformedText(f"Unexpected character {text[position]!r}", text, position)
        kind = match.lastgroup or "space"
        if kind != "space":
            value = match.group()
            tokens.append(Token(kind, value.upper() if kind == "word" else value, position))
        position = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


class WKTParser:
    """Recursive-descent parser for one well-known text geometry."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _error(self, message: str, token: Token | None = None) -> MalformedText:
        token = token or self._peek()
        found = token.text or "end of input"
        return MalformedText(f"{message}, found {found!r}", self.text, token.position)

    def _expect(self, text: str) -> Token:
        token = self._peek()
        if token.text != text:
            raise self._error(f"Expected {text!r}")
        return self._advance()

    def _accept(self, text: str) -> bool:
        if self._peek().text == text:
            self.index += 1
            return True
        return False

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def parse(self) -> Geometry:
        """Parse the whole input.

        Raises:
            MalformedText: On any syntax error or trailing input,
                or GeometryCollections nested too deeply.
            UnrecognizedType: On an unknown keyword or an M/ZM dimension.
            MalformedCoordinate: If a coordinate has the wrong arity.
        """
        srid = self._parse_srid()
        geometry = self._parse_geometry(srid)
        if self._peek().kind != "end":
            raise self._error("Expected end of input")
        return geometry

    def _parse_srid(self) -> int | None:
        if self._peek().text != "SRID":
            return None
        self._advance()
        self._expect("=")
        token = self._advance()
        if token.kind != "number" or not token.text.lstrip("+-").isdigit():
            raise self._error("Expected an integer SRID", token)
        self._expect(";")
        return int(token.text)

    def _parse_tag(self) -> tuple[str, bool]:
        token = self._advance()
        if token.kind != "word":
            raise self._error("Expected a geometry keyword", token)

        word = token.text
        if word in KEYWORDS:
            has_z = self._accept("Z")
            if self._peek().text in ("M", "ZM"):
                raise UnrecognizedType(f"{KEYWORDS[word]} {self._peek().text}", self.text)
            return KEYWORDS[word], has_z
        if word.endswith("Z") and word[:-1] in KEYWORDS:
            return KEYWORDS[word[:-1]], True
        raise UnrecognizedType(word, self.text)

    def _parse_geometry(self, srid: int | None, depth: int = 0) -> Geometry:
        start = self._peek()
        type_name, has_z = self._parse_tag()

        if type_name == "GeometryCollection":
            if depth >= MAX_NESTING_DEPTH:
                raise MalformedText(
                    f"GeometryCollection nesting exceeds {MAX_NESTING_DEPTH} levels",
                    self.text,
                    start.position,
                )
            members: list[Geometry] = []
            if not self._accept("EMPTY"):
                self._expect("(")
                members.append(self._parse_geometry(None, depth + 1))
                while self._accept(","):
                    members.append(self._parse_geometry(None, depth + 1))
                self._expect(")")
            return GeometryCollection(geometries=tuple(members), srid=srid)

        cls = geometry_class(type_name, has_z)
        if self._accept("EMPTY"):
            return cls(coordinates=None if type_name == "Point" else (), srid=srid)

        if type_name == "Point":
            raw = self._parse_point_body()
            # An untagged point with three numbers is three-dimensional
            if not has_z and len(raw) == 3:
                return PointZ(coordinates=triple_from_sequence(raw), srid=srid)
        elif type_name == "LineString":
            raw = self._parse_coordinate_list()
        elif type_name == "MultiPoint":
            raw = self._parse_multipoint_body()
        elif type_name in ("Polygon", "MultiLineString"):
            raw = self._parse_list(self._parse_coordinate_list)
        else:
            raw = self._parse_list(lambda: self._parse_list(self._parse_coordinate_list))

        leaf = triple_from_sequence if has_z else pair_from_sequence
        return cls(coordinates=map_nested(leaf, raw, cls.depth), srid=srid)

    def _parse_coordinate(self) -> list[float]:
        numbers: list[float] = []
        while self._peek().kind == "number":
            numbers.append(float(self._advance().text))
        if not numbers:
            raise self._error("Expected a coordinate")
        return numbers

    def _parse_point_body(self) -> list[float]:
        self._expect("(")
        coordinate = self._parse_coordinate()
        self._expect(")")
        return coordinate

    def _parse_list(self, item: Any) -> list[Any]:
        """Parse ``( item {, item} )``."""
        self._expect("(")
        items = [item()]
        while self._accept(","):
            items.append(item())
        self._expect(")")
        return items

    def _parse_coordinate_list(self) -> list[list[float]]:
        return self._parse_list(self._parse_coordinate)

    def _parse_multipoint_body(self) -> list[list[float]]:
        # Both MULTIPOINT(1 2, 3 4) and MULTIPOINT((1 2), (3 4)) are in use
        def member() -> list[float]:
            if self._peek().text == "(":
                return self._parse_point_body()
            return self._parse_coordinate()

        return self._parse_list(member)
