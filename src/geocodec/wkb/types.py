"""Well-known binary type words.

The 4-byte type word holds a base code (1-7) plus dimension information:

- ISO codes: 1-7 for 2D, 1001-1007 for Z (written by this package)
- PostGIS EWKB: the 0x80000000 bit marks Z on a base code (read only)

Either form may be OR'd with 0x20000000, meaning a 4-byte SRID follows.
Measured geometries (ISO 2000/3000 ranges, EWKB 0x40000000) are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass

from geocodec.exceptions import UnknownTypeCode

SRID_FLAG = 0x20000000
EWKB_Z_FLAG = 0x80000000
EWKB_M_FLAG = 0x40000000
ISO_Z_OFFSET = 1000

_FLAGS = SRID_FLAG | EWKB_Z_FLAG | EWKB_M_FLAG

BASE_CODES: dict[str, int] = {
    "Point": 1,
    "LineString": 2,
    "Polygon": 3,
    "MultiPoint": 4,
    "MultiLineString": 5,
    "MultiPolygon": 6,
    "GeometryCollection": 7,
}
_TYPE_NAMES = {code: name for name, code in BASE_CODES.items()}


@dataclass(frozen=True)
class TypeWord:
    """Decoded geometry type word.

    Attributes:
        type_name: Base geometry type (e.g., "Polygon").
        has_z: Whether coordinates carry a third component.
        has_srid: Whether a 4-byte SRID follows the type word.
    """

    type_name: str
    has_z: bool
    has_srid: bool

    def to_int(self) -> int:
        """Encode as an ISO type word, with the SRID flag if set."""
        code = BASE_CODES[self.type_name]
        if self.has_z:
            code += ISO_Z_OFFSET
        return code | SRID_FLAG if self.has_srid else code


def parse_type_word(word: int) -> TypeWord:
    """Split a raw type word into base type, Z-ness and SRID presence.

    Raises:
        UnknownTypeCode: If the base code or dimension is not supported.

    Example:
        >>> parse_type_word(0x200003E9)
        TypeWord(type_name='Point', has_z=True, has_srid=True)
    """
    if word & EWKB_M_FLAG:
        raise UnknownTypeCode(word, f"Measured geometry type {word:#010x} is not supported")

    dimension, base = divmod(word & ~_FLAGS, ISO_Z_OFFSET)
    type_name = _TYPE_NAMES.get(base)
    if type_name is None or dimension > 1:
        raise UnknownTypeCode(word)

    return TypeWord(
        type_name=type_name,
        has_z=dimension == 1 or bool(word & EWKB_Z_FLAG),
        has_srid=bool(word & SRID_FLAG),
    )
