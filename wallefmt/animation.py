"""Animation, material animation and material animation set formats."""

from __future__ import annotations

from wallefmt.common import RESOURCE_OBJECT, VEC3I32, HeaderBodyFormat
from wallefmt.schema import F32, U8, U16, U32, FixedVec, PascalArray, Scalar, Struct


def _unknowns(name: str, count: int, scalar: Scalar) -> Struct:
    """A record of scalars named unknown0, unknown1, ..."""
    return Struct(name, [(f"unknown{index}", scalar) for index in range(count)])


_ANIM_UNKNOWN0 = Struct("AnimationZUnknown0", [("data", FixedVec(U8, 40))])
_ANIM_PAIR = _unknowns("AnimationZUnknown", 2, U32)
_ANIM_UNKNOWN2 = Struct("AnimationZUnknown2", [("unknowns", FixedVec(_ANIM_PAIR, 3))])
_ANIM_UNKNOWN1 = _unknowns("AnimationZUnknown1", 5, U32)
_ANIM_UNKNOWN4 = Struct(
    "AnimationZUnknown4",
    [("unknown0", U32), ("unknown1s", PascalArray(_ANIM_UNKNOWN1))],
)
_ANIM_UNKNOWN5 = _unknowns("AnimationZUnknown5", 3, U32)
_ANIM_UNKNOWN12 = _unknowns("AnimationZUnknown12", 7, U32)

ANIMATION = Struct(
    "AnimationZ",
    [
        ("a", U32),
        ("b", U32),
        ("c", U16),
        ("d", U16),
        ("vectors", PascalArray(VEC3I32)),
        ("unknown0s", PascalArray(_ANIM_UNKNOWN0)),
        ("unknown2flag", U16),
        ("unknown2s", PascalArray(_ANIM_UNKNOWN2)),
        ("unknown3flag", U16),
        ("unknown3s", PascalArray(_ANIM_UNKNOWN2)),
        ("unknown4s", PascalArray(_ANIM_UNKNOWN4)),
        ("unknown5flag", U16),
        ("unknown5s", PascalArray(_ANIM_UNKNOWN5)),
        ("unknown6flag", U16),
        ("unknown6s", PascalArray(_ANIM_UNKNOWN5)),
        ("unknown7flag", U16),
        ("unknown7s", PascalArray(_ANIM_UNKNOWN2)),
        ("unknown8flag", U16),
        ("unknown8s", PascalArray(_ANIM_UNKNOWN2)),
        ("unknown9flag", U16),
        ("unknown9s", PascalArray(_ANIM_UNKNOWN5)),
        ("unknown10flag", U16),
        ("unknown10s", PascalArray(_ANIM_UNKNOWN5)),
        ("unknown11flag", U16),
        ("unknown11s", PascalArray(_ANIM_UNKNOWN5)),
        ("unknown12s", PascalArray(_ANIM_UNKNOWN12)),
        ("unknown13s", PascalArray(_ANIM_UNKNOWN12)),
        ("unknown14s", PascalArray(_ANIM_UNKNOWN5)),
        ("unknown15s", PascalArray(_ANIM_UNKNOWN5)),
    ],
    exact=True,
)

_MA_UNKNOWN0 = _unknowns("MaterialAnimZUnknown0", 2, F32)
_MA_UNKNOWN23 = _unknowns("MaterialAnimZUnknown23", 3, F32)
_MA_UNKNOWN56 = _unknowns("MaterialAnimZUnknown56", 4, F32)
_MA_UNKNOWN89 = _unknowns("MaterialAnimZUnknown89", 5, F32)
_MA_UNKNOWN1011 = _unknowns("MaterialAnimZUnknown1011", 2, F32)
_MA_COLOR = Struct("MaterialAnimZColor", [("unknown", F32), ("rgba", U32)])

MATERIAL_ANIM = Struct(
    "MaterialAnimZ",
    [
        ("unknown0s", PascalArray(_MA_UNKNOWN0)),
        ("unknown2flag", U16),
        ("unknown2s", PascalArray(_MA_UNKNOWN23)),
        ("unknown3flag", U16),
        ("unknown3s", PascalArray(_MA_UNKNOWN23)),
        ("unknown4flag", U16),
        ("unknown4s", PascalArray(_MA_COLOR)),
        ("unknown5flag", U16),
        ("unknown5s", PascalArray(_MA_UNKNOWN56)),
        ("unknown6flag", U16),
        ("unknown6s", PascalArray(_MA_UNKNOWN56)),
        ("colorsflag", U16),
        ("colors", PascalArray(_MA_COLOR)),
        ("unknown8flag", U16),
        ("unknown8s", PascalArray(_MA_UNKNOWN89)),
        ("unknown9flag", U16),
        ("unknown9s", PascalArray(_MA_UNKNOWN89)),
        ("unknown10s", PascalArray(_MA_UNKNOWN1011)),
        ("unknown11s", PascalArray(_MA_UNKNOWN1011)),
        ("material_crc32", U32),
        ("unknown_float", F32),
        ("unknown15", U8),
    ],
    exact=True,
)

_MATERIAL_OBJ_ENTRY = Struct(
    "MaterialObjZEntry",
    [
        ("array_name_crc32", U32),
        ("material_anim_crc32s", PascalArray(U32)),
    ],
)

MATERIAL_OBJ = Struct(
    "MaterialObjZ",
    [("entries", PascalArray(_MATERIAL_OBJ_ENTRY))],
    exact=True,
)


def animation_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, ANIMATION)


def material_anim_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, MATERIAL_ANIM)


def material_obj_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, MATERIAL_OBJ)