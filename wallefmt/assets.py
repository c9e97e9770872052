"""Font, game object, material and particle data formats."""

from __future__ import annotations

from wallefmt.common import RESOURCE_OBJECT, VEC3F, VEC4F, HeaderBodyFormat
from wallefmt.schema import F32, U8, U16, U32, FixedVec, Optional, PascalArray, Struct

_FONTS_CHARACTER = Struct(
    "FontsZCharacter",
    [
        ("id", U32),
        ("material_index", U32),
        ("point", F32),
        ("height", F32),
        ("y", F32),
        ("x", F32),
        ("width", F32),
    ],
)

FONTS = Struct(
    "FontsZ",
    [
        ("characters", PascalArray(_FONTS_CHARACTER)),
        ("material_crc32s", PascalArray(U32)),
    ],
    exact=True,
    hard_links=lambda v: list(v["material_crc32s"]),
)

GAME_OBJ = Struct(
    "GameObjZ",
    [("node_crc32s", PascalArray(U32))],
    exact=True,
    soft_links=lambda v: list(v["node_crc32s"]),
)


def _texture_flag_is(*flags: int):
    return lambda ctx, reader: ctx["texture_flag"] in flags


def _texture_flag_other(ctx: dict, reader) -> bool:
    return ctx["texture_flag"] not in (1, 3)


MATERIAL = Struct(
    "MaterialZ",
    [
        ("color", VEC4F),
        ("emission", VEC3F),
        ("unknown0", U32),
        ("uv_transform_matrix", FixedVec(F32, 9)),
        ("unknown0s", FixedVec(F32, 8)),
        ("unknown1s", FixedVec(U32, 3)),
        ("diffuse_translation", FixedVec(F32, 2)),
        ("diffuse_scale", FixedVec(F32, 2)),
        ("diffuse_rotation", F32),
        ("flags", FixedVec(U32, 3)),
        ("texture_flag", U8),
        ("diffuse_bitmap_crc32", U32),
        ("unknown2s", Optional(FixedVec(U32, 7), _texture_flag_is(1))),
        ("unknown3", Optional(U32, _texture_flag_is(3))),
        ("unknown4s", Optional(FixedVec(U32, 6), _texture_flag_is(3))),
        ("unknown5s", Optional(FixedVec(U32, 3), _texture_flag_other)),
    ],
    exact=True,
    hard_links=lambda v: [v["diffuse_bitmap_crc32"]] if v["diffuse_bitmap_crc32"] else [],
)

PARTICLES_DATA = Struct(
    "ParticlesDataZ",
    [
        ("equals257", U32),
        ("position_x", F32),
        ("position_y", F32),
        ("position_z", F32),
        ("velocity_x", F32),
        ("velocity_y", F32),
        ("velocity_z", F32),
        ("shorts", PascalArray(U16)),
        ("zero", U32),
    ],
    exact=True,
)


def fonts_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, FONTS)


def game_obj_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, GAME_OBJ)


def material_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, MATERIAL)


def particles_data_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, PARTICLES_DATA)