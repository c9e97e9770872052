"""World and world reference formats."""

from __future__ import annotations

from wallefmt.common import MAT4F, OBJECT, RESOURCE_OBJECT, VEC3F, HeaderBodyFormat
from wallefmt.schema import U8, U32, PascalArray, PascalStringNull, Struct

_WORLD_UNKNOWN2 = Struct(
    "WorldZUnknown2",
    [
        ("placeholder0", U32),
        ("placeholder1", U32),
        ("index", U32),
        ("placeholder2", U32),
        ("unknown4", U32),
        ("zero", U32),
    ],
)

_LINK_FIELDS = (
    "node_crc32",
    "warp_crc32",
    "game_obj_crc32",
    "unused14",
    "gen_world_crc32",
    "node_crc321",
)

WORLD = Struct(
    "WorldZ",
    [(key, U32) for key in _LINK_FIELDS]
    + [
        ("unused17s", PascalArray(U32)),
        ("unuseds", PascalArray(U8)),
        ("unknown0", MAT4F),
        ("indices0", PascalArray(U32)),
        ("unknown2s", PascalArray(_WORLD_UNKNOWN2)),
        ("unknown3", MAT4F),
        ("indices1", PascalArray(U32)),
        ("unknown5s", PascalArray(_WORLD_UNKNOWN2)),
        ("unused6s", PascalArray(U32)),
        ("unused7s", PascalArray(U32)),
        ("unused8s", PascalArray(U32)),
        ("unused9s", PascalArray(U32)),
        ("unused10s", PascalArray(U32)),
        ("spline_graph_crc32", PascalArray(U32)),
        ("unused12s", PascalArray(U32)),
        ("material_anim_crc32", PascalArray(U32)),
    ],
    exact=True,
)

_UUID_PAIR = Struct("UUIDPair", [("uuid0", U32), ("uuid1", U32)])


def _world_ref_soft_links(value: dict) -> list[int]:
    links = [value[key] for key in _LINK_FIELDS if value[key] != 0]
    links.extend(value["node_crc32s"])
    return links


WORLD_REF = Struct(
    "WorldRefZ",
    [(key, U32) for key in _LINK_FIELDS]
    + [
        ("unused17s", PascalArray(U32)),
        ("unuseds", PascalArray(U8)),
        ("mats", PascalArray(MAT4F)),
        ("point_a", VEC3F),
        ("point_b", VEC3F),
        ("uuid_pairs", PascalArray(_UUID_PAIR)),
        ("init_script", PascalStringNull()),
        ("node_crc32s", PascalArray(U32)),
        ("zero", U32),
    ],
    exact=True,
    soft_links=_world_ref_soft_links,
)


def world_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, WORLD)


def world_ref_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, WORLD_REF)