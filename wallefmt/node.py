"""Scene graph node formats."""

from __future__ import annotations

from wallefmt.common import (
    COLOR,
    MAT4F,
    QUAT,
    RECT,
    RESOURCE_OBJECT,
    SPHERE,
    VEC3F,
    HeaderBodyFormat,
)
from wallefmt.schema import F32, I16, U8, U16, U32, FixedVec, Struct

_NODE_LINKS = (
    "parent_crc32",
    "head_child_crc32",
    "prev_node_crc32",
    "next_node_crc32",
    "object_crc32",
    "user_define_crc32",
    "light_data_crc32",
    "bitmap_crc32",
    "unknown_crc32",
)


def _node_soft_links(value: dict) -> list[int]:
    return [value[key] for key in _NODE_LINKS if value[key] != 0]


NODE = Struct(
    "NodeZ",
    [(key, U32) for key in _NODE_LINKS]
    + [
        ("inverse_world_transform", MAT4F),
        ("unknown1", VEC3F),
        ("collide_seads_id0", U32),
        ("unknown2", VEC3F),
        ("placeholder_world_matrix_ptr", U32),
        ("unknown3", VEC3F),
        ("display_seads_id0", U32),
        ("unknown4", MAT4F),
        ("translation", VEC3F),
        ("flags", U32),
        ("rotation", QUAT),
        ("scale", F32),
        ("other_scale", F32),
        ("one_over_scale", F32),
        ("unknown5", F32),
        ("color", COLOR),
        ("sphere", SPHERE),
        ("display_seads_rect", RECT),
        ("collide_seads_rect", RECT),
        ("world_transform", MAT4F),
        ("collide_seads_id1", U32),
        ("display_seads_id1", U32),
        ("unknown6", I16),
        ("unknown7", U32),
        ("unknown8", U32),
    ],
    exact=True,
    soft_links=_node_soft_links,
)

NODE_ALT = Struct(
    "NodeZAlt",
    [
        ("parent_crc32", U32),
        ("some_node_crc320", U32),
        ("some_node_crc321", U32),
        ("some_node_crc322", U32),
        ("some_crc320", U32),
        ("some_crc321", U32),
        ("some_crc322", U32),
        ("some_crc323", U32),
        ("some_crc324", U32),
        ("mat0", MAT4F),
        ("unknown0s", FixedVec(U8, 208)),
        ("mat1", MAT4F),
        ("unknown2", U32),
        ("unknown3", U32),
        ("unknown4", U16),
        ("unknown5", U32),
        ("unknown6", U32),
    ],
    exact=True,
)


def node_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, NODE)


def node_format_alt() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, NODE_ALT)