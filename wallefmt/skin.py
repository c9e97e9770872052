"""Skin format: a skinned mesh header and its bone and section tables."""

from __future__ import annotations

from pathlib import Path

from wallefmt.common import (
    MAT4F,
    SPHERE,
    Links,
    ObjectFormat,
    PackedObject,
    json_member,
    read_object_json,
    write_object_json,
)
from wallefmt.schema import F32, U8, U16, U32, FixedVec, PascalArray, Struct

HEADER_KEY = "skin_header"
SKIN_KEY = "skin"

_DYN_ARRAY = Struct("DynArrayZ", [("size_capacity", U32), ("ptr", U32)])

_BLEND_UNKNOWN0 = Struct("BlendUnknown0", [("unknown0", U32), ("unknown1", F32)])

_OBJECT_BLEND = Struct(
    "ObjectBlend",
    [
        ("unknown0", U16),
        ("unknown1s", PascalArray(_BLEND_UNKNOWN0)),
        ("unknown2s", PascalArray(_BLEND_UNKNOWN0)),
    ],
)

_BONE = Struct(
    "BoneZ",
    [("bone_name_crc32", U32), ("unknown0s", PascalArray(_OBJECT_BLEND))],
)

_SUBSECTION = Struct(
    "SkinZSkinSubsection",
    [
        ("material_link_crc32", U32),
        ("bone_names_crc32", FixedVec(U32, 7)),
        ("placeholder_morph_packet_da", _DYN_ARRAY),
        ("morph_packets", PascalArray(FixedVec(U32, 2))),
    ],
)

SKIN = Struct(
    "SkinZ",
    [
        ("mesh_crc32s", PascalArray(U32)),
        ("unknown0s", PascalArray(FixedVec(U8, 8))),
        ("bones", PascalArray(_BONE)),
        ("is_class_id", U8),
        ("matrix_cache_check", U32),
        ("skin_sections", PascalArray(PascalArray(_SUBSECTION))),
    ],
    soft_links=lambda v: list(v["mesh_crc32s"]),
)

SKIN_HEADER = Struct(
    "SkinZHeader",
    [
        ("friendly_name_crc32", U32),
        ("crc32s", PascalArray(U8)),
        ("skel_crc32", U32),
        ("sphere_local", SPHERE),
        ("unknown0", MAT4F),
        ("fade_out_distance", F32),
        ("flags", U32),
        ("skin_type", U16),
    ],
    soft_links=lambda v: [v["skel_crc32"]],
)


class SkinObjectFormat(ObjectFormat):
    """Skin objects stored as one object.json with header and body."""

    def pack(self, input_path: str | Path) -> PackedObject:
        obj = read_object_json(input_path)
        header_value = SKIN_HEADER.from_json(json_member(obj, HEADER_KEY))
        skin_value = SKIN.from_json(json_member(obj, SKIN_KEY))
        return PackedObject(
            SKIN_HEADER.encode(header_value),
            SKIN.encode(skin_value),
            SKIN_HEADER.hard_links(header_value),
            SKIN_HEADER.soft_links(header_value),
        )

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        header_value = SKIN_HEADER.decode(header)
        skin_value = SKIN.decode(body)
        write_object_json(
            output_path,
            {
                HEADER_KEY: SKIN_HEADER.to_json(header_value),
                SKIN_KEY: SKIN.to_json(skin_value),
            },
        )
        return Links(
            SKIN_HEADER.hard_links(header_value), SKIN_HEADER.soft_links(header_value)
        )