"""Level-of-detail object formats and their data resource."""

from __future__ import annotations

from typing import Callable

from wallefmt.common import DYN_BOX, DYN_SPHERE, OBJECT, RESOURCE_OBJECT, HeaderBodyFormat
from wallefmt.schema import (
    F32,
    U8,
    U32,
    FixedVec,
    Hidden,
    Optional,
    PascalArray,
    Scalar,
    Struct,
)

_SOUND_ENTRY = Struct("LodZSoundEntry", [("id", U32), ("sound_crc32", U32)])
_LOD_UNKNOWN4 = Struct("LodZUnknown4", [("a", U32), ("b", U32)])


def _nonzero(name: str) -> Callable:
    """Condition: the earlier field called name is not zero."""
    return lambda ctx, reader: ctx[name] != 0


def _presence_flag(name: str) -> Callable[[dict], int]:
    """Flag written before an optional field: 1 when it is present, else 0."""
    return lambda value: 0 if value.get(name) is None else 1


def _lod_soft_links(value: dict) -> list[int]:
    links = list(value["skin_crc32s"])
    for key in ("sound_entries", "sound_entries1"):
        entries = value.get(key)
        if entries is not None:
            links.extend(entry["sound_crc32"] for entry in entries)
    if value["user_define_crc32"] != 0:
        links.append(value["user_define_crc32"])
    return links


LOD = Struct(
    "LodZ",
    [
        ("dyn_spheres", PascalArray(DYN_SPHERE)),
        ("dyn_boxes", PascalArray(DYN_BOX)),
        ("close_x", F32),
        ("close_y", F32),
        ("close_z", F32),
        ("skin_crc32s", PascalArray(U32)),
        ("zero", U32),
        ("sound_entries_option", Hidden(U32, _presence_flag("sound_entries"))),
        (
            "sound_entries",
            Optional(PascalArray(_SOUND_ENTRY), _nonzero("sound_entries_option")),
        ),
        ("sound_entries_option1", Hidden(U32, _presence_flag("sound_entries1"))),
        (
            "sound_entries1",
            Optional(PascalArray(_SOUND_ENTRY), _nonzero("sound_entries_option1")),
        ),
        ("user_define_crc32", U32),
    ],
    exact=True,
    soft_links=_lod_soft_links,
)


def _lod_alt(name: str, flag: Scalar) -> Struct:
    """The alternative LOD layouts, which differ only in the width of their flags."""
    return Struct(
        name,
        [
            ("x", U32),
            ("unused0", Optional(U32, _nonzero("x"))),
            ("sphere_col_node_optional", Optional(DYN_SPHERE, _nonzero("x"))),
            ("sphere_col_nodes", PascalArray(DYN_SPHERE)),
            ("box_cols", PascalArray(DYN_BOX)),
            ("unknown2", U32),
            ("unknown3", U32),
            ("unknown4", U32),
            ("u0", F32),
            ("skin_crc32s", PascalArray(U32)),
            ("u1", U32),
            ("sound_entries_option", Hidden(flag, _presence_flag("sound_entries"))),
            (
                "sound_entries",
                Optional(PascalArray(_SOUND_ENTRY), _nonzero("sound_entries_option")),
            ),
            ("unknown4_option", Hidden(flag, _presence_flag("unknown4s"))),
            (
                "unknown4s",
                Optional(PascalArray(_LOD_UNKNOWN4), _nonzero("unknown4_option")),
            ),
            ("unknown5", U32),
        ],
        exact=True,
    )


LOD_ALT = _lod_alt("LodZAlt", U8)
LOD_ALT_ALT = _lod_alt("LodZAltAlt", U32)

_OPT = _nonzero("opt")

_LOD_DATA_EXTRAS = [
    ("u1", U32),
    ("zero1", U32),
    ("u2", U32),
    ("zero2", U32),
    ("zero3", U32),
    ("zero4", U32),
    ("scale_x", F32),
    ("scale_y", F32),
    ("scale_z", F32),
    ("zero5", U32),
    ("zero6", U32),
    ("zero7", U32),
    ("u6", U32),
    ("zero8", U32),
    ("zero9", U32),
    ("zero10", U32),
    ("zero11", U32),
]

LOD_DATA = Struct(
    "LodDataZ",
    [
        ("unknown_byte0", U8),
        ("unknown_byte1", U8),
        ("zero_byte0", U8),
        ("zero_byte1", U8),
        ("crc32s", PascalArray(U32)),
        ("zero0", U32),
        ("opt", Hidden(U8, _presence_flag("padding"))),
        ("padding", Optional(FixedVec(U8, 24), _OPT)),
    ]
    + [(name, Optional(field, _OPT)) for name, field in _LOD_DATA_EXTRAS],
    exact=True,
)


def lod_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, LOD)


def lod_format_alt() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, LOD_ALT)


def lod_format_alt_alt() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, LOD_ALT_ALT)


def lod_data_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, LOD_DATA)