"""World generation, road, spline and rotating shape formats."""

from __future__ import annotations

from wallefmt.common import (
    MAT4F,
    OBJECT,
    QUAT,
    RESOURCE_OBJECT,
    VEC2F,
    VEC3F,
    HeaderBodyFormat,
)
from wallefmt.schema import (
    F32,
    I8,
    I16,
    I32,
    U8,
    U16,
    U32,
    FixedStringNull,
    FixedVec,
    Hidden,
    PascalArray,
    PascalStringNull,
    Struct,
)

_CATEGORY = Struct(
    "Category",
    [
        ("name", PascalStringNull()),
        ("node_crc32s_arrays", PascalArray(PascalArray(U32))),
    ],
)

_GEN_WORLD_UNKNOWN8 = Struct(
    "GenWorldZUnknown8",
    [
        ("zero", U32),
        ("mat", MAT4F),
        ("quat", QUAT),
        ("vec", VEC3F),
        ("unknown1", F32),
        ("unknown3", I32),
        ("unknown5", I32),
        ("unknown6", I32),
        ("unknown7", I32),
        ("unknown8", I32),
        ("unknown9", I32),
        ("unknown4", I16),
        ("unknown10", I32),
        ("unknown2", I8),
    ],
)

_GEN_WORLD_UNKNOWN10 = Struct(
    "GenWorldZUnknown10",
    [
        ("unknown0", U32),
        ("unknown1s", FixedVec(U32, 8)),
        ("unknown2", U32),
        ("unknown3", U32),
        ("unknown4", U32),
    ],
)

_COORDS_LINE_SEGMENT = Struct(
    "CoordsLineSegment",
    [("coords_index_a", U32), ("coords_index_b", U32)],
)

_REGION = Struct(
    "Region",
    [
        ("name", FixedStringNull(31)),
        ("always_255", U8),
        ("coords_line_segments_indices", PascalArray(U32)),
    ],
)


def _gen_world_soft_links(value: dict) -> list[int]:
    links = [
        value[key]
        for key in ("node_crc32", "user_define_crc32", "gw_road_crc32")
        if value[key] != 0
    ]
    links.extend(value["binary_crc32s"])
    links.extend(value["bitmap_crc32s"])
    links.extend(value["material_crc32s"])
    return links


GEN_WORLD = Struct(
    "GenWorldZ",
    [
        ("node_crc32", U32),
        ("user_define_crc32", U32),
        ("gw_road_crc32", U32),
        ("binary_crc32s", PascalArray(U32)),
        ("bitmap_crc32s", PascalArray(U32)),
        ("material_crc32s", PascalArray(U32)),
        ("equals41", U32),
        ("categories", PascalArray(_CATEGORY)),
        ("unknown8s", PascalArray(_GEN_WORLD_UNKNOWN8)),
        ("mats", PascalArray(MAT4F)),
        ("unknown10s", PascalArray(_GEN_WORLD_UNKNOWN10)),
        ("coords", PascalArray(VEC2F)),
        ("coords_line_segments", PascalArray(_COORDS_LINE_SEGMENT)),
        ("regions", PascalArray(_REGION)),
    ],
    exact=True,
    soft_links=_gen_world_soft_links,
)

_GW_ROAD_POINT = Struct("GwRoadZPoint", [("encoded_vec2hf", U32), ("a", U8)])

_GW_ROAD_ROAD = Struct(
    "GwRoadZRoad",
    [
        ("road_type", U8),
        ("point_count", U16),
        ("points", FixedVec(_GW_ROAD_POINT, lambda ctx, r: ctx["point_count"])),
    ],
)

_GW_ROAD_UNKNOWN5 = Struct(
    "GwRoadZUnknown5",
    [(f"unknown{index}", U32) for index in range(8)]
    + [("unknown8s", FixedVec(U32, lambda ctx, r: ctx["unknown0"] & 0xFFFF))],
)

GW_ROAD = Struct(
    "GwRoadZ",
    [
        ("road_count", Hidden(U32, lambda v: len(v["roads"]))),
        ("gen_road_min", VEC2F),
        ("gen_road_max", VEC2F),
        ("roads", FixedVec(_GW_ROAD_ROAD, lambda ctx, r: ctx["road_count"])),
        ("unknown5_count", Hidden(U32, lambda v: len(v["unknown5s"]))),
        ("unknown5_min", VEC2F),
        ("unknown5_max", VEC2F),
        ("unknown5s", FixedVec(_GW_ROAD_UNKNOWN5, lambda ctx, r: ctx["unknown5_count"])),
        ("unknown_crc32", U32),
    ],
    exact=True,
    soft_links=lambda v: [v["unknown_crc32"]] if v["unknown_crc32"] else [],
)

_SPLINE_SUBSECTION = Struct(
    "SplineZSubsection",
    [("point1", VEC3F), ("point2", VEC3F), ("length", F32)],
)

_SPLINE_SECTION = Struct(
    "SplineZSection",
    [
        ("p1", U16),
        ("p2", U16),
        ("p1_t", U16),
        ("p2_t", U16),
        ("unknown0", U32),
        ("length", F32),
        ("spline_subsections", FixedVec(_SPLINE_SUBSECTION, 8)),
    ],
)

SPLINE = Struct(
    "SplineZ",
    [
        ("vertices", PascalArray(VEC3F)),
        ("spline_sections", PascalArray(_SPLINE_SECTION)),
        ("unknown2", F32),
        ("unknown3", F32),
        ("unknown4", F32),
        ("unknown5", F32),
        ("length", F32),
    ],
    exact=True,
)

_SPLINE_GRAPH_UNKNOWN = Struct("SplineGraphZUnknown", [("data", FixedVec(U8, 60))])
_SPLINE_GRAPH_UNKNOWN1 = Struct(
    "SplineGraphZUnknown1",
    [("unknowns", FixedVec(_SPLINE_GRAPH_UNKNOWN, 4))],
)

SPLINE_GRAPH = Struct(
    "SplineGraphZ",
    [
        ("unknown0s", PascalArray(VEC3F)),
        ("unknown1s", PascalArray(_SPLINE_GRAPH_UNKNOWN1)),
        ("unknown2", F32),
        ("unknown3", F32),
        ("unknown4", F32),
        ("unknown5", F32),
        ("unknown6", F32),
        ("unknown7s", PascalArray(U32)),
        ("unknown8s", PascalArray(PascalArray(U8))),
        ("unknown9s", PascalArray(PascalArray(U8))),
    ],
    exact=True,
)

ROT_SHAPE = Struct(
    "RotShapeZ",
    [
        ("vertices", PascalArray(VEC3F)),
        ("unknown1", F32),
        ("ints", PascalArray(U32)),
        ("sizes", PascalArray(VEC3F)),
        ("texcoords", PascalArray(VEC2F)),
        ("material_crc32s", PascalArray(U32)),
        ("scale", F32),
        ("billboard_mode", U16),
    ],
    exact=True,
)

# Every entry of shorts is followed by this many bytes of padding in total.
_ROT_SHAPE_PADDING_PER_SHORT = 28

ROT_SHAPE_DATA = Struct(
    "RotShapeDataZ",
    [
        ("one", U32),
        ("shorts", PascalArray(U16)),
        (
            "padding",
            FixedVec(
                U8, lambda ctx, r: len(ctx["shorts"]) * _ROT_SHAPE_PADDING_PER_SHORT
            ),
        ),
    ],
    exact=True,
)


def gen_world_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, GEN_WORLD)


def gw_road_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, GW_ROAD)


def spline_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, SPLINE)


def spline_graph_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, SPLINE_GRAPH)


def rot_shape_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, ROT_SHAPE)


def rot_shape_data_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, ROT_SHAPE_DATA)