"""Formats whose body is a small fixed record."""

from __future__ import annotations

from wallefmt.common import (
    COLOR,
    MAT4F,
    OBJECT,
    RESOURCE_OBJECT,
    VEC2F,
    VEC3F,
    VEC3I32,
    HeaderBodyFormat,
)
from wallefmt.schema import F32, U32, FixedVec, Struct

CAMERA = Struct(
    "CameraZ",
    [("angle_of_view", F32), ("zero", F32), ("node_crc32", U32)],
    exact=True,
)

COLLISION_VOL = Struct(
    "CollisionVolZ",
    [
        ("unknown0", U32),
        ("local_transform", MAT4F),
        ("local_transform_inverse", MAT4F),
        ("zeros", FixedVec(U32, 28)),
        ("volume_type", U32),
        ("unknown1", U32),
    ],
    exact=True,
)

LIGHT_DATA = Struct(
    "LightDataZ",
    [
        ("unknown0", U32),
        ("color", VEC3F),
        ("unknown1", VEC3F),
        ("unknown2", VEC3I32),
        ("unknown_flag", U32),
        ("unknown3", VEC3F),
    ],
    exact=True,
)

MESH_DATA = Struct("MeshDataZ", [("unknown0", F32), ("color", COLOR)], exact=True)

OMNI = Struct(
    "OmniZ",
    [("data", FixedVec(U32, 48)), ("crc32s", FixedVec(U32, 2))],
    exact=True,
)

SURFACE_DATAS = Struct("SurfaceDatasZ", [("one", U32)], exact=True)

WARP = Struct(
    "WarpZ",
    [
        ("material_crc32", U32),
        ("vertices", FixedVec(VEC3F, 8, strict=False)),
        ("u24", F32),
        ("u25", F32),
        ("radius", F32),
        ("texcoords", FixedVec(VEC2F, 4, strict=False)),
    ],
    exact=True,
)


def camera_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, CAMERA)


def collision_vol_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, COLLISION_VOL)


def light_data_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, LIGHT_DATA)


def mesh_data_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, MESH_DATA)


def omni_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, OMNI)


def surface_datas_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, SURFACE_DATAS)


def warp_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, WARP)