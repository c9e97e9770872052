"""Skeleton format."""

from __future__ import annotations

from wallefmt.common import MAT4F, QUAT, RESOURCE_OBJECT, SPHERE, VEC3F, HeaderBodyFormat
from wallefmt.schema import I16, I32, U32, FixedVec, PascalArray, Struct

_PTRS = FixedVec(U32, 3)

_BONE = Struct(
    "SkelZBone",
    [
        ("user_define_crc32", U32),
        ("local_rotation", QUAT),
        ("scale", VEC3F),
        ("bone_flags", U32),
        ("local_translation", VEC3F),
        ("placeholder_child_ptr", U32),
        ("model_rot_matrix_row1", VEC3F),
        ("model_matrix_id", I16),
        ("inverse_model_matrix_id", I16),
        ("model_rot_matrix_row2", VEC3F),
        ("placeholder_model_matrix_ptr", U32),
        ("model_rot_matrix_row3", VEC3F),
        ("placeholder_inverse_model_matrix_ptr", U32),
        ("local_rotation_inverse", QUAT),
        ("unknown_ptr0s", _PTRS),
        ("placeholder_parent_ptr", U32),
        ("unknown_ptr1s", _PTRS),
        ("placeholder_prev_sibling_ptr", U32),
        ("unknown_ptr2s", _PTRS),
        ("placeholder_next_sibling_ptr", U32),
        ("original_model_transform", MAT4F),
        ("child_index", I32),
        ("parent_index", I32),
        ("next_sibling_index", I32),
        ("prev_sibling_index", I32),
        ("bone_name", U32),
    ],
)

_SPHERE_COL_BONE = Struct(
    "SphereColBone",
    [
        ("sphere", SPHERE),
        ("flag", U32),
        ("name_crc32", U32),
        ("bone_node_crc32", U32),
    ],
)

_BOX_COL_BONE = Struct(
    "BoxColBone",
    [
        ("mat", MAT4F),
        ("flag", U32),
        ("name_crc32", U32),
        ("bone_node_crc32", U32),
    ],
)


def _skel_soft_links(value: dict) -> list[int]:
    links = [
        bone["user_define_crc32"]
        for bone in value["bones"]
        if bone["user_define_crc32"] != 0
    ]
    links.extend(value["material_crc32s"])
    links.extend(value["mesh_data_crc32s"])
    return links


SKEL = Struct(
    "SkelZ",
    [
        ("flag", U32),
        ("sphere_local", SPHERE),
        ("bones", PascalArray(_BONE)),
        ("material_crc32s", PascalArray(U32)),
        ("mesh_data_crc32s", PascalArray(U32)),
        ("bone_node_groups", PascalArray(PascalArray(U32))),
        ("unknown0s", PascalArray(U32)),
        ("sphere_col_bones1", PascalArray(_SPHERE_COL_BONE)),
        ("sphere_col_bones2", PascalArray(_SPHERE_COL_BONE)),
        ("box_col_bones", PascalArray(_BOX_COL_BONE)),
    ],
    exact=True,
    soft_links=_skel_soft_links,
)


def skel_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, SKEL)