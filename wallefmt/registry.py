"""Object formats by class identifier for each supported engine version."""

from __future__ import annotations

from wallefmt.animation import animation_format, material_anim_format, material_obj_format
from wallefmt.assets import fonts_format, game_obj_format, material_format, particles_data_format
from wallefmt.bitmap import BitmapObjectFormat
from wallefmt.common import ObjectFormat
from wallefmt.geometry import (
    gen_world_format,
    gw_road_format,
    rot_shape_data_format,
    rot_shape_format,
    spline_format,
    spline_graph_format,
)
from wallefmt.lod import lod_data_format, lod_format
from wallefmt.mesh import MeshObjectFormat
from wallefmt.node import node_format
from wallefmt.particles import particles_format
from wallefmt.rawdata import BinaryObjectFormat, UserDefineObjectFormat
from wallefmt.rtc import rtc_format
from wallefmt.simple import (
    camera_format,
    collision_vol_format,
    light_data_format,
    mesh_data_format,
    omni_format,
    surface_datas_format,
    warp_format,
)
from wallefmt.skel import skel_format
from wallefmt.skin import SkinObjectFormat
from wallefmt.sound import SoundObjectFormat
from wallefmt.surface import surface_format
from wallefmt.world import world_format, world_ref_format

SUPPORTED_VERSIONS = (
    "v1.291.03.06 - Asobo Studio - Internal Cross Technology",
    "v1.291.03.07 - Asobo Studio - Internal Cross Technology",
)


def _common_formats() -> dict[int, ObjectFormat]:
    return {
        1175485833: animation_format(),
        4240844041: camera_format(),
        2398393906: collision_vol_format(),
        1536002910: fonts_format(),
        4096629181: game_obj_format(),
        838505646: gen_world_format(),
        3845834591: gw_road_format(),
        848525546: light_data_format(),
        3412401859: lod_data_format(),
        3834418854: material_anim_format(),
        849861735: material_obj_format(),
        3626109572: mesh_data_format(),
        549480509: omni_format(),
        954499543: particles_data_format(),
        866453734: rot_shape_format(),
        1625945536: rot_shape_data_format(),
        705810152: rtc_format(),
        3611002348: skel_format(),
        1135194223: spline_format(),
        1910554652: spline_graph_format(),
        1706265229: surface_format(),
        3747817665: surface_datas_format(),
        1391959958: UserDefineObjectFormat(),
        1114947943: warp_format(),
        968261323: world_format(),
        2906362741: world_ref_format(),
        2259852416: BinaryObjectFormat(),
        849267944: SoundObjectFormat(),
    }


def _versioned_formats() -> dict[int, ObjectFormat]:
    return {
        2204276779: material_format(),
        1387343541: MeshObjectFormat(),
        1396791303: SkinObjectFormat(),
        2245010728: node_format(),
        3312018398: particles_format(),
        1943824915: lod_format(),
        1471281566: BitmapObjectFormat(),
    }


def get_formats(version: str) -> dict[int, ObjectFormat]:
    """Map class identifiers to object formats for an engine version string."""
    if version not in SUPPORTED_VERSIONS:
        raise ValueError(f"bad version: {version!r}")
    formats = _common_formats()
    formats.update(_versioned_formats())
    return formats