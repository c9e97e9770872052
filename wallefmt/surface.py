"""Surface format."""

from __future__ import annotations

from wallefmt.common import OBJECT, QUAT, VEC2F, VEC3F, HeaderBodyFormat
from wallefmt.schema import U8, U16, U32, FixedVec, Hidden, Optional, PascalArray, Struct

_UNKNOWN2 = Struct("SurfaceZUnknown2", [("data", FixedVec(U8, 32))])
_CURVE = Struct("SurfaceZCurve", [("unknown0", U32), ("unknown1", U32)])
_POLYLINE = Struct("SurfaceZPolyline", [("surface_index", U16), ("count", U16)])
_SURFACE = Struct(
    "SurfaceZSurface", [("data", FixedVec(U32, 43)), ("unknown", U32)]
)


def _has_opt(ctx: dict, reader) -> bool:
    return ctx["opt"] != 0


def _opt_flag(value: dict) -> int:
    """Flag byte written before the optional block: set when polylines exist."""
    polylines = value.get("polylines")
    return int(polylines is not None)


SURFACE = Struct(
    "SurfaceZ",
    [
        ("vertices", PascalArray(VEC3F)),
        ("unknown1s", PascalArray(QUAT)),
        ("unknown2s", PascalArray(_UNKNOWN2)),
        ("unknown3s", PascalArray(_UNKNOWN2)),
        ("surfaces", PascalArray(_SURFACE)),
        ("curves", PascalArray(_CURVE)),
        ("normals", PascalArray(VEC3F)),
        ("unknown9s", PascalArray(VEC3F)),
        ("unknown10s", PascalArray(VEC2F)),
        ("surface_indices", PascalArray(U16)),
        ("unknown12s", PascalArray(_UNKNOWN2)),
        ("opt", Hidden(U8, _opt_flag)),
        ("polylines", Optional(PascalArray(_POLYLINE), _has_opt)),
        ("surface_indices1", Optional(PascalArray(U16), _has_opt)),
        ("unknown15", Optional(FixedVec(U32, 52), _has_opt)),
        ("surface_count1", Optional(U32, _has_opt)),
    ],
    exact=True,
)


def surface_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, SURFACE)