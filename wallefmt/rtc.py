"""Real-time cinematic format."""

from __future__ import annotations

from wallefmt.common import RESOURCE_OBJECT, HeaderBodyFormat
from wallefmt.schema import U8, U16, U32, FixedVec, PascalArray, Scalar, Struct


def _record(name: str, count: int, scalar: Scalar = U32) -> Struct:
    """A record of scalars named unknown0, unknown1, ..."""
    return Struct(name, [(f"unknown{index}", scalar) for index in range(count)])


_U1_U2 = _record("RtcZUnknown1Unknown2", 3)
_U1_U3_UNKNOWN = _record("RtcZUnknown1Unknown3Unknown", 2)
_U1_U3 = Struct("RtcZUnknown1Unknown3", [("unknowns", FixedVec(_U1_U3_UNKNOWN, 5))])
_U1_U5_U1 = _record("RtcZUnknown1Unknown5Unknown1", 5)
_U1_U5 = Struct(
    "RtcZUnknown1Unknown5",
    [("unknown0", U32), ("unknown1s", PascalArray(_U1_U5_U1))],
)

_UNKNOWN1 = Struct(
    "RtcZUnknown1",
    [
        ("unknown_node_crc32", U32),
        ("unknown1", U16),
        ("unknown2s", PascalArray(_U1_U2)),
        ("unknown3flag", U16),
        ("unknown3s", PascalArray(_U1_U3)),
        ("unknown4flag", U16),
        ("unknown4s", PascalArray(_U1_U3)),
        ("unknown5s", PascalArray(_U1_U5)),
    ],
)

_U2_U2 = _record("RtcZUnknown2Unknown2", 3)
_U2_U4 = _record("RtcZUnknown2Unknown4", 4)

_UNKNOWN2 = Struct(
    "RtcZUnknown2",
    [
        ("unknown0", U32),
        ("unknown1", U16),
        ("unknown2flag", U16),
        ("unknown2s", PascalArray(_U2_U2)),
        ("unknown3flag", U16),
        ("unknown3s", PascalArray(_U2_U2)),
        ("unknown4flag", U16),
        ("unknown4s", PascalArray(_U2_U4)),
        ("unknown5flag", U16),
        ("unknown5s", PascalArray(_U2_U2)),
    ],
)

_U4_U5_UNKNOWN = _record("RtcZUnknown4RtcZUnknown5Unknown", 2)
_U4_U5 = Struct(
    "RtcZUnknown4RtcZUnknown5", [("unknowns", FixedVec(_U4_U5_UNKNOWN, 3))]
)
_U4_U6 = _record("RtcZUnknown4RtcZUnknown6", 3)

_UNKNOWN4 = Struct(
    "RtcZUnknown4",
    [
        ("unknown0", U32),
        ("unknown1", U16),
        ("unknown5flag", U16),
        ("unknown5s", PascalArray(_U4_U5)),
        ("unknown6flag", U16),
        ("unknown6s", PascalArray(_U4_U6)),
        ("unknown7flag", U16),
        ("unknown7s", PascalArray(_U4_U6)),
    ],
)

_UNKNOWN8 = Struct(
    "RtcZUnknown8",
    [
        ("unknown0", U32),
        ("unknown1", U32),
        ("unknown2", U32),
        ("unknown3", U32),
        ("unknown4", U8),
        ("unknown5", U32),
        ("unknown6", U32),
    ],
)

_UNKNOWN9 = _record("RtcZUnknown9", 6)

_U12_U1 = _record("RtcZUnknown12Unknown1", 5)
_UNKNOWN12 = Struct(
    "RtcZUnknown12",
    [("unknown0", U32), ("unknown1s", PascalArray(_U12_U1))],
)

RTC = Struct(
    "RtcZ",
    [
        ("unknown0", Scalar("f")),
        ("unknown1s", PascalArray(_UNKNOWN1)),
        ("unknown2s", PascalArray(_UNKNOWN2)),
        ("unknown3s", PascalArray(U32)),
        ("unknown4s", PascalArray(_UNKNOWN4)),
        ("unknown8s", PascalArray(_UNKNOWN8)),
        ("unknown9s", PascalArray(_UNKNOWN9)),
        ("unknown10s", PascalArray(U32)),
        ("unknown11s", PascalArray(U32)),
        ("unknown12s", PascalArray(_UNKNOWN12)),
    ],
    exact=True,
)


def rtc_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(RESOURCE_OBJECT, RTC)