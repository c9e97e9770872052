"""Particle emitter formats."""

from __future__ import annotations

from wallefmt.common import MAT4F, OBJECT, HeaderBodyFormat
from wallefmt.schema import U16, U32, Field, FixedVec, PascalArray, Struct


def _record(name: str, count: int) -> Struct:
    return Struct(name, [(f"unknown{index}", U32) for index in range(count)])


def _unknown0(name: str, items: list[Field]) -> Struct:
    """The emitter record: fixed data, seven flagged arrays, and a trailing word."""
    fields: list[tuple[str, Field]] = [("data", FixedVec(U32, 19))]
    for index, item in enumerate(items, start=1):
        fields.append((f"unknown{index}flag", U16))
        fields.append((f"unknown{index}s", PascalArray(item)))
    fields.append(("unknown8", U32))
    return Struct(name, fields)


_UNKNOWN1 = _record("ParticlesZUnknown1", 3)
_UNKNOWN2 = _record("ParticlesZUnknown2", 5)
_UNKNOWN4 = _record("ParticlesZUnknown4", 2)
_UNKNOWN5 = _record("ParticlesZUnknown5", 4)

_PARTICLES_UNKNOWN0 = _unknown0(
    "ParticlesZUnknown0",
    [_UNKNOWN1, _UNKNOWN2, _UNKNOWN2, _UNKNOWN4, _UNKNOWN5, _UNKNOWN5, _UNKNOWN4],
)

PARTICLES = Struct(
    "ParticlesZ",
    [
        ("unknown0s", PascalArray(_PARTICLES_UNKNOWN0)),
        ("mats", PascalArray(MAT4F)),
        ("unknown2", U32),
        ("unknown3", U16),
    ],
    exact=True,
)

_PAIR = FixedVec(U32, 2)
_TRIPLE = FixedVec(U32, 3)
_QUAD = FixedVec(U32, 4)

_PARTICLES_UNKNOWN0_ALT = _unknown0(
    "ParticlesZUnknown0Alt",
    [_PAIR, _TRIPLE, _TRIPLE, _PAIR, _QUAD, _QUAD, _PAIR],
)

PARTICLES_ALT = Struct(
    "ParticlesZAlt",
    [
        ("unknown0s", PascalArray(_PARTICLES_UNKNOWN0_ALT)),
        ("mats", PascalArray(FixedVec(U32, 16))),
        ("unknown2", U32),
        ("unknown3", U16),
    ],
    exact=True,
)


def particles_format() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, PARTICLES)


def particles_format_alt() -> HeaderBodyFormat:
    return HeaderBodyFormat(OBJECT, PARTICLES_ALT)