"""Shared layouts and the generic header/body object format."""

from __future__ import annotations

import abc
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple

from wallefmt.schema import (
    F32,
    I32,
    U16,
    U32,
    FixedVec,
    Optional,
    ParseError,
    PascalArray,
    Struct,
)

OBJECT_JSON = "object.json"

VEC2F = FixedVec(F32, 2)
VEC3F = FixedVec(F32, 3)
VEC3I32 = FixedVec(I32, 3)
VEC4F = FixedVec(F32, 4)
QUAT = FixedVec(F32, 4)
MAT4F = FixedVec(F32, 16)

RECT = Struct("Rect", [("x1", I32), ("y1", I32), ("x2", I32), ("y2", I32)])
COLOR = Struct("Color", [("r", F32), ("g", F32), ("b", F32), ("a", F32)])
SPHERE = Struct("SphereZ", [("center", VEC3F), ("radius", F32)])
RANGE_BEGIN_END = Struct("RangeBeginEnd", [("begin", U16), ("end", U16)])
RANGE_BEGIN_SIZE = Struct("RangeBeginSize", [("begin", U16), ("size", U16)])
FADE_DISTANCES = Struct(
    "FadeDistances", [("x", F32), ("y", F32), ("fade_close", F32)]
)
DYN_SPHERE = Struct(
    "DynSphere", [("sphere", SPHERE), ("flags", U32), ("dyn_sphere_name", U32)]
)
DYN_BOX = Struct("DynBox", [("mat", MAT4F), ("flags", U32), ("dyn_box_name", U32)])

RESOURCE_OBJECT = Struct(
    "ResourceObjectZ",
    [
        ("friendly_name_crc32", U32),
        ("crc32s", Optional(PascalArray(U32), lambda ctx, r: r.remaining() != 0)),
    ],
    exact=True,
    soft_links=lambda v: list(v["crc32s"] or []),
)

# Size of the fixed tail of an object header (rot, transform, radius, flags, type).
_OBJECT_TAIL_SIZE = 90


def _object_soft_links(value: dict) -> list[int]:
    if value["crc32s"] is not None:
        return list(value["crc32s"])
    if value["data_crc32"] != 0:
        return [value["data_crc32"]]
    return []


OBJECT = Struct(
    "ObjectZ",
    [
        ("link_crc32", U32),
        ("data_crc32", U32),
        (
            "crc32s",
            Optional(
                FixedVec(U32, lambda ctx, r: ctx["data_crc32"] + 1),
                lambda ctx, r: r.remaining() != _OBJECT_TAIL_SIZE,
            ),
        ),
        ("rot", QUAT),
        ("transform", MAT4F),
        ("radius", F32),
        ("flags", U32),
        ("object_type", U16),
    ],
    exact=True,
    soft_links=_object_soft_links,
)


class Links(NamedTuple):
    """Object identifiers an object refers to."""

    hard_links: list
    soft_links: list


@dataclass(frozen=True)
class PackedObject:
    """Binary header and body built from an unpacked object directory."""

    header: bytes
    body: bytes
    hard_links: list = field(default_factory=list)
    soft_links: list = field(default_factory=list)


def read_object_json(input_path: str | Path) -> Any:
    """Load object.json from an object directory."""
    path = Path(input_path) / OBJECT_JSON
    with path.open(encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ParseError(f"{path}: {exc}") from exc


def write_object_json(output_path: str | Path, obj: Any) -> Path:
    """Write obj as pretty-printed object.json into an object directory."""
    path = Path(output_path) / OBJECT_JSON
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def json_member(obj: Any, key: str) -> Any:
    if not isinstance(obj, dict) or key not in obj:
        raise ParseError(f"object.json lacks {key!r}")
    return obj[key]


class ObjectFormat(abc.ABC):
    """Converts an object between its binary and directory forms."""

    @abc.abstractmethod
    def pack(self, input_path: str | Path) -> PackedObject:
        """Build header and body bytes from an object directory."""

    @abc.abstractmethod
    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        """Write the object directory for header and body bytes."""


class HeaderBodyFormat(ObjectFormat):
    """An object stored as one JSON file with a header and a body layout."""

    def __init__(self, header: Struct, body: Struct) -> None:
        self.header = header
        self.body = body

    def _links(self, header_value: dict, body_value: dict) -> Links:
        return Links(
            self.header.hard_links(header_value) + self.body.hard_links(body_value),
            self.header.soft_links(header_value) + self.body.soft_links(body_value),
        )

    def pack(self, input_path: str | Path) -> PackedObject:
        obj = read_object_json(input_path)
        header_value = self.header.from_json(json_member(obj, "header"))
        body_value = self.body.from_json(json_member(obj, "body"))
        links = self._links(header_value, body_value)
        return PackedObject(
            self.header.encode(header_value),
            self.body.encode(body_value),
            links.hard_links,
            links.soft_links,
        )

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        header_value = self.header.decode(header)
        body_value = self.body.decode(body)
        write_object_json(
            output_path,
            {
                "header": self.header.to_json(header_value),
                "body": self.body.to_json(body_value),
            },
        )
        return self._links(header_value, body_value)