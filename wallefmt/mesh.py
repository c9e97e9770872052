"""Mesh format: header and geometry layouts, with a Wavefront OBJ export."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, TextIO

from wallefmt.common import (
    MAT4F,
    QUAT,
    VEC2F,
    VEC3F,
    Links,
    ObjectFormat,
    PackedObject,
    json_member,
    read_object_json,
    write_object_json,
)
from wallefmt.schema import (
    F32,
    I16,
    U8,
    U16,
    U32,
    Field,
    FixedVec,
    Hidden,
    ParseError,
    PascalArray,
    Reader,
    Struct,
    VertexVectorComponent,
    _f32_json,
)

DATA_OBJ = "data.obj"
HEADER_KEY = "mesh_header"
MESH_KEY = "mesh"

_VECTOR_COMPONENT = VertexVectorComponent()
_VERTEX_VECTOR = FixedVec(_VECTOR_COMPONENT, 3)

_POSITION_UV = Struct(
    "VertexLayoutPositionUV",
    [("position", VEC3F), ("unknown0", F32), ("uv", VEC2F)],
)

_NO_BLEND = Struct(
    "VertexLayoutNoBlend",
    [
        ("position", VEC3F),
        ("tangent", _VERTEX_VECTOR),
        ("pad0", U8),
        ("normal", _VERTEX_VECTOR),
        ("pad1", U8),
        ("uv", VEC2F),
        ("luv", VEC2F),
    ],
)

_BLEND_INDEX = Struct("VertexBlendIndex", [("index", F32)])

_ONE_BLEND = Struct(
    "VertexLayout1Blend",
    [
        ("position", VEC3F),
        ("tangent", _VERTEX_VECTOR),
        ("pad0", U8),
        ("normal", _VERTEX_VECTOR),
        ("pad1", U8),
        ("uv", VEC2F),
        ("unknown0", FixedVec(F32, 5)),
    ],
)

_FOUR_BLEND = Struct(
    "VertexLayout4Blend",
    [
        ("position", VEC3F),
        ("tangent", _VERTEX_VECTOR),
        ("pad0", U8),
        ("normal", _VERTEX_VECTOR),
        ("pad1", U8),
        ("uv", VEC2F),
        ("blend_indices", FixedVec(_BLEND_INDEX, 4)),
        ("blend_weights", FixedVec(F32, 4)),
    ],
)


class VertexLayout(Enum):
    """Vertex layouts, keyed by the vertex size stored in the file.

    Members are listed in the order a JSON vertex list is matched against them.
    """

    FOUR_BLEND = 60
    ONE_BLEND = 48
    NO_BLEND = 36
    POSITION_UV = 24

    @property
    def struct(self) -> Struct:
        return _LAYOUT_STRUCTS[self]

    @property
    def packed_size(self) -> int:
        """Vertex size recorded when a buffer of this layout is packed."""
        # Position/uv buffers are recorded with a size of 12 when packed.
        return 12 if self is VertexLayout.POSITION_UV else self.value

    @property
    def has_normals(self) -> bool:
        return self is not VertexLayout.POSITION_UV


_LAYOUT_STRUCTS = {
    VertexLayout.FOUR_BLEND: _FOUR_BLEND,
    VertexLayout.ONE_BLEND: _ONE_BLEND,
    VertexLayout.NO_BLEND: _NO_BLEND,
    VertexLayout.POSITION_UV: _POSITION_UV,
}


@dataclass(frozen=True)
class VertexData:
    """The vertices of one buffer together with their layout."""

    layout: VertexLayout
    vertices: list = field(default_factory=list)


class _VertexBufferData(Field):
    """Vertices whose layout follows from the buffer's vertex size."""

    def parse(self, reader: Reader, context: dict) -> VertexData:
        size = context["vertex_size"]
        try:
            layout = VertexLayout(size)
        except ValueError as exc:
            raise ParseError(f"invalid vertex size {size}") from exc
        vertices = [layout.struct.parse(reader, {}) for _ in range(context["vertex_count"])]
        return VertexData(layout, vertices)

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        for vertex in value.vertices:
            value.layout.struct.write(vertex, out, {})

    def to_json(self, value: Any) -> list:
        return [value.layout.struct.to_json(vertex) for vertex in value.vertices]

    def from_json(self, value: Any) -> VertexData:
        if not isinstance(value, list):
            raise ParseError(f"expected a list of vertices, got {value!r}")
        for layout in VertexLayout:
            try:
                vertices = [layout.struct.from_json(item) for item in value]
            except ParseError:
                continue
            return VertexData(layout, vertices)
        raise ParseError("vertices match no known vertex layout")


VERTEX_BUFFER = Struct(
    "VertexBufferExt",
    [
        ("vertex_count", Hidden(U32, lambda v: len(v["vertices"].vertices))),
        ("vertex_size", Hidden(U32, lambda v: v["vertices"].layout.packed_size)),
        ("vertex_buffer_id", U32),
        ("vertices", _VertexBufferData()),
    ],
)

INDEX_BUFFER = Struct(
    "IndexBufferExt",
    [
        ("index_count", U32),
        ("index_buffer_id", U32),
        ("indices", FixedVec(I16, lambda ctx, r: ctx["index_count"])),
    ],
)

VERTEX_GROUP = Struct(
    "VertexGroup",
    [
        ("zeros", FixedVec(U32, 3)),
        ("maybe_primitive", U32),
        ("vertex_offset_in_buffer", U16),
        ("unknown0", U16),
        ("vertex_count", U32),
        ("index_buffer_offset", U32),
        ("face_count", U32),
        ("unknown1", U32),
        ("unknown2", U32),
        ("vertex_size", U16),
        ("cdcdcdcd", U16),
    ],
)

MESH = Struct(
    "MeshZ",
    [
        ("unknown0", U32),
        ("unknown1", U32),
        ("morpher", PascalArray(U32)),
        ("unknown2s", FixedVec(U32, 4)),
        ("material_crc32s", PascalArray(U32)),
        ("unknown3s", FixedVec(U8, 24)),
        ("sphere_col_count", U32),
        ("box_col_count", U32),
        ("cylinder_col_count", U32),
        ("aabb_col_rel_count", U32),
        ("aabb_col_count", U32),
        ("vertices", PascalArray(FixedVec(I16, 3))),
        ("unknown4", U32),
        ("vertex_buffers", PascalArray(VERTEX_BUFFER)),
        ("indices", PascalArray(INDEX_BUFFER)),
        ("vertex_groups", PascalArray(VERTEX_GROUP)),
        ("pad0", FixedVec(U32, 4)),
    ],
    hard_links=lambda v: list(v["material_crc32s"]),
)

MESH_HEADER = Struct(
    "MeshZHeader",
    [
        ("friendly_name_crc32", U32),
        ("crc32s", PascalArray(U32)),
        ("mesh_data_crc32", U32),
        ("rot", QUAT),
        ("transform", MAT4F),
        ("radius", F32),
        ("flags", U32),
        ("mesh_type", U16),
    ],
    exact=True,
    soft_links=lambda v: list(v["crc32s"]),
)


def _format_float(value: float) -> str:
    """Shortest decimal text for a 32-bit float, without exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(_f32_json(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _join(values) -> str:
    return " ".join(_format_float(value) for value in values)


def write_obj(mesh: dict, out: TextIO) -> None:
    """Write the vertices and triangles of a decoded mesh as Wavefront OBJ text."""
    positions: list = []
    uvs: list = []
    normals: list = []
    for buffer in mesh["vertex_buffers"]:
        data = buffer["vertices"]
        for vertex in data.vertices:
            positions.append(vertex["position"])
            uvs.append(vertex["uv"])
            if data.layout.has_normals:
                normals.append(
                    [-_VECTOR_COMPONENT.to_json(c) for c in vertex["normal"]]
                )
            else:
                normals.append([0.0, 0.0, 0.0])

    for position in positions:
        out.write(f"v {_join(position)}\n")
    for uv in uvs:
        out.write(f"vt {_join(uv)}\n")
    for normal in normals:
        out.write(f"vn {_join(normal)}\n")

    out.write("o mesh\n")
    out.write("g meshgroup\n")
    for buffer in mesh["indices"]:
        indices = buffer["indices"]
        for start in range(0, len(indices), 3):
            corners = []
            for index in indices[start:start + 3]:
                number = (index & 0xFFFF) + 1
                corners.append(f" {number}//{number}")
            out.write("f" + "".join(corners) + "\n")


class MeshObjectFormat(ObjectFormat):
    """Mesh objects: object.json plus a data.obj export of the geometry."""

    def pack(self, input_path: str | Path) -> PackedObject:
        obj = read_object_json(input_path)
        header_value = MESH_HEADER.from_json(json_member(obj, HEADER_KEY))
        mesh_value = MESH.from_json(json_member(obj, MESH_KEY))
        return PackedObject(
            MESH_HEADER.encode(header_value),
            MESH.encode(mesh_value),
            MESH_HEADER.hard_links(header_value),
            MESH_HEADER.soft_links(header_value),
        )

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        path = Path(output_path)
        header_value = MESH_HEADER.decode(header)
        mesh_value = MESH.decode(body)
        with (path / DATA_OBJ).open("w", encoding="utf-8", newline="\n") as handle:
            write_obj(mesh_value, handle)
        write_object_json(
            path,
            {
                HEADER_KEY: MESH_HEADER.to_json(header_value),
                MESH_KEY: MESH.to_json(mesh_value),
            },
        )
        return Links(
            MESH_HEADER.hard_links(header_value), MESH_HEADER.soft_links(header_value)
        )