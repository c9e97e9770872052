import io
import json
import struct

import pytest

from wallefmt.mesh import (
    MESH,
    MESH_HEADER,
    VERTEX_BUFFER,
    MeshObjectFormat,
    VertexLayout,
    write_obj,
)
from wallefmt.schema import ParseError


def _header_json():
    return {
        "friendly_name_crc32": 11,
        "crc32s": [5, 6],
        "mesh_data_crc32": 9,
        "rot": [0.0, 0.0, 0.0, 1.0],
        "transform": [1.0] + [0.0] * 14 + [1.0],
        "radius": 2.5,
        "flags": 3,
        "mesh_type": 1,
    }


def _no_blend_vertex(position=(1.0, 2.0, 3.0)):
    return {
        "position": list(position),
        "tangent": [1.0, -1.0, 1.0],
        "pad0": 0,
        "normal": [1.0, -1.0, 1.0],
        "pad1": 0,
        "uv": [0.5, 0.25],
        "luv": [0.0, 0.0],
    }


def _position_uv_vertex():
    return {"position": [1.0, 2.0, 3.0], "unknown0": 0.0, "uv": [0.5, 0.25]}


def _mesh_json(vertices, indices):
    return {
        "unknown0": 0,
        "unknown1": 0,
        "morpher": [],
        "unknown2s": [0, 0, 0, 0],
        "material_crc32s": [77],
        "unknown3s": [0] * 24,
        "sphere_col_count": 0,
        "box_col_count": 0,
        "cylinder_col_count": 0,
        "aabb_col_rel_count": 0,
        "aabb_col_count": 0,
        "vertices": [[1, -2, 3]],
        "unknown4": 0,
        "vertex_buffers": [{"vertex_buffer_id": 4, "vertices": vertices}],
        "indices": [
            {"index_count": len(indices), "index_buffer_id": 8, "indices": indices}
        ],
        "vertex_groups": [
            {
                "zeros": [0, 0, 0],
                "maybe_primitive": 4,
                "vertex_offset_in_buffer": 0,
                "unknown0": 0,
                "vertex_count": len(vertices),
                "index_buffer_offset": 0,
                "face_count": 1,
                "unknown1": 0,
                "unknown2": 0,
                "vertex_size": 36,
                "cdcdcdcd": 0xCDCD,
            }
        ],
        "pad0": [0, 0, 0, 0],
    }


def test_header_round_trip_and_size():
    value = MESH_HEADER.from_json(_header_json())
    data = MESH_HEADER.encode(value)
    assert len(data) == 4 + 4 + 8 + 4 + 16 + 64 + 4 + 4 + 2
    assert MESH_HEADER.to_json(MESH_HEADER.decode(data)) == _header_json()
    assert MESH_HEADER.soft_links(value) == [5, 6]


def test_header_rejects_trailing_bytes():
    data = MESH_HEADER.encode(MESH_HEADER.from_json(_header_json()))
    with pytest.raises(ParseError):
        MESH_HEADER.decode(data + b"\0")


def test_no_blend_mesh_round_trip():
    source = _mesh_json([_no_blend_vertex()], [0, 0, 0])
    value = MESH.from_json(source)
    assert value["vertex_buffers"][0]["vertices"].layout is VertexLayout.NO_BLEND
    decoded = MESH.decode(MESH.encode(value))
    buffer = decoded["vertex_buffers"][0]
    assert buffer["vertex_size"] == 36
    assert buffer["vertex_count"] == 1
    assert MESH.to_json(decoded) == source
    assert MESH.hard_links(decoded) == [77]


def test_mesh_allows_trailing_bytes():
    value = MESH.from_json(_mesh_json([_no_blend_vertex()], [0, 0, 0]))
    decoded = MESH.decode(MESH.encode(value) + b"\x01\x02")
    assert decoded["indices"][0]["indices"] == [0, 0, 0]


def test_empty_vertex_list_takes_first_layout():
    value = VERTEX_BUFFER.from_json({"vertex_buffer_id": 1, "vertices": []})
    assert value["vertices"].layout is VertexLayout.FOUR_BLEND
    data = VERTEX_BUFFER.encode(value)
    assert data[:8] == struct.pack("<II", 0, 60)


def test_position_uv_buffer_records_size_twelve():
    value = VERTEX_BUFFER.from_json(
        {"vertex_buffer_id": 1, "vertices": [_position_uv_vertex()]}
    )
    assert value["vertices"].layout is VertexLayout.POSITION_UV
    data = VERTEX_BUFFER.encode(value)
    assert data[:8] == struct.pack("<II", 1, 12)
    with pytest.raises(ParseError):
        VERTEX_BUFFER.decode(data)


def test_unknown_vertex_shape_rejected():
    with pytest.raises(ParseError):
        VERTEX_BUFFER.from_json({"vertex_buffer_id": 1, "vertices": [{"x": 1}]})


def test_invalid_vertex_size_in_bytes():
    data = struct.pack("<III", 0, 40, 1)
    with pytest.raises(ParseError):
        VERTEX_BUFFER.decode(data)


def test_write_obj_lines():
    mesh = MESH.decode(
        MESH.encode(MESH.from_json(_mesh_json([_no_blend_vertex()], [0, 0, 0])))
    )
    out = io.StringIO()
    write_obj(mesh, out)
    assert out.getvalue().splitlines() == [
        "v 1 2 3",
        "vt 0.5 0.25",
        "vn -1 1 -1",
        "o mesh",
        "g meshgroup",
        "f 1//1 1//1 1//1",
    ]


def test_write_obj_partial_face_and_zero_normals():
    vertices = [_position_uv_vertex(), _position_uv_vertex()]
    mesh = MESH.from_json(_mesh_json(vertices, [0, 1, 0, 1]))
    out = io.StringIO()
    write_obj(mesh, out)
    lines = out.getvalue().splitlines()
    assert lines.count("vn 0 0 0") == 2
    assert lines[-2:] == ["f 1//1 2//2 1//1", "f 2//2"]


def test_unpack_then_pack_round_trip(tmp_path):
    header = MESH_HEADER.encode(MESH_HEADER.from_json(_header_json()))
    body = MESH.encode(MESH.from_json(_mesh_json([_no_blend_vertex()], [0, 0, 0])))
    fmt = MeshObjectFormat()
    links = fmt.unpack(header, body, tmp_path)
    assert links.hard_links == []
    assert links.soft_links == [5, 6]
    assert (tmp_path / "data.obj").read_text().startswith("v 1 2 3\n")
    stored = json.loads((tmp_path / "object.json").read_text())
    assert stored["mesh_header"] == _header_json()
    packed = fmt.pack(tmp_path)
    assert packed.header == header
    assert packed.body == body
    assert packed.soft_links == [5, 6]
    assert packed.hard_links == []


def test_unpack_rejects_bad_body(tmp_path):
    header = MESH_HEADER.encode(MESH_HEADER.from_json(_header_json()))
    with pytest.raises(ParseError):
        MeshObjectFormat().unpack(header, b"\0\0", tmp_path)


def test_pack_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        MeshObjectFormat().pack(tmp_path / "absent")