import struct

import pytest

from wallefmt.schema import (
    F32,
    I16,
    U8,
    U16,
    U32,
    FixedStringNull,
    FixedVec,
    Hidden,
    NumeratorFloat,
    Optional,
    ParseError,
    PascalArray,
    PascalString,
    PascalStringNull,
    Reader,
    Struct,
    VertexVectorComponent,
)


def test_reader_tracks_remaining():
    reader = Reader(b"abcde")
    assert reader.read(2) == b"ab"
    assert reader.remaining() == 3
    with pytest.raises(ParseError):
        reader.read(4)


def test_u32_wire_bytes():
    layout = Struct("S", [("x", U32)])
    assert layout.encode({"x": 1}) == b"\x01\x00\x00\x00"
    assert layout.decode(b"\x01\x00\x00\x00") == {"x": 1}


def test_pascal_array_wire_bytes():
    layout = Struct("S", [("items", PascalArray(U16))])
    data = layout.encode({"items": [1, 2]})
    assert data == b"\x02\x00\x00\x00\x01\x00\x02\x00"
    assert layout.decode(data) == {"items": [1, 2]}


def test_pascal_array_of_structs_round_trip():
    inner = Struct("P", [("a", U8), ("b", I16)])
    layout = Struct("S", [("items", PascalArray(inner))])
    value = {"items": [{"a": 1, "b": -2}, {"a": 3, "b": 4}]}
    assert layout.decode(layout.encode(value)) == value


def test_pascal_string_null_wire_and_round_trip():
    layout = Struct("S", [("s", PascalStringNull())])
    data = layout.encode({"s": "ab"})
    assert data == b"\x03\x00\x00\x00ab\x00"
    assert layout.decode(data) == {"s": "ab"}


def test_pascal_string_null_zero_length_rejected():
    layout = Struct("S", [("s", PascalStringNull())])
    with pytest.raises(ParseError):
        layout.decode(b"\x00\x00\x00\x00")


def test_pascal_string_is_lossy():
    layout = Struct("S", [("s", PascalString())])
    assert layout.decode(b"\x01\x00\x00\x00\xff") == {"s": "\ufffd"}
    assert layout.decode(layout.encode({"s": "hello"})) == {"s": "hello"}


def test_fixed_string_null():
    field = FixedStringNull(6)
    layout = Struct("S", [("s", field)])
    data = layout.encode({"s": "abc"})
    assert data == b"abc\x00\x00\x00"
    assert layout.decode(data) == {"s": "abc"}
    with pytest.raises(ParseError):
        layout.decode(b"abcdef")
    with pytest.raises(ParseError):
        layout.encode({"s": "abcdefg"})


def test_fixed_vec_json_length_checked():
    field = FixedVec(U32, 3)
    assert field.from_json([1, 2, 3]) == [1, 2, 3]
    with pytest.raises(ParseError):
        field.from_json([1, 2])


def test_fixed_vec_dynamic_count_not_strict():
    field = FixedVec(U32, lambda ctx, r: 2)
    assert field.from_json([1, 2, 3]) == [1, 2, 3]


def test_f32_json_uses_shortest_form():
    layout = Struct("S", [("f", F32)])
    decoded = layout.decode(struct.pack("<f", 0.1))
    assert layout.to_json(decoded) == {"f": 0.1}
    assert layout.decode(layout.encode(layout.from_json({"f": 0.1}))) == decoded


def test_numerator_float_round_trip():
    field = NumeratorFloat(U16, 256)
    for raw in (0, 1, 255, 1000, 65535):
        assert field.from_json(field.to_json(raw)) == raw


def test_numerator_float_out_of_range():
    field = NumeratorFloat(U16, 256)
    with pytest.raises(ParseError):
        field.from_json(-1.0)


def test_vertex_vector_component_endpoints_and_round_trip():
    field = VertexVectorComponent()
    assert field.to_json(255) == 1.0
    assert field.to_json(0) == -1.0
    for raw in range(256):
        assert field.from_json(field.to_json(raw)) == raw
    assert field.from_json(5.0) == 255
    assert field.from_json(-5.0) == 0


def test_optional_condition_on_previous_field():
    layout = Struct(
        "S",
        [("flag", U8), ("extra", Optional(U32, lambda ctx, r: ctx["flag"] != 0))],
    )
    with_extra = {"flag": 1, "extra": 7}
    assert layout.decode(layout.encode(with_extra)) == with_extra
    without = {"flag": 0, "extra": None}
    assert layout.decode(layout.encode(without)) == without
    assert layout.to_json(without) == {"flag": 0}
    assert layout.from_json({"flag": 0}) == without


def test_optional_verify():
    field = Optional(U16, lambda ctx, r: True, verify=lambda v: v in (1, 3))
    assert field.parse(Reader(b"\x03\x00"), {}) == 3
    with pytest.raises(ParseError):
        field.parse(Reader(b"\x02\x00"), {})


def test_hidden_count_computed_on_write():
    layout = Struct(
        "S",
        [
            ("n", Hidden(U32, lambda v: len(v["items"]))),
            ("items", FixedVec(U8, lambda ctx, r: ctx["n"])),
        ],
    )
    value = layout.from_json({"items": [4, 5, 6]})
    decoded = layout.decode(layout.encode(value))
    assert decoded["items"] == [4, 5, 6]
    assert decoded["n"] == len(decoded["items"])
    assert "n" not in layout.to_json(decoded)


def test_exact_rejects_trailing_bytes():
    layout = Struct("S", [("x", U8)], exact=True)
    with pytest.raises(ParseError):
        layout.decode(b"\x01\x02")
    loose = Struct("S", [("x", U8)])
    assert loose.decode(b"\x01\x02") == {"x": 1}


def test_truncated_input_rejected():
    layout = Struct("S", [("x", U32)])
    with pytest.raises(ParseError):
        layout.decode(b"\x01\x02")


def test_scalar_json_validation():
    with pytest.raises(ParseError):
        U8.from_json(256)
    with pytest.raises(ParseError):
        U32.from_json(True)
    with pytest.raises(ParseError):
        U32.from_json(1.5)


def test_missing_field_rejected():
    layout = Struct("S", [("x", U8), ("y", U8)])
    with pytest.raises(ParseError):
        layout.from_json({"x": 1})
    with pytest.raises(ParseError):
        layout.encode({"x": 1})


def test_links_callables():
    layout = Struct(
        "S",
        [("ids", PascalArray(U32))],
        hard_links=lambda v: v["ids"][:1],
        soft_links=lambda v: v["ids"],
    )
    value = {"ids": [9, 8]}
    assert layout.hard_links(value) == [9]
    assert layout.soft_links(value) == [9, 8]
    assert Struct("T", [("x", U8)]).soft_links({"x": 1}) == []