import json

import pytest

from wallefmt.common import (
    OBJECT,
    RESOURCE_OBJECT,
    HeaderBodyFormat,
    Links,
    read_object_json,
    write_object_json,
)
from wallefmt.schema import U32, ParseError, PascalArray, Struct


def _object_header(data_crc32=0, crc32s=None):
    return {
        "link_crc32": 11,
        "data_crc32": data_crc32,
        "crc32s": crc32s,
        "rot": [0.0, 0.0, 0.0, 1.0],
        "transform": [float(i) for i in range(16)],
        "radius": 2.5,
        "flags": 4,
        "object_type": 3,
    }


def test_resource_object_without_crc32s():
    value = RESOURCE_OBJECT.decode(b"\x07\x00\x00\x00")
    assert value == {"friendly_name_crc32": 7, "crc32s": None}
    assert RESOURCE_OBJECT.soft_links(value) == []
    assert RESOURCE_OBJECT.to_json(value) == {"friendly_name_crc32": 7}


def test_resource_object_with_crc32s():
    value = {"friendly_name_crc32": 7, "crc32s": [5, 6]}
    decoded = RESOURCE_OBJECT.decode(RESOURCE_OBJECT.encode(value))
    assert decoded == value
    assert RESOURCE_OBJECT.soft_links(decoded) == [5, 6]


def test_object_header_round_trip_without_crc32s():
    value = _object_header(data_crc32=3)
    decoded = OBJECT.decode(OBJECT.encode(value))
    assert decoded == value
    assert OBJECT.soft_links(decoded) == [3]


def test_object_header_round_trip_with_crc32s():
    value = _object_header(data_crc32=2, crc32s=[21, 22, 23])
    decoded = OBJECT.decode(OBJECT.encode(value))
    assert decoded == value
    assert OBJECT.soft_links(decoded) == [21, 22, 23]


def test_object_header_no_links():
    decoded = OBJECT.decode(OBJECT.encode(_object_header()))
    assert OBJECT.soft_links(decoded) == []


def test_object_header_trailing_bytes_rejected():
    data = OBJECT.encode(_object_header()) + b"\x00"
    with pytest.raises(ParseError):
        OBJECT.decode(data)


def test_write_object_json_is_pretty(tmp_path):
    path = write_object_json(tmp_path, {"a": 1})
    text = path.read_text(encoding="utf-8")
    assert text == '{\n  "a": 1\n}'
    assert read_object_json(tmp_path) == {"a": 1}


def test_read_object_json_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_object_json(tmp_path)
    (tmp_path / "object.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ParseError):
        read_object_json(tmp_path)


BODY = Struct(
    "Body",
    [("ids", PascalArray(U32))],
    hard_links=lambda v: v["ids"],
)


def test_header_body_format_round_trip(tmp_path):
    fmt = HeaderBodyFormat(RESOURCE_OBJECT, BODY)
    source = tmp_path / "in"
    source.mkdir()
    obj = {"header": {"friendly_name_crc32": 1, "crc32s": [2]}, "body": {"ids": [3, 4]}}
    (source / "object.json").write_text(json.dumps(obj), encoding="utf-8")

    packed = fmt.pack(source)
    assert packed.hard_links == [3, 4]
    assert packed.soft_links == [2]

    target = tmp_path / "out"
    target.mkdir()
    links = fmt.unpack(packed.header, packed.body, target)
    assert links == Links([3, 4], [2])
    assert read_object_json(target) == obj


def test_header_body_format_missing_body(tmp_path):
    fmt = HeaderBodyFormat(RESOURCE_OBJECT, BODY)
    (tmp_path / "object.json").write_text(
        json.dumps({"header": {"friendly_name_crc32": 1}}), encoding="utf-8"
    )
    with pytest.raises(ParseError):
        fmt.pack(tmp_path)


def test_header_body_format_bad_body(tmp_path):
    fmt = HeaderBodyFormat(RESOURCE_OBJECT, BODY)
    with pytest.raises(ParseError):
        fmt.unpack(b"\x01\x00\x00\x00", b"\x05\x00\x00\x00", tmp_path)