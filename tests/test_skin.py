import json
import struct

import pytest

from wallefmt.schema import ParseError
from wallefmt.skin import SKIN, SkinObjectFormat

SKEL = 0x11223344
MESH = 0xAABBCCDD
IDENTITY = [1.0 if i % 5 == 0 else 0.0 for i in range(16)]


def _header():
    return b"".join(
        [
            struct.pack("<I", 0x1234),
            struct.pack("<I", 2) + b"\x05\x06",
            struct.pack("<I", SKEL),
            struct.pack("<4f", 1.0, 2.0, 3.0, 0.5),
            struct.pack("<16f", *IDENTITY),
            struct.pack("<f", 10.5),
            struct.pack("<I", 3),
            struct.pack("<H", 1),
        ]
    )


def _body():
    return b"".join(
        [
            struct.pack("<II", 1, MESH),
            struct.pack("<I", 1) + bytes(range(8)),
            struct.pack("<I", 1),
            struct.pack("<I", 0x77),
            struct.pack("<I", 1),
            struct.pack("<H", 3),
            struct.pack("<I", 1),
            struct.pack("<If", 9, 0.25),
            struct.pack("<I", 0),
            struct.pack("<B", 1),
            struct.pack("<I", 42),
            struct.pack("<I", 1),
            struct.pack("<I", 1),
            struct.pack("<I", 5),
            struct.pack("<7I", *range(7)),
            struct.pack("<II", 10, 20),
            struct.pack("<I", 1),
            struct.pack("<II", 30, 40),
        ]
    )


def test_unpack_returns_skeleton_link(tmp_path):
    links = SkinObjectFormat().unpack(_header(), _body(), tmp_path)
    assert links.hard_links == []
    assert links.soft_links == [SKEL]


def test_unpack_writes_json(tmp_path):
    SkinObjectFormat().unpack(_header(), _body(), tmp_path)
    obj = json.loads((tmp_path / "object.json").read_text())
    assert obj["skin_header"]["skel_crc32"] == SKEL
    assert obj["skin"]["mesh_crc32s"] == [MESH]
    assert obj["skin"]["matrix_cache_check"] == 42


def test_round_trip(tmp_path):
    fmt = SkinObjectFormat()
    fmt.unpack(_header(), _body(), tmp_path)
    packed = fmt.pack(tmp_path)
    assert packed.header == _header()
    assert packed.body == _body()
    assert packed.soft_links == [SKEL]


def test_skin_body_soft_links_are_meshes():
    value = SKIN.decode(_body())
    assert SKIN.soft_links(value) == [MESH]


def test_truncated_body_raises(tmp_path):
    with pytest.raises(ParseError):
        SkinObjectFormat().unpack(_header(), _body()[:20], tmp_path)