import json
import struct

import pytest

from wallefmt.node import NODE, NODE_ALT, node_format, node_format_alt
from wallefmt.schema import ParseError


def u32(*values):
    return struct.pack(f"<{len(values)}I", *values)


NODE_TAIL = 370
NODE_ALT_TAIL = 354


def node_body(*links):
    return u32(*links) + bytes(NODE_TAIL)


def test_node_soft_links_skip_zero():
    value = NODE.decode(node_body(5, 0, 7, 0, 0, 0, 0, 0, 9))
    assert NODE.soft_links(value) == [5, 7, 9]
    assert NODE.hard_links(value) == []


def test_node_soft_links_keep_order():
    links = (1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert NODE.soft_links(NODE.decode(node_body(*links))) == list(links)


def test_node_json_round_trip():
    data = node_body(1, 0, 0, 0, 2, 0, 0, 0, 3)
    value = NODE.decode(data)
    restored = NODE.from_json(json.loads(json.dumps(NODE.to_json(value))))
    assert NODE.encode(restored) == data


def test_node_size_is_exact():
    with pytest.raises(ParseError):
        NODE.decode(node_body(*range(9)) + b"\x00")
    with pytest.raises(ParseError):
        NODE.decode(node_body(*range(9))[:-1])


def test_node_format_round_trip(tmp_path):
    fmt = node_format()
    header = u32(4321, 1, 55)
    body = node_body(8, 0, 0, 0, 0, 0, 0, 0, 0)
    links = fmt.unpack(header, body, tmp_path)
    assert links.soft_links == [55, 8]
    packed = fmt.pack(tmp_path)
    assert (packed.header, packed.body) == (header, body)


def test_node_missing_field_in_json(tmp_path):
    fmt = node_format()
    fmt.unpack(u32(1), node_body(*range(9)), tmp_path)
    path = tmp_path / "object.json"
    stored = json.loads(path.read_text())
    del stored["body"]["color"]
    path.write_text(json.dumps(stored))
    with pytest.raises(ParseError):
        fmt.pack(tmp_path)


def test_node_alt_has_no_links():
    data = u32(*range(1, 10)) + bytes(NODE_ALT_TAIL)
    value = NODE_ALT.decode(data)
    assert value["parent_crc32"] == 1
    assert value["some_crc324"] == 9
    assert NODE_ALT.soft_links(value) == []
    assert NODE_ALT.encode(value) == data


def test_node_alt_format_round_trip(tmp_path):
    fmt = node_format_alt()
    body = u32(*range(9)) + bytes(NODE_ALT_TAIL)
    links = fmt.unpack(u32(7), body, tmp_path)
    assert links.hard_links == [] and links.soft_links == []
    assert fmt.pack(tmp_path).body == body