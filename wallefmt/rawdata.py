"""Objects whose body is kept as a raw binary or text file."""

from __future__ import annotations

import struct
from pathlib import Path

from wallefmt.common import (
    RESOURCE_OBJECT,
    Links,
    ObjectFormat,
    PackedObject,
    json_member,
    read_object_json,
    write_object_json,
)
from wallefmt.schema import U32, Reader

DATA_BIN = "data.bin"
DATA_TXT = "data.txt"
RESOURCE_KEY = "resource_object"


def _load_resource(input_path: Path) -> dict:
    obj = read_object_json(input_path)
    return RESOURCE_OBJECT.from_json(json_member(obj, RESOURCE_KEY))


def _resource_links(value: dict) -> Links:
    return Links(RESOURCE_OBJECT.hard_links(value), RESOURCE_OBJECT.soft_links(value))


class BinaryObjectFormat(ObjectFormat):
    """A resource header with an opaque body stored as data.bin."""

    def pack(self, input_path: str | Path) -> PackedObject:
        path = Path(input_path)
        resource = _load_resource(path)
        body = (path / DATA_BIN).read_bytes()
        links = _resource_links(resource)
        return PackedObject(
            RESOURCE_OBJECT.encode(resource), body, links.hard_links, links.soft_links
        )

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        path = Path(output_path)
        resource = RESOURCE_OBJECT.decode(header)
        write_object_json(path, {RESOURCE_KEY: RESOURCE_OBJECT.to_json(resource)})
        (path / DATA_BIN).write_bytes(bytes(body))
        return _resource_links(resource)


class UserDefineObjectFormat(ObjectFormat):
    """A resource header with a length-prefixed text body stored as data.txt."""

    def pack(self, input_path: str | Path) -> PackedObject:
        path = Path(input_path)
        resource = _load_resource(path)
        text = (path / DATA_TXT).read_bytes()
        body = struct.pack("<I", len(text)) + text
        links = _resource_links(resource)
        return PackedObject(
            RESOURCE_OBJECT.encode(resource), body, links.hard_links, links.soft_links
        )

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        path = Path(output_path)
        resource = RESOURCE_OBJECT.decode(header)
        write_object_json(path, {RESOURCE_KEY: RESOURCE_OBJECT.to_json(resource)})
        reader = Reader(body)
        size = U32.parse(reader, {})
        # A short body leaves the rest of the declared length zero-filled.
        text = reader.read(min(size, reader.remaining())).ljust(size, b"\0")
        (path / DATA_TXT).write_bytes(text)
        return _resource_links(resource)