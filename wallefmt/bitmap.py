"""Bitmap format: a small header and DXT texture data stored as data.dds."""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from wallefmt.common import (
    Links,
    ObjectFormat,
    PackedObject,
    json_member,
    read_object_json,
    write_object_json,
)
from wallefmt.schema import U8, U32, FixedVec, ParseError, Struct

DATA_DDS = "data.dds"
HEADER_KEY = "bitmap_header"
BITMAP_KEY = "bitmap"

DDS_MAGIC = b"DDS "
DDS_HEADER_SIZE = 124
DDS_PIXEL_FORMAT_SIZE = 32

_DDSD_CAPS = 0x1
_DDSD_HEIGHT = 0x2
_DDSD_WIDTH = 0x4
_DDSD_PIXELFORMAT = 0x1000
_DDSD_LINEARSIZE = 0x80000
_DDPF_FOURCC = 0x4
_DDSCAPS_TEXTURE = 0x1000
_DX10_FOURCC = b"DX10"
_DX10_HEADER_SIZE = 20

# magic, size, flags, height, width, pitch, depth, mipmaps, 11 reserved words,
# pixel format (size, flags, four_cc, bit count, 4 masks), caps 1-4, reserved.
_DDS_LAYOUT = struct.Struct("<4s7I44x2I4s5I5I")

# The body embeds a whole DDS file; byte 87 is the last character of its four_cc.
_EMBEDDED_HEADER_SIZE = _DDS_LAYOUT.size
_FORMAT_MARKER_OFFSET = 87
_DXT1_MARKER = ord("1")

BITMAP_HEADER = Struct(
    "BitmapZHeader",
    [
        ("friendly_name_crc32", U32),
        ("link_count", U32),
        ("links", FixedVec(U8, 5)),
    ],
    exact=True,
)

_BODY_LAYOUT = struct.Struct("<3IH3B")
_JSON_LIMITS = {
    "precalc_size": 0xFFFFFFFF,
    "flag": 0xFFFF,
    "format": 0xFF,
    "mipmap_count": 0xFF,
    "four": 0xFF,
}


@dataclass(frozen=True)
class DdsImage:
    """Dimensions, four_cc and pixel data of a DDS file."""

    width: int
    height: int
    four_cc: bytes
    data: bytes


def build_dds(width: int, height: int, four_cc: bytes, data: bytes) -> bytes:
    """Build a DDS file holding compressed data of the given four_cc."""
    four_cc = bytes(four_cc)
    if len(four_cc) != 4:
        raise ValueError(f"four_cc must be 4 bytes, got {four_cc!r}")
    block_size = 8 if four_cc == b"DXT1" else 16
    linear_size = max(1, (width + 3) // 4) * block_size * max(1, (height + 3) // 4)
    flags = (
        _DDSD_CAPS | _DDSD_HEIGHT | _DDSD_WIDTH | _DDSD_PIXELFORMAT | _DDSD_LINEARSIZE
    )
    header = _DDS_LAYOUT.pack(
        DDS_MAGIC,
        DDS_HEADER_SIZE,
        flags,
        height,
        width,
        linear_size,
        0,
        0,
        DDS_PIXEL_FORMAT_SIZE,
        _DDPF_FOURCC,
        four_cc,
        0,
        0,
        0,
        0,
        0,
        _DDSCAPS_TEXTURE,
        0,
        0,
        0,
        0,
    )
    return header + bytes(data)


def read_dds(data: bytes) -> DdsImage:
    """Read the dimensions and pixel data of a DDS file."""
    data = bytes(data)
    if len(data) < _DDS_LAYOUT.size:
        raise ParseError(f"DDS file too short: {len(data)} bytes")
    fields = _DDS_LAYOUT.unpack_from(data)
    magic, size, _flags, height, width = fields[:5]
    pf_flags, four_cc = fields[9], fields[10]
    if magic != DDS_MAGIC:
        raise ParseError(f"not a DDS file: magic {magic!r}")
    if size != DDS_HEADER_SIZE:
        raise ParseError(f"bad DDS header size {size}")
    start = _DDS_LAYOUT.size
    if not pf_flags & _DDPF_FOURCC:
        four_cc = b"\0\0\0\0"
    elif four_cc == _DX10_FOURCC:
        start += _DX10_HEADER_SIZE
        if len(data) < start:
            raise ParseError("DDS file too short for its DX10 header")
    return DdsImage(width, height, four_cc, data[start:])


@dataclass(frozen=True)
class BitmapBody:
    """The bitmap body: texture parameters followed by raw data."""

    precalc_size: int
    flag: int
    format: int
    mipmap_count: int
    four: int
    width: int = 0
    height: int = 0
    data: bytes = b""

    @classmethod
    def decode(cls, body: bytes) -> BitmapBody:
        body = bytes(body)
        if len(body) < _BODY_LAYOUT.size:
            raise ParseError(f"bitmap body too short: {len(body)} bytes")
        width, height, precalc, flag, fmt, mipmaps, four = _BODY_LAYOUT.unpack_from(body)
        return cls(
            precalc, flag, fmt, mipmaps, four, width, height, body[_BODY_LAYOUT.size:]
        )

    def encode(self) -> bytes:
        try:
            fields = _BODY_LAYOUT.pack(
                self.width,
                self.height,
                self.precalc_size,
                self.flag,
                self.format,
                self.mipmap_count,
                self.four,
            )
        except struct.error as exc:
            raise ParseError(f"bitmap field out of range: {exc}") from exc
        return fields + self.data

    def to_json(self) -> dict:
        return {
            "precalc_size": self.precalc_size,
            "flag": self.flag,
            "format": self.format,
            "mipmap_count": self.mipmap_count,
            "four": self.four,
            "data": list(self.data),
        }

    @classmethod
    def from_json(cls, obj: Any) -> BitmapBody:
        values = {}
        for key, limit in _JSON_LIMITS.items():
            value = json_member(obj, key)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
                raise ParseError(f"bitmap {key} must be an integer in 0..{limit}")
            values[key] = value
        raw = json_member(obj, "data")
        if not isinstance(raw, list):
            raise ParseError("bitmap data must be a list of bytes")
        try:
            data = bytes(raw)
        except (TypeError, ValueError) as exc:
            raise ParseError(f"bitmap data: {exc}") from exc
        return cls(data=data, **values)


class BitmapObjectFormat(ObjectFormat):
    """Bitmap objects: object.json plus the texture as data.dds."""

    def pack(self, input_path: str | Path) -> PackedObject:
        path = Path(input_path)
        obj = read_object_json(path)
        header_value = BITMAP_HEADER.from_json(json_member(obj, HEADER_KEY))
        bitmap = BitmapBody.from_json(json_member(obj, BITMAP_KEY))
        image = read_dds((path / DATA_DDS).read_bytes())
        stripped = replace(bitmap, width=image.width, height=image.height, data=b"")
        return PackedObject(
            BITMAP_HEADER.encode(header_value),
            stripped.encode() + image.data,
            BITMAP_HEADER.hard_links(header_value),
            BITMAP_HEADER.soft_links(header_value),
        )

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        path = Path(output_path)
        header_value = BITMAP_HEADER.decode(header)
        bitmap = BitmapBody.decode(body)
        if len(bitmap.data) < _EMBEDDED_HEADER_SIZE:
            raise ParseError(
                f"bitmap data too short for its DDS header: {len(bitmap.data)} bytes"
            )
        four_cc = b"DXT1" if bitmap.data[_FORMAT_MARKER_OFFSET] == _DXT1_MARKER else b"DXT5"
        (path / DATA_DDS).write_bytes(
            build_dds(
                bitmap.width,
                bitmap.height,
                four_cc,
                bitmap.data[_EMBEDDED_HEADER_SIZE:],
            )
        )
        write_object_json(
            path,
            {
                HEADER_KEY: BITMAP_HEADER.to_json(header_value),
                BITMAP_KEY: bitmap.to_json(),
            },
        )
        return Links(
            BITMAP_HEADER.hard_links(header_value),
            BITMAP_HEADER.soft_links(header_value),
        )