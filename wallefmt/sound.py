"""Sound format: a small header with 16-bit PCM samples stored as data.wav."""

from __future__ import annotations

import wave
from pathlib import Path

from wallefmt.common import (
    Links,
    ObjectFormat,
    PackedObject,
    json_member,
    read_object_json,
    write_object_json,
)
from wallefmt.schema import U16, U32, Optional, ParseError, Struct

DATA_WAV = "data.wav"
SOUND_KEY = "sound_header"
DEFAULT_SAMPLE_RATE = 22050
SOUND_TYPES = (1, 3, 5, 7)
_SAMPLE_WIDTH = 2


def _has_rate(ctx: dict, reader) -> bool:
    return ctx["sample_rate"] != 0


SOUND_HEADER = Struct(
    "SoundZHeader",
    [
        ("friendly_name_crc32", U32),
        ("sample_rate", U32),
        ("data_size", Optional(U32, _has_rate)),
        ("sound_type", Optional(U16, _has_rate, verify=lambda t: t in SOUND_TYPES)),
        (
            "zero",
            Optional(
                U16, lambda ctx, reader: ctx["sample_rate"] != 0 and reader.remaining() == 2
            ),
        ),
    ],
    exact=True,
)


class SoundObjectFormat(ObjectFormat):
    """Converts between sound objects and a mono 16-bit WAV file."""

    def pack(self, input_path: str | Path) -> PackedObject:
        path = Path(input_path)
        obj = read_object_json(path)
        header_value = SOUND_HEADER.from_json(json_member(obj, SOUND_KEY))
        try:
            with wave.open(str(path / DATA_WAV), "rb") as wav:
                if wav.getsampwidth() != _SAMPLE_WIDTH:
                    raise ParseError(
                        f"{DATA_WAV}: expected 16-bit samples, "
                        f"got {wav.getsampwidth() * 8}-bit"
                    )
                body = wav.readframes(wav.getnframes())
        except (wave.Error, EOFError) as exc:
            raise ParseError(f"{DATA_WAV}: {exc}") from exc
        return PackedObject(SOUND_HEADER.encode(header_value), body, [], [])

    def unpack(self, header: bytes, body: bytes, output_path: str | Path) -> Links:
        path = Path(output_path)
        header_value = SOUND_HEADER.decode(header)
        rate = header_value["sample_rate"] or DEFAULT_SAMPLE_RATE
        sample_count = len(body) // _SAMPLE_WIDTH
        with wave.open(str(path / DATA_WAV), "wb") as wav:
            wav.setnchannels(1)
            wav.setsampwidth(_SAMPLE_WIDTH)
            wav.setframerate(rate)
            wav.writeframes(bytes(body[: sample_count * _SAMPLE_WIDTH]))
        write_object_json(path, {SOUND_KEY: SOUND_HEADER.to_json(header_value)})
        return Links([], [])