"""Declarative little-endian binary layouts with a JSON representation."""

from __future__ import annotations

import abc
import math
import struct
from typing import Any, Callable, Iterable, Sequence, Union

Context = dict
Condition = Callable[[dict, "Reader"], bool]
Count = Union[int, Callable[[dict, "Reader"], int]]


class ParseError(ValueError):
    """Raised when bytes or JSON do not match a layout."""


class Reader:
    """Cursor over an immutable byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read(self, size: int) -> bytes:
        if size < 0 or size > self.remaining():
            raise ParseError(
                f"need {size} bytes at offset {self._pos}, {self.remaining()} left"
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def remaining(self) -> int:
        return len(self._data) - self._pos


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _f32_json(value: float) -> float | None:
    """Shortest decimal float that maps back to the same 32-bit value."""
    if math.isnan(value) or math.isinf(value):
        return None
    for digits in range(1, 10):
        candidate = float(f"{value:.{digits}g}")
        if _to_f32(candidate) == value:
            return candidate
    return value


def _json_float(value: Any) -> float:
    if value is None:
        return math.nan
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"expected a number, got {value!r}")
    try:
        return _to_f32(float(value))
    except OverflowError as exc:
        raise ParseError(f"{value!r} does not fit in a 32-bit float") from exc


def _json_list(value: Any) -> list:
    if not isinstance(value, list):
        raise ParseError(f"expected a list, got {value!r}")
    return value


def _json_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ParseError(f"expected a string, got {value!r}")
    return value


class Field(abc.ABC):
    """One piece of a binary layout."""

    @abc.abstractmethod
    def parse(self, reader: Reader, context: dict) -> Any:
        """Read a value; context holds the sibling fields read so far."""

    @abc.abstractmethod
    def write(self, value: Any, out: bytearray, context: dict) -> None:
        """Append the binary form of value to out."""

    def to_json(self, value: Any) -> Any:
        return value

    def from_json(self, value: Any) -> Any:
        return value


class Scalar(Field):
    """A little-endian number described by a struct format code."""

    def __init__(self, code: str) -> None:
        self.code = code
        self._struct = struct.Struct("<" + code)
        self.is_float = code in "fd"

    @property
    def size(self) -> int:
        return self._struct.size

    def parse(self, reader: Reader, context: dict) -> Any:
        return self._struct.unpack(reader.read(self._struct.size))[0]

    def _parse_many(self, reader: Reader, count: int) -> list:
        if count < 0:
            raise ParseError(f"negative count {count}")
        data = reader.read(count * self._struct.size)
        return list(struct.unpack(f"<{count}{self.code}", data))

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        try:
            out.extend(self._struct.pack(value))
        except (struct.error, OverflowError, TypeError) as exc:
            raise ParseError(f"cannot encode {value!r} as '{self.code}'") from exc

    def to_json(self, value: Any) -> Any:
        return _f32_json(value) if self.is_float else value

    def from_json(self, value: Any) -> Any:
        if self.is_float:
            return _json_float(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParseError(f"expected an integer, got {value!r}")
        try:
            self._struct.pack(value)
        except struct.error as exc:
            raise ParseError(f"{value} out of range for '{self.code}'") from exc
        return value


U8 = Scalar("B")
I8 = Scalar("b")
U16 = Scalar("H")
I16 = Scalar("h")
U32 = Scalar("I")
I32 = Scalar("i")
F32 = Scalar("f")


class FixedVec(Field):
    """A run of items with a count fixed by the layout or by earlier fields.

    With an integer count the JSON form must hold exactly that many items,
    unless strict is set to False.
    """

    def __init__(self, inner: Field, count: Count, strict: bool | None = None) -> None:
        self.inner = inner
        self.count = count
        self.strict = isinstance(count, int) if strict is None else strict

    def _count(self, reader: Reader, context: dict) -> int:
        if isinstance(self.count, int):
            return self.count
        return self.count(context, reader)

    def parse(self, reader: Reader, context: dict) -> list:
        count = self._count(reader, context)
        if isinstance(self.inner, Scalar):
            return self.inner._parse_many(reader, count)
        return [self.inner.parse(reader, context) for _ in range(count)]

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        for item in value:
            self.inner.write(item, out, context)

    def to_json(self, value: Any) -> list:
        return [self.inner.to_json(item) for item in value]

    def from_json(self, value: Any) -> list:
        items = _json_list(value)
        if self.strict and len(items) != self.count:
            raise ParseError(f"expected {self.count} items, got {len(items)}")
        return [self.inner.from_json(item) for item in items]


class PascalArray(Field):
    """A u32 item count followed by the items."""

    def __init__(self, inner: Field) -> None:
        self.inner = inner

    def parse(self, reader: Reader, context: dict) -> list:
        count = U32.parse(reader, context)
        if isinstance(self.inner, Scalar):
            return self.inner._parse_many(reader, count)
        return [self.inner.parse(reader, context) for _ in range(count)]

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        U32.write(len(value), out, context)
        for item in value:
            self.inner.write(item, out, context)

    def to_json(self, value: Any) -> list:
        return [self.inner.to_json(item) for item in value]

    def from_json(self, value: Any) -> list:
        return [self.inner.from_json(item) for item in _json_list(value)]


class PascalString(Field):
    """A u32 byte length followed by UTF-8 text."""

    def parse(self, reader: Reader, context: dict) -> str:
        size = U32.parse(reader, context)
        return reader.read(size).decode("utf-8", errors="replace")

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        data = value.encode("utf-8")
        U32.write(len(data), out, context)
        out.extend(data)

    def from_json(self, value: Any) -> str:
        return _json_str(value)


class PascalStringNull(Field):
    """A u32 length, then text with a terminating zero counted in the length."""

    def parse(self, reader: Reader, context: dict) -> str:
        size = U32.parse(reader, context)
        if size == 0:
            raise ParseError("null-terminated string has zero length")
        return reader.read(size)[:-1].decode("utf-8", errors="replace")

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        data = value.encode("utf-8")
        U32.write(len(data) + 1, out, context)
        out.extend(data)
        out.append(0)

    def from_json(self, value: Any) -> str:
        return _json_str(value)


class FixedStringNull(Field):
    """Text in a zero-padded field of a fixed byte size."""

    def __init__(self, size: int) -> None:
        self.size = size

    def parse(self, reader: Reader, context: dict) -> str:
        raw = reader.read(self.size)
        end = raw.find(0)
        if end < 0:
            raise ParseError("fixed string has no terminating zero")
        return raw[:end].decode("utf-8", errors="replace")

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        data = value.encode("utf-8")
        if len(data) > self.size:
            raise ParseError(f"string of {len(data)} bytes exceeds {self.size}")
        out.extend(data)
        out.extend(bytes(self.size - len(data)))

    def from_json(self, value: Any) -> str:
        return _json_str(value)


class NumeratorFloat(Field):
    """A stored number shown in JSON as a fraction of a fixed denominator."""

    def __init__(self, inner: Scalar, denominator: int) -> None:
        self.inner = inner
        self.denominator = denominator

    def parse(self, reader: Reader, context: dict) -> Any:
        return self.inner.parse(reader, context)

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        self.inner.write(value, out, context)

    def to_json(self, value: Any) -> float | None:
        return _f32_json(_to_f32(_to_f32(float(value)) / float(self.denominator)))

    def from_json(self, value: Any) -> Any:
        try:
            scaled = _to_f32(_json_float(value) * float(self.denominator))
        except OverflowError as exc:
            raise ParseError(f"{value!r} is out of range") from exc
        if self.inner.is_float:
            return scaled
        if math.isnan(scaled) or math.isinf(scaled):
            raise ParseError(f"{value!r} cannot be stored as an integer")
        return self.inner.from_json(int(scaled))


class VertexVectorComponent(Field):
    """A byte mapping 0..255 onto the range -1.0..1.0."""

    def parse(self, reader: Reader, context: dict) -> int:
        return U8.parse(reader, context)

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        U8.write(value, out, context)

    def to_json(self, value: Any) -> float | None:
        unit = _to_f32(float(value) / 255.0)
        return _f32_json(_to_f32(_to_f32(unit * 2.0) - 1.0))

    def from_json(self, value: Any) -> int:
        x = _json_float(value)
        if math.isnan(x):
            return 0
        scaled = _to_f32(_to_f32(_to_f32(x + 1.0) / 2.0) * 255.0)
        if math.isinf(scaled):
            return 255 if scaled > 0 else 0
        rounded = math.copysign(math.floor(abs(scaled) + 0.5), scaled)
        return int(min(255, max(0, rounded)))


class Optional(Field):
    """A value present only when a condition on earlier data holds."""

    def __init__(
        self,
        inner: Field,
        condition: Condition,
        verify: Callable[[Any], bool] | None = None,
    ) -> None:
        self.inner = inner
        self.condition = condition
        self.verify = verify

    def parse(self, reader: Reader, context: dict) -> Any:
        if not self.condition(context, reader):
            return None
        value = self.inner.parse(reader, context)
        if self.verify is not None and not self.verify(value):
            raise ParseError(f"value {value!r} failed verification")
        return value

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        if value is not None:
            self.inner.write(value, out, context)

    def to_json(self, value: Any) -> Any:
        return None if value is None else self.inner.to_json(value)

    def from_json(self, value: Any) -> Any:
        return None if value is None else self.inner.from_json(value)


class Hidden(Field):
    """A field kept out of JSON; its written value is computed from the struct."""

    def __init__(self, inner: Field, compute: Callable[[dict], Any] | None = None) -> None:
        self.inner = inner
        self.compute = compute

    def parse(self, reader: Reader, context: dict) -> Any:
        return self.inner.parse(reader, context)

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        self.inner.write(value, out, context)


class Struct(Field):
    """A sequence of named fields, held as a dict."""

    def __init__(
        self,
        name: str,
        fields: Sequence[tuple[str, Field]],
        *,
        exact: bool = False,
        hard_links: Callable[[dict], Iterable[int]] | None = None,
        soft_links: Callable[[dict], Iterable[int]] | None = None,
    ) -> None:
        self.name = name
        self.fields = list(fields)
        self.exact = exact
        self._hard_links = hard_links
        self._soft_links = soft_links

    def parse(self, reader: Reader, context: dict) -> dict:
        values: dict = {}
        for name, field in self.fields:
            values[name] = field.parse(reader, values)
        return values

    def write(self, value: Any, out: bytearray, context: dict) -> None:
        if not isinstance(value, dict):
            raise ParseError(f"{self.name}: expected a mapping, got {value!r}")
        for name, field in self.fields:
            if isinstance(field, Hidden) and field.compute is not None:
                item = field.compute(value)
            elif isinstance(field, Optional):
                item = value.get(name)
            else:
                try:
                    item = value[name]
                except KeyError as exc:
                    raise ParseError(f"{self.name}: missing field {name!r}") from exc
            field.write(item, out, value)

    def to_json(self, value: Any) -> dict:
        result = {}
        for name, field in self.fields:
            if isinstance(field, Hidden):
                continue
            item = value.get(name)
            if isinstance(field, Optional) and item is None:
                continue
            result[name] = field.to_json(item)
        return result

    def from_json(self, value: Any) -> dict:
        if not isinstance(value, dict):
            raise ParseError(f"{self.name}: expected an object, got {value!r}")
        result = {}
        for name, field in self.fields:
            if isinstance(field, Hidden):
                continue
            if name in value:
                result[name] = field.from_json(value[name])
            elif isinstance(field, Optional):
                result[name] = None
            else:
                raise ParseError(f"{self.name}: missing field {name!r}")
        return result

    def decode(self, data: bytes) -> dict:
        reader = Reader(data)
        value = self.parse(reader, {})
        if self.exact and reader.remaining():
            raise ParseError(f"{self.name}: {reader.remaining()} trailing bytes")
        return value

    def encode(self, value: dict) -> bytes:
        out = bytearray()
        self.write(value, out, {})
        return bytes(out)

    def hard_links(self, value: dict) -> list[int]:
        return list(self._hard_links(value)) if self._hard_links else []

    def soft_links(self, value: dict) -> list[int]:
        return list(self._soft_links(value)) if self._soft_links else []