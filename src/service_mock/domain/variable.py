from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from service_mock.errors import VariableDecodeError, VariableTypeError

T = TypeVar("T")

# Integers follow a signed 64-bit platform width.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


class VariableKind(str, Enum):
    # Values double as the tags of the wire/state encoding.
    STRING = "String"
    INTEGER = "Integer"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    BYTES = "Bytes"
    NULL = "Null"


_KIND_BY_TYPE: dict[type, VariableKind] = {
    str: VariableKind.STRING,
    int: VariableKind.INTEGER,
    float: VariableKind.NUMBER,
    bool: VariableKind.BOOLEAN,
    bytes: VariableKind.BYTES,
}


@dataclass(frozen=True, slots=True)
class Variable:
    """A value exchanged between steps and persisted in keyed state.

    Conversions never coerce: reading an Integer as float, or a String as
    bytes, raises VariableTypeError. Null stands for "absent".
    """

    kind: VariableKind
    value: str | int | float | bool | bytes | None = None

    @classmethod
    def of(cls, value: object) -> Variable:
        if isinstance(value, Variable):
            return value
        if value is None:
            return NULL
        # bool is an int subclass, so it must be matched first.
        if isinstance(value, bool):
            return cls(VariableKind.BOOLEAN, value)
        if isinstance(value, int):
            if not _INT_MIN <= value <= _INT_MAX:
                raise OverflowError(f"integer {value} does not fit in 64 bits")
            return cls(VariableKind.INTEGER, value)
        if isinstance(value, float):
            return cls(VariableKind.NUMBER, value)
        if isinstance(value, str):
            return cls(VariableKind.STRING, value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(VariableKind.BYTES, bytes(value))
        raise VariableTypeError(f"unsupported variable value type: {type(value).__name__}")

    @property
    def is_null(self) -> bool:
        return self.kind is VariableKind.NULL

    def to(self, tp: type[T]) -> T:
        expected = _KIND_BY_TYPE.get(tp)
        if expected is None:
            raise VariableTypeError(f"unsupported target type: {tp.__name__}")
        if self.kind is not expected:
            raise VariableTypeError(f"expected {expected.value}, found {self.kind.value}")
        return self.value  # type: ignore[return-value]

    def to_json(self) -> object:
        # Externally tagged: {"Integer": 1}, {"Bytes": "<base64>"}, "Null".
        if self.kind is VariableKind.NULL:
            return VariableKind.NULL.value
        if self.kind is VariableKind.BYTES:
            assert isinstance(self.value, bytes)
            return {self.kind.value: base64.b64encode(self.value).decode("ascii")}
        return {self.kind.value: self.value}

    @classmethod
    def from_json(cls, data: object) -> Variable:
        if data is None or data == VariableKind.NULL.value:
            return NULL
        if not isinstance(data, dict) or len(data) != 1:
            raise VariableDecodeError(f"not a tagged variable: {data!r}")

        tag, payload = next(iter(data.items()))
        try:
            kind = VariableKind(tag)
        except ValueError:
            raise VariableDecodeError(f"unknown variable tag: {tag!r}") from None

        if kind is VariableKind.BYTES:
            return cls(kind, _decode_bytes(payload))
        if kind is VariableKind.INTEGER and not (isinstance(payload, int) and not isinstance(payload, bool)):
            raise VariableDecodeError(f"Integer payload must be an integer, got {payload!r}")
        if kind is VariableKind.NUMBER:
            if isinstance(payload, bool) or not isinstance(payload, (int, float)):
                raise VariableDecodeError(f"Number payload must be numeric, got {payload!r}")
            return cls(kind, float(payload))
        if kind is VariableKind.BOOLEAN and not isinstance(payload, bool):
            raise VariableDecodeError(f"Boolean payload must be a boolean, got {payload!r}")
        if kind is VariableKind.STRING and not isinstance(payload, str):
            raise VariableDecodeError(f"String payload must be a string, got {payload!r}")
        if kind is VariableKind.NULL:
            return NULL
        return cls.of(payload)

    def encode(self) -> bytes:
        return json.dumps(self.to_json(), separators=(",", ":")).encode("utf-8")

    @classmethod
    def decode(cls, data: bytes) -> Variable:
        try:
            raw = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise VariableDecodeError(f"invalid variable encoding: {exc}") from exc
        return cls.from_json(raw)


def _decode_bytes(payload: object) -> bytes:
    if isinstance(payload, str):
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise VariableDecodeError(f"invalid base64 bytes payload: {exc}") from exc
    # Older writers stored bytes as a list of octets.
    if isinstance(payload, list) and all(isinstance(b, int) and 0 <= b <= 255 for b in payload):
        return bytes(payload)
    raise VariableDecodeError(f"Bytes payload must be base64 text, got {payload!r}")


NULL = Variable(VariableKind.NULL)
