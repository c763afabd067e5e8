"""Wire format shared by the client and the server.

Every frame is an operation code and a payload size, both 4-byte
little-endian signed integers, followed by the payload itself. A package
payload is a sequence of length-prefixed values.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

_INT = struct.Struct("<i")
INT_SIZE = _INT.size

Value = Union[str, bytes, bytearray]


class OpCode(IntEnum):
    """Operation codes understood by the server."""

    MESSAGE = 0
    PACKAGE = 1


class ProtocolError(ValueError):
    """Raised when a payload does not follow the wire format."""


def pack_int(number: int) -> bytes:
    """Encode one integer field."""
    return _INT.pack(number)


def unpack_int(data: bytes) -> int:
    """Decode one integer field."""
    if len(data) != INT_SIZE:
        raise ProtocolError(f"expected {INT_SIZE} bytes, got {len(data)}")
    return _INT.unpack(data)[0]


def encode_value(value: Value) -> bytes:
    """Encode a value as sent on the wire; text gets a terminating NUL."""
    if isinstance(value, str):
        return value.encode("utf-8") + b"\0"
    return bytes(value)


def decode_text(data: bytes) -> str:
    """Decode NUL-terminated text, ignoring anything after the terminator."""
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def frame(op_code: int, payload: bytes) -> bytes:
    """Build a complete frame from an operation code and its payload."""
    return pack_int(int(op_code)) + pack_int(len(payload)) + payload


def message_frame(text: Value) -> bytes:
    """Build the frame that carries a single text message."""
    return frame(OpCode.MESSAGE, encode_value(text))


@dataclass
class Package:
    """A batch of values sent together in one frame."""

    op_code: OpCode = OpCode.PACKAGE
    stream: bytearray = field(default_factory=bytearray)

    def add(self, value: Value) -> None:
        """Append a value, prefixed with its size."""
        data = encode_value(value)
        self.stream += pack_int(len(data))
        self.stream += data

    def serialize(self) -> bytes:
        """Return the full frame for this package."""
        return frame(self.op_code, bytes(self.stream))


def parse_values(payload: bytes) -> list[str]:
    """Split a package payload back into its values."""
    values: list[str] = []
    total = len(payload)
    offset = 0
    while offset < total:
        if offset + INT_SIZE > total:
            raise ProtocolError("truncated size field in package payload")
        (size,) = _INT.unpack_from(payload, offset)
        offset += INT_SIZE
        if size < 0 or offset + size > total:
            raise ProtocolError(f"invalid value size {size} in package payload")
        values.append(decode_text(payload[offset:offset + size]))
        offset += size
    return values