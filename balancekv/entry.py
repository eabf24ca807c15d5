"""Binary record format of the segment files.

Layout (integers are little-endian uint32):
size, key length, key, value length, value, SHA-1 of the value (20 bytes).
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass
from typing import BinaryIO

_U32 = struct.Struct("<I")


class CorruptedError(Exception):
    """Raised when a stored record fails its integrity check."""

    def __init__(self, message: str = "data corrupted") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Entry:
    """A single key/value record."""

    key: str
    value: str

    def encode(self) -> bytes:
        """Serialize the record, appending the SHA-1 digest of the value."""
        key = self.key.encode()
        value = self.value.encode()
        digest = hashlib.sha1(value).digest()
        size = len(key) + len(value) + 12 + len(digest)
        return (
            _U32.pack(size) + _U32.pack(len(key)) + key
            + _U32.pack(len(value)) + value + digest
        )

    @classmethod
    def decode(cls, data: bytes) -> Entry:
        """Parse a full record; raise CorruptedError if it does not check out."""
        data = bytes(data)
        try:
            (key_len,) = _U32.unpack_from(data, 4)
            (value_len,) = _U32.unpack_from(data, 8 + key_len)
        except struct.error as exc:
            raise CorruptedError("record too short") from exc
        value_start = 12 + key_len
        value = data[value_start:value_start + value_len]
        if data[value_start + value_len:] != hashlib.sha1(value).digest():
            raise CorruptedError()
        try:
            return cls(data[8:8 + key_len].decode(), value.decode())
        except UnicodeDecodeError as exc:
            raise CorruptedError("invalid text in record") from exc

    @classmethod
    def read_from(cls, stream: BinaryIO) -> tuple[Entry, int]:
        """Read one record; return it with its size. EOFError at end of stream."""
        header = stream.read(4)
        if len(header) < 4:
            raise EOFError("end of stream")
        (size,) = _U32.unpack(header)
        rest = stream.read(max(size - 4, 0))
        if size < 4 or len(rest) < size - 4:
            raise CorruptedError("cannot read record")
        return cls.decode(header + rest), size