"""Stream implementations of the data interfaces."""

import struct
from typing import BinaryIO

from nbtstorage.exceptions import MalformedTagException, TagSerializationException
from nbtstorage.serialization.api import DataInput, DataOutput
from nbtstorage.serialization.mutf8 import decode_modified_utf8, encode_modified_utf8


MAX_UTF_LENGTH = 0xFFFF

# Reads are split so a bogus length never triggers one huge allocation.
_READ_CHUNK = 64 * 1024

_BYTE = struct.Struct(">b")
_UBYTE = struct.Struct(">B")
_SHORT = struct.Struct(">h")
_USHORT = struct.Struct(">H")
_INT = struct.Struct(">i")
_LONG = struct.Struct(">q")
_FLOAT = struct.Struct(">f")
_DOUBLE = struct.Struct(">d")


class StreamDataInput(DataInput):
    """Big-endian reader over a binary file-like object."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._position = 0

    def read_fully(self, length: int) -> bytes:
        if length < 0:
            raise MalformedTagException(f"Negative read length {length}")
        chunks = []
        remaining = length
        while remaining > 0:
            chunk = self._stream.read(min(remaining, _READ_CHUNK))
            if not chunk:
                raise MalformedTagException(
                    f"Unexpected end of stream at offset {self._position + length - remaining}: "
                    f"needed {remaining} more bytes"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
        self._position += length
        return b"".join(chunks)

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self.read_fully(fmt.size))[0]

    def read_byte(self) -> int:
        return self._unpack(_BYTE)

    def read_unsigned_byte(self) -> int:
        return self._unpack(_UBYTE)

    def read_short(self) -> int:
        return self._unpack(_SHORT)

    def read_unsigned_short(self) -> int:
        return self._unpack(_USHORT)

    def read_int(self) -> int:
        return self._unpack(_INT)

    def read_long(self) -> int:
        return self._unpack(_LONG)

    def read_float(self) -> float:
        return self._unpack(_FLOAT)

    def read_double(self) -> float:
        return self._unpack(_DOUBLE)

    def read_utf(self) -> str:
        length = self.read_unsigned_short()
        return decode_modified_utf8(self.read_fully(length))

    @property
    def position(self) -> int:
        return self._position


class StreamDataOutput(DataOutput):
    """Big-endian writer over a binary file-like object."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def write(self, data: bytes) -> None:
        self._stream.write(data)

    def write_byte(self, value: int) -> None:
        self._stream.write(_BYTE.pack(value))

    def write_short(self, value: int) -> None:
        self._stream.write(_SHORT.pack(value))

    def write_int(self, value: int) -> None:
        self._stream.write(_INT.pack(value))

    def write_long(self, value: int) -> None:
        self._stream.write(_LONG.pack(value))

    def write_float(self, value: float) -> None:
        self._stream.write(_FLOAT.pack(value))

    def write_double(self, value: float) -> None:
        self._stream.write(_DOUBLE.pack(value))

    def write_utf(self, value: str) -> None:
        encoded = encode_modified_utf8(value)
        if len(encoded) > MAX_UTF_LENGTH:
            raise TagSerializationException(
                f"Encoded string too long: {len(encoded)} bytes"
            )
        self._stream.write(_USHORT.pack(len(encoded)))
        self._stream.write(encoded)
