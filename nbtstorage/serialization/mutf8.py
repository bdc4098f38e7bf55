"""Modified UTF-8, as written by Java's ``DataOutput.writeUTF``.

It differs from standard UTF-8 in two ways: U+0000 is written as the
two bytes ``C0 80``, and characters outside the BMP are written as a
surrogate pair with each half encoded on its own in three bytes.
"""

import struct

from nbtstorage.exceptions import MalformedTagException


def encode_modified_utf8(text: str) -> bytes:
    """Encode text as modified UTF-8 (without the length prefix)."""
    if text.isascii() and "\x00" not in text:
        return text.encode("ascii")

    out = bytearray()
    units = text.encode("utf-16-be", "surrogatepass")
    for (unit,) in struct.iter_unpack(">H", units):
        if 0x0001 <= unit <= 0x007F:
            out.append(unit)
        elif unit <= 0x07FF:
            out.append(0xC0 | (unit >> 6))
            out.append(0x80 | (unit & 0x3F))
        else:
            out.append(0xE0 | (unit >> 12))
            out.append(0x80 | ((unit >> 6) & 0x3F))
            out.append(0x80 | (unit & 0x3F))
    return bytes(out)


def decode_modified_utf8(data: bytes) -> str:
    """Decode modified UTF-8 bytes (without the length prefix).

    Raises:
        MalformedTagException: If the bytes are not valid modified UTF-8.
    """
    if data.isascii():
        return data.decode("ascii")

    units = []
    index, length = 0, len(data)
    while index < length:
        first = data[index]
        if first < 0x80:
            units.append(first)
            index += 1
        elif first & 0xE0 == 0xC0:
            if index + 1 >= length:
                raise MalformedTagException(f"Partial character at end of string (byte {index})")
            second = data[index + 1]
            if second & 0xC0 != 0x80:
                raise MalformedTagException(f"Malformed input around byte {index}")
            units.append(((first & 0x1F) << 6) | (second & 0x3F))
            index += 2
        elif first & 0xF0 == 0xE0:
            if index + 2 >= length:
                raise MalformedTagException(f"Partial character at end of string (byte {index})")
            second, third = data[index + 1], data[index + 2]
            if second & 0xC0 != 0x80 or third & 0xC0 != 0x80:
                raise MalformedTagException(f"Malformed input around byte {index}")
            units.append(((first & 0x0F) << 12) | ((second & 0x3F) << 6) | (third & 0x3F))
            index += 3
        else:
            raise MalformedTagException(f"Malformed input around byte {index}")

    return struct.pack(f">{len(units)}H", *units).decode("utf-16-be", "surrogatepass")
