"""Leaf tag variants.

This module provides the End sentinel, the six numeric tags, the String
tag and the three typed arrays. Containers live in
:mod:`nbtstorage.tag.collection` and :mod:`nbtstorage.tag.compound`.

Numeric tags validate their value against the signed width of the wire
type. :class:`FloatTag` keeps its value rounded to binary32 so that a
tag compares equal to itself after a binary round trip.
"""

import math
import numbers
import operator
import struct
from typing import Iterable, List, Union

from nbtstorage.exceptions import IllegalArgumentException
from nbtstorage.tag.api import Tag, TagType, quote_string


BYTE_MIN, BYTE_MAX = -(2 ** 7), 2 ** 7 - 1
SHORT_MIN, SHORT_MAX = -(2 ** 15), 2 ** 15 - 1
INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1
LONG_MIN, LONG_MAX = -(2 ** 63), 2 ** 63 - 1


def wrap_signed(value: int, bits: int) -> int:
    """Narrow an integer to a signed two's-complement width."""
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 binary32 value."""
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def check_signed(value, bits: int, name: str) -> int:
    """Validate that ``value`` is an integer fitting ``bits`` signed bits.

    Raises:
        IllegalArgumentException: If the value is not integral or out of range.
    """
    try:
        value = operator.index(value)
    except TypeError:
        raise IllegalArgumentException(
            f"{name} requires an integer, got {type(value).__name__}"
        )
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if value < low or value > high:
        raise IllegalArgumentException(f"{name} value {value} out of range [{low}, {high}]")
    return int(value)


class EndTag(Tag):
    """Terminator sentinel. Never stored inside a container."""

    __slots__ = ()

    @property
    def type_id(self) -> TagType:
        return TagType.END

    def copy(self) -> "EndTag":
        return EndTag()

    def to_snbt(self) -> str:
        return "END"

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        return True

    def __hash__(self) -> int:
        return int(TagType.END)

    def __repr__(self) -> str:
        return "EndTag()"


class NumericTag(Tag):
    """Base of the six numeric leaves.

    The ``as_*`` accessors convert between widths the way a primitive
    cast would: integers wrap, floating values are floored and then
    saturate into the integer range.
    """

    __slots__ = ("_value",)

    @property
    def value(self) -> Union[int, float]:
        """Get the stored value."""
        return self._value

    def as_long(self) -> int:
        return wrap_signed(self._value, 64)

    def as_int(self) -> int:
        return wrap_signed(self._value, 32)

    def as_short(self) -> int:
        return wrap_signed(self._value, 16)

    def as_byte(self) -> int:
        return wrap_signed(self._value, 8)

    def as_double(self) -> float:
        return float(self._value)

    def as_float(self) -> float:
        return to_float32(float(self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class _IntegralTag(NumericTag):
    __slots__ = ()

    _BITS = 32
    _SUFFIX = ""

    def __init__(self, value: int = 0):
        self._value = check_signed(value, self._BITS, type(self).__name__)

    def copy(self) -> "_IntegralTag":
        return type(self)(self._value)

    def to_snbt(self) -> str:
        return f"{self._value}{self._SUFFIX}"

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((int(self.type_id), self._value))


class ByteTag(_IntegralTag):
    """8-bit signed integer. Also the wire encoding of booleans."""

    __slots__ = ()
    _BITS = 8
    _SUFFIX = "b"

    @property
    def type_id(self) -> TagType:
        return TagType.BYTE


class ShortTag(_IntegralTag):
    """16-bit signed integer."""

    __slots__ = ()
    _BITS = 16
    _SUFFIX = "s"

    @property
    def type_id(self) -> TagType:
        return TagType.SHORT


class IntTag(_IntegralTag):
    """32-bit signed integer."""

    __slots__ = ()
    _BITS = 32

    @property
    def type_id(self) -> TagType:
        return TagType.INT


class LongTag(_IntegralTag):
    """64-bit signed integer."""

    __slots__ = ()
    _BITS = 64
    _SUFFIX = "L"

    @property
    def type_id(self) -> TagType:
        return TagType.LONG


class _FloatingTag(NumericTag):
    __slots__ = ()

    _PACK = ">d"
    _SUFFIX = "d"

    def __init__(self, value: float = 0.0):
        if not isinstance(value, numbers.Real):
            raise IllegalArgumentException(
                f"{type(self).__name__} requires a number, got {type(value).__name__}"
            )
        self._value = self._round(float(value))

    @staticmethod
    def _round(value: float) -> float:
        return value

    def _saturate(self, low: int, high: int) -> int:
        if math.isnan(self._value):
            return 0
        if math.isinf(self._value):
            return high if self._value > 0 else low
        return max(low, min(high, math.floor(self._value)))

    def as_long(self) -> int:
        return self._saturate(LONG_MIN, LONG_MAX)

    def as_int(self) -> int:
        return self._saturate(INT_MIN, INT_MAX)

    def as_short(self) -> int:
        return wrap_signed(self.as_int(), 16)

    def as_byte(self) -> int:
        return wrap_signed(self.as_int(), 8)

    def copy(self) -> "_FloatingTag":
        return type(self)(self._value)

    def to_snbt(self) -> str:
        return f"{self._value!r}{self._SUFFIX}"

    def _bits(self) -> bytes:
        return struct.pack(self._PACK, self._value)

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        # Bit pattern comparison keeps NaN equal to itself.
        return self._bits() == other._bits()

    def __hash__(self) -> int:
        return hash((int(self.type_id), self._bits()))


class FloatTag(_FloatingTag):
    """IEEE-754 binary32 value."""

    __slots__ = ()
    _PACK = ">f"
    _SUFFIX = "f"

    @staticmethod
    def _round(value: float) -> float:
        return to_float32(value)

    @property
    def type_id(self) -> TagType:
        return TagType.FLOAT


class DoubleTag(_FloatingTag):
    """IEEE-754 binary64 value."""

    __slots__ = ()

    @property
    def type_id(self) -> TagType:
        return TagType.DOUBLE


class StringTag(Tag):
    """Text value. Encoded as modified UTF-8 on the wire."""

    __slots__ = ("_value",)

    def __init__(self, value: str = ""):
        if value is None:
            raise IllegalArgumentException("Null string not allowed")
        if not isinstance(value, str):
            raise IllegalArgumentException(
                f"StringTag requires a str, got {type(value).__name__}"
            )
        self._value = value

    @property
    def type_id(self) -> TagType:
        return TagType.STRING

    @property
    def value(self) -> str:
        """Get the stored text."""
        return self._value

    def is_empty(self) -> bool:
        return not self._value

    def copy(self) -> "StringTag":
        return StringTag(self._value)

    def to_snbt(self) -> str:
        return quote_string(self._value)

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((int(TagType.STRING), self._value))

    def __repr__(self) -> str:
        return f"StringTag({self._value!r})"


class ByteArrayTag(Tag):
    """Raw byte sequence.

    Accepts ``bytes``-like objects or an iterable of integers in either
    signed (-128..127) or unsigned (0..255) form. SNBT renders the
    signed form.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[bytes, bytearray, Iterable[int]] = b""):
        if isinstance(value, (bytes, bytearray, memoryview)):
            self._value = bytearray(value)
            return
        data = bytearray()
        for item in value:
            item = check_signed(item, 16, "ByteArrayTag element")
            if item < BYTE_MIN or item > 0xFF:
                raise IllegalArgumentException(f"Byte value {item} out of range")
            data.append(item & 0xFF)
        self._value = data

    @property
    def type_id(self) -> TagType:
        return TagType.BYTE_ARRAY

    @property
    def value(self) -> bytes:
        """Get a copy of the stored bytes."""
        return bytes(self._value)

    def signed_values(self) -> List[int]:
        """Get the bytes as signed integers."""
        return [wrap_signed(b, 8) for b in self._value]

    def __len__(self) -> int:
        return len(self._value)

    def is_empty(self) -> bool:
        return not self._value

    def copy(self) -> "ByteArrayTag":
        return ByteArrayTag(self._value)

    def to_snbt(self) -> str:
        return "[B;" + ",".join(f"{v}B" for v in self.signed_values()) + "]"

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        return self._value == other._value

    def __repr__(self) -> str:
        return f"ByteArrayTag({bytes(self._value)!r})"


class _IntegralArrayTag(Tag):
    __slots__ = ("_values",)

    _BITS = 32
    _PREFIX = "I"
    _SUFFIX = ""

    def __init__(self, values: Iterable[int] = ()):
        name = f"{type(self).__name__} element"
        self._values = [check_signed(v, self._BITS, name) for v in values]

    @property
    def value(self) -> List[int]:
        """Get a copy of the stored values."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def copy(self) -> "_IntegralArrayTag":
        return type(self)(self._values)

    def to_snbt(self) -> str:
        body = ",".join(f"{v}{self._SUFFIX}" for v in self._values)
        return f"[{self._PREFIX};{body}]"

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        return self._values == other._values

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


class IntArrayTag(_IntegralArrayTag):
    """Sequence of 32-bit signed integers."""

    __slots__ = ()

    @property
    def type_id(self) -> TagType:
        return TagType.INT_ARRAY


class LongArrayTag(_IntegralArrayTag):
    """Sequence of 64-bit signed integers."""

    __slots__ = ()
    _BITS = 64
    _PREFIX = "L"
    _SUFFIX = "L"

    @property
    def type_id(self) -> TagType:
        return TagType.LONG_ARRAY
