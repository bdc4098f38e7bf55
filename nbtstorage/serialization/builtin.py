"""Built-in serializers for the thirteen tag variants.

Each serializer handles the payload of one variant. Container
serializers look up the serializer for each child in the shared
registry and call it directly, so every level of nesting costs a single
Python frame while decoding.

Cost charged to the size tracker per tag:

===============  =====================================
 variant          cost (bytes)
===============  =====================================
 End              64
 Byte             72
 Short            80
 Int / Float      96
 Long / Double    128
 ByteArray        192 + 8 per element
 String           288 + 16 per character
 List             296 + 32 per element
 Compound         384, plus 224 + 16 per key character
                  per entry, plus 288 per duplicate key
 IntArray         192 + 32 per element
 LongArray        192 + 64 per element
===============  =====================================
"""

import struct
from typing import Dict

from nbtstorage.config import MAX_DEPTH
from nbtstorage.exceptions import DepthLimitExceededException, MalformedTagException
from nbtstorage.serialization import size_tracker as costs
from nbtstorage.serialization.api import DataInput, DataOutput, TagSerializer
from nbtstorage.serialization.size_tracker import SizeTracker
from nbtstorage.tag.api import TagType
from nbtstorage.tag.builtin import (
    ByteArrayTag,
    ByteTag,
    DoubleTag,
    EndTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    LongArrayTag,
    LongTag,
    ShortTag,
    StringTag,
)
from nbtstorage.tag.collection import ListTag
from nbtstorage.tag.compound import CompoundTag


class EndSerializer(TagSerializer):
    """Serializer for the End sentinel. It has no payload."""

    @property
    def type_id(self) -> int:
        return TagType.END

    def write(self, output: DataOutput, tag: EndTag) -> None:
        pass

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> EndTag:
        tracker.read(costs.END_COST)
        return EndTag()


class ByteSerializer(TagSerializer):
    """Serializer for byte tags."""

    @property
    def type_id(self) -> int:
        return TagType.BYTE

    def write(self, output: DataOutput, tag: ByteTag) -> None:
        output.write_byte(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> ByteTag:
        tracker.read(costs.BYTE_COST)
        return ByteTag(input.read_byte())


class ShortSerializer(TagSerializer):
    """Serializer for short tags."""

    @property
    def type_id(self) -> int:
        return TagType.SHORT

    def write(self, output: DataOutput, tag: ShortTag) -> None:
        output.write_short(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> ShortTag:
        tracker.read(costs.SHORT_COST)
        return ShortTag(input.read_short())


class IntSerializer(TagSerializer):
    """Serializer for int tags."""

    @property
    def type_id(self) -> int:
        return TagType.INT

    def write(self, output: DataOutput, tag: IntTag) -> None:
        output.write_int(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> IntTag:
        tracker.read(costs.INT_COST)
        return IntTag(input.read_int())


class LongSerializer(TagSerializer):
    """Serializer for long tags."""

    @property
    def type_id(self) -> int:
        return TagType.LONG

    def write(self, output: DataOutput, tag: LongTag) -> None:
        output.write_long(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> LongTag:
        tracker.read(costs.LONG_COST)
        return LongTag(input.read_long())


class FloatSerializer(TagSerializer):
    """Serializer for float tags."""

    @property
    def type_id(self) -> int:
        return TagType.FLOAT

    def write(self, output: DataOutput, tag: FloatTag) -> None:
        output.write_float(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> FloatTag:
        tracker.read(costs.FLOAT_COST)
        return FloatTag(input.read_float())


class DoubleSerializer(TagSerializer):
    """Serializer for double tags."""

    @property
    def type_id(self) -> int:
        return TagType.DOUBLE

    def write(self, output: DataOutput, tag: DoubleTag) -> None:
        output.write_double(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> DoubleTag:
        tracker.read(costs.DOUBLE_COST)
        return DoubleTag(input.read_double())


def _read_length(input: DataInput, what: str) -> int:
    length = input.read_int()
    if length < 0:
        raise MalformedTagException(f"Negative {what} length {length}")
    return length


class ByteArraySerializer(TagSerializer):
    """Serializer for byte arrays: i32 length then raw bytes."""

    @property
    def type_id(self) -> int:
        return TagType.BYTE_ARRAY

    def write(self, output: DataOutput, tag: ByteArrayTag) -> None:
        data = tag.value
        output.write_int(len(data))
        output.write(data)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> ByteArrayTag:
        tracker.read(costs.ARRAY_COST)
        length = _read_length(input, "byte array")
        tracker.read(8 * length)
        return ByteArrayTag(input.read_fully(length))


class StringSerializer(TagSerializer):
    """Serializer for strings: u16 length then modified UTF-8."""

    @property
    def type_id(self) -> int:
        return TagType.STRING

    def write(self, output: DataOutput, tag: StringTag) -> None:
        output.write_utf(tag.value)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> StringTag:
        tracker.read(costs.STRING_COST)
        value = input.read_utf()
        tracker.read(costs.STRING_CHAR_COST * len(value))
        return StringTag(value)


class _IntegralArraySerializer(TagSerializer):
    _FORMAT = "i"
    _ELEMENT_COST = 32
    _TAG = IntArrayTag

    def write(self, output: DataOutput, tag) -> None:
        values = tag.value
        output.write_int(len(values))
        output.write(struct.pack(f">{len(values)}{self._FORMAT}", *values))

    def read(self, input: DataInput, depth: int, tracker: SizeTracker):
        tracker.read(costs.ARRAY_COST)
        length = _read_length(input, "array")
        tracker.read(self._ELEMENT_COST * length)
        data = input.read_fully(length * struct.calcsize(f">{self._FORMAT}"))
        return self._TAG(struct.unpack(f">{length}{self._FORMAT}", data))


class IntArraySerializer(_IntegralArraySerializer):
    """Serializer for int arrays: i32 length then i32 elements."""

    @property
    def type_id(self) -> int:
        return TagType.INT_ARRAY


class LongArraySerializer(_IntegralArraySerializer):
    """Serializer for long arrays: i32 length then i64 elements."""

    _FORMAT = "q"
    _ELEMENT_COST = 64
    _TAG = LongArrayTag

    @property
    def type_id(self) -> int:
        return TagType.LONG_ARRAY


class _ContainerSerializer(TagSerializer):
    def __init__(self, registry: Dict[int, TagSerializer], max_depth: int = MAX_DEPTH):
        self._registry = registry
        self._max_depth = max_depth

    def _serializer_for(self, type_id: int) -> TagSerializer:
        serializer = self._registry.get(type_id)
        if serializer is None:
            raise MalformedTagException(f"Unknown tag type id {type_id}")
        return serializer

    def _check_depth(self, depth: int) -> None:
        if depth > self._max_depth:
            raise DepthLimitExceededException(
                f"Tried to read NBT tag with too high complexity, depth > {self._max_depth}",
                depth=depth,
            )


class ListSerializer(_ContainerSerializer):
    """Serializer for lists: element type, i32 count, then payloads."""

    @property
    def type_id(self) -> int:
        return TagType.LIST

    def write(self, output: DataOutput, tag: ListTag) -> None:
        element_type = tag.element_type if len(tag) else TagType.END
        output.write_byte(element_type)
        output.write_int(len(tag))
        if len(tag):
            serializer = self._serializer_for(element_type)
            for element in tag:
                serializer.write(output, element)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> ListTag:
        tracker.read(costs.LIST_COST)
        self._check_depth(depth)

        element_type = input.read_byte()
        count = input.read_int()
        if count < 0:
            raise MalformedTagException(f"Negative list count {count}")
        if element_type == TagType.END and count > 0:
            raise MalformedTagException("Missing type on ListTag")

        tracker.read(costs.LIST_ELEMENT_COST * count)
        serializer = self._serializer_for(element_type)
        elements = []
        for _ in range(count):
            elements.append(serializer.read(input, depth + 1, tracker))

        result = ListTag()
        result._load(TagType(element_type), elements)
        return result


class CompoundSerializer(_ContainerSerializer):
    """Serializer for compounds: named entries closed by an End byte."""

    @property
    def type_id(self) -> int:
        return TagType.COMPOUND

    def write(self, output: DataOutput, tag: CompoundTag) -> None:
        for key, child in tag.items():
            output.write_byte(child.type_id)
            output.write_utf(key)
            self._serializer_for(child.type_id).write(output, child)
        output.write_byte(TagType.END)

    def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> CompoundTag:
        tracker.read(costs.COMPOUND_COST)
        self._check_depth(depth)

        result = CompoundTag()
        result._clear()
        while True:
            type_id = input.read_byte()
            if type_id == TagType.END:
                break
            key = input.read_utf()
            tracker.read(costs.COMPOUND_ENTRY_COST + costs.STRING_CHAR_COST * len(key))
            child = self._serializer_for(type_id).read(input, depth + 1, tracker)
            if key in result:
                tracker.read(costs.COMPOUND_DUPLICATE_COST)
            result.set_tag(key, child)
        return result


def get_builtin_serializers(max_depth: int = MAX_DEPTH) -> Dict[int, TagSerializer]:
    """Build the serializer registry keyed by type id.

    Args:
        max_depth: Deepest nesting the container serializers accept.

    Returns:
        A mapping from type id to serializer covering all thirteen variants.
    """
    registry: Dict[int, TagSerializer] = {}
    for serializer in (
        EndSerializer(),
        ByteSerializer(),
        ShortSerializer(),
        IntSerializer(),
        LongSerializer(),
        FloatSerializer(),
        DoubleSerializer(),
        ByteArraySerializer(),
        StringSerializer(),
        ListSerializer(registry, max_depth),
        CompoundSerializer(registry, max_depth),
        IntArraySerializer(),
        LongArraySerializer(),
    ):
        registry[int(serializer.type_id)] = serializer
    return registry
