"""NBT tag model package."""

from nbtstorage.exceptions import MalformedTagException
from nbtstorage.tag.api import (
    ANY_NUMERIC,
    Tag,
    TagType,
    tag_type_name,
)
from nbtstorage.tag.builtin import (
    EndTag,
    NumericTag,
    ByteTag,
    ShortTag,
    IntTag,
    LongTag,
    FloatTag,
    DoubleTag,
    StringTag,
    ByteArrayTag,
    IntArrayTag,
    LongArrayTag,
)
from nbtstorage.tag.collection import ListTag
from nbtstorage.tag.compound import CompoundTag


_TAG_CLASSES = {
    TagType.END: EndTag,
    TagType.BYTE: ByteTag,
    TagType.SHORT: ShortTag,
    TagType.INT: IntTag,
    TagType.LONG: LongTag,
    TagType.FLOAT: FloatTag,
    TagType.DOUBLE: DoubleTag,
    TagType.BYTE_ARRAY: ByteArrayTag,
    TagType.STRING: StringTag,
    TagType.LIST: ListTag,
    TagType.COMPOUND: CompoundTag,
    TagType.INT_ARRAY: IntArrayTag,
    TagType.LONG_ARRAY: LongArrayTag,
}


def create_tag(type_id: int) -> Tag:
    """Create an empty tag for a wire type id.

    Raises:
        MalformedTagException: If the id is not one of the thirteen variants.
    """
    try:
        return _TAG_CLASSES[TagType(type_id)]()
    except ValueError:
        raise MalformedTagException(f"Unknown tag type id {type_id}")


__all__ = [
    "ANY_NUMERIC",
    "Tag",
    "TagType",
    "tag_type_name",
    "create_tag",
    "EndTag",
    "NumericTag",
    "ByteTag",
    "ShortTag",
    "IntTag",
    "LongTag",
    "FloatTag",
    "DoubleTag",
    "StringTag",
    "ByteArrayTag",
    "IntArrayTag",
    "LongArrayTag",
    "ListTag",
    "CompoundTag",
]
