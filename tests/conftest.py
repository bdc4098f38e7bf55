"""Shared pytest fixtures for nbtstorage tests."""

import pytest

from nbtstorage.config import CodecConfig
from nbtstorage.serialization.service import TagSerializationService
from nbtstorage.tag import (
    ByteArrayTag,
    ByteTag,
    CompoundTag,
    DoubleTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    ListTag,
    LongArrayTag,
    LongTag,
    ShortTag,
    StringTag,
)


def nest_compounds(levels: int) -> CompoundTag:
    """Build a root compound with ``levels`` compounds nested below it.

    Built iteratively so arbitrarily deep trees can be made without
    recursion.
    """
    root = CompoundTag()
    current = root
    for _ in range(levels):
        child = CompoundTag()
        current.set_tag("a", child)
        current = child
    return root


def nest_lists(levels: int) -> ListTag:
    """Build a root list with ``levels`` lists nested below it."""
    root = ListTag()
    current = root
    for _ in range(levels):
        child = ListTag()
        current.append(child)
        current = child
    return root


@pytest.fixture
def service():
    """Create a TagSerializationService with default limits."""
    return TagSerializationService()


@pytest.fixture
def limited_service():
    """Create a TagSerializationService with a small byte budget."""
    return TagSerializationService(CodecConfig(size_limit=4096))


@pytest.fixture
def sample_compound():
    """Create a compound holding every tag variant."""
    compound = CompoundTag()
    compound.set_tag("byte", ByteTag(-7))
    compound.set_tag("short", ShortTag(1234))
    compound.set_tag("int", IntTag(-123456))
    compound.set_tag("long", LongTag(2 ** 40))
    compound.set_tag("float", FloatTag(1.25))
    compound.set_tag("double", DoubleTag(-2.5))
    compound.set_tag("bytes", ByteArrayTag([1, -2, 3]))
    compound.set_tag("text", StringTag("héllo \x00 wörld \U0001F600"))
    compound.set_tag("ints", IntArrayTag([1, -2, 2 ** 31 - 1]))
    compound.set_tag("longs", LongArrayTag([-(2 ** 63), 0, 2 ** 63 - 1]))
    compound.set_tag("list", ListTag([StringTag("a"), StringTag("b")]))
    nested = CompoundTag()
    nested.set_int("x", 1)
    nested.set_tag("empty", ListTag())
    compound.set_tag("nested", nested)
    return compound
