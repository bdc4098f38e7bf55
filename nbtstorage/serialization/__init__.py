"""Binary codec for tag trees."""

from nbtstorage.serialization.api import DataInput, DataOutput, TagSerializer
from nbtstorage.serialization.builtin import get_builtin_serializers
from nbtstorage.serialization.service import (
    TagSerializationService,
    read_compressed,
    read_tag,
    write_compressed,
    write_tag,
)
from nbtstorage.serialization.size_tracker import SizeTracker
from nbtstorage.serialization.stream import StreamDataInput, StreamDataOutput

__all__ = [
    "DataInput",
    "DataOutput",
    "TagSerializer",
    "get_builtin_serializers",
    "TagSerializationService",
    "SizeTracker",
    "StreamDataInput",
    "StreamDataOutput",
    "read_tag",
    "write_tag",
    "read_compressed",
    "write_compressed",
]
