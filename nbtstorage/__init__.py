"""nbtstorage - NBT tag trees, their binary codec and SNBT text form."""

from nbtstorage.config import (
    StorageConfig,
    CodecConfig,
    ParserConfig,
)
from nbtstorage.exceptions import (
    NBTException,
    IllegalArgumentException,
    ConfigurationException,
    TagSerializationException,
    MalformedTagException,
    TagLimitException,
    SizeLimitExceededException,
    DepthLimitExceededException,
    ParseException,
)
from nbtstorage.tag import (
    ANY_NUMERIC,
    Tag,
    TagType,
    tag_type_name,
    create_tag,
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
    ListTag,
    CompoundTag,
)
from nbtstorage.types import Color, ColorFormat, Position
from nbtstorage.serialization import (
    SizeTracker,
    TagSerializationService,
    read_tag,
    write_tag,
    read_compressed,
    write_compressed,
)
from nbtstorage.snbt import SNBTParser, StringReader, parse, to_compound, to_list
from nbtstorage.file import StorageFile

__all__ = [
    # Configuration
    "StorageConfig",
    "CodecConfig",
    "ParserConfig",
    # Exceptions
    "NBTException",
    "IllegalArgumentException",
    "ConfigurationException",
    "TagSerializationException",
    "MalformedTagException",
    "TagLimitException",
    "SizeLimitExceededException",
    "DepthLimitExceededException",
    "ParseException",
    # Tags
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
    # Composite values
    "Color",
    "ColorFormat",
    "Position",
    # Binary codec
    "SizeTracker",
    "TagSerializationService",
    "read_tag",
    "write_tag",
    "read_compressed",
    "write_compressed",
    # SNBT
    "SNBTParser",
    "StringReader",
    "parse",
    "to_compound",
    "to_list",
    # Files
    "StorageFile",
]

__version__ = "0.1.0"
