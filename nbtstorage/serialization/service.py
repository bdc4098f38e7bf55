"""Tag serialization service implementation."""

import gzip
import io
import zlib
from typing import BinaryIO, Optional

from nbtstorage.config import CodecConfig
from nbtstorage.exceptions import (
    IllegalArgumentException,
    MalformedTagException,
    TagLimitException,
)
from nbtstorage.logging import get_logger
from nbtstorage.serialization.builtin import get_builtin_serializers
from nbtstorage.serialization.size_tracker import SizeTracker
from nbtstorage.serialization.stream import StreamDataInput, StreamDataOutput
from nbtstorage.tag.api import Tag, TagType
from nbtstorage.tag.builtin import EndTag
from nbtstorage.tag.compound import CompoundTag


_logger = get_logger("serialization")


class TagSerializationService:
    """Service for encoding and decoding tag trees.

    Writes the binary layout ``type:u8, name:utf, payload`` with an
    empty root name, and reads it back with the depth and size limits of
    its :class:`CodecConfig`. The compressed variants frame the same
    bytes in gzip.

    Args:
        config: Codec limits. Defaults to ``CodecConfig()``.

    Example:
        >>> service = TagSerializationService()
        >>> data = service.to_bytes(CompoundTag().set_int("a", 1))
        >>> service.from_bytes(data).get_int("a")
        1
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self._config = config or CodecConfig()
        self._serializers = get_builtin_serializers(self._config.max_depth)

    @property
    def config(self) -> CodecConfig:
        return self._config

    def new_tracker(self) -> SizeTracker:
        """Create a tracker bound to the configured size limit."""
        return SizeTracker(self._config.size_limit)

    def write_tag(self, tag: Tag, stream: BinaryIO) -> None:
        """Write ``tag`` as a root tag with an empty name.

        Args:
            tag: The tag to write.
            stream: A binary writable stream.
        """
        if not isinstance(tag, Tag):
            raise IllegalArgumentException(f"Expected a Tag, got {type(tag).__name__}")
        output = StreamDataOutput(stream)
        output.write_byte(tag.type_id)
        if tag.type_id != TagType.END:
            output.write_utf("")
            self._serializers[tag.type_id].write(output, tag)

    def read_tag(self, stream: BinaryIO, tracker: Optional[SizeTracker] = None) -> Tag:
        """Read a root tag.

        Args:
            stream: A binary readable stream.
            tracker: Budget for the decode. A new one bound to the
                configured size limit is used when omitted.

        Returns:
            The decoded tag, or an :class:`EndTag` when the stream holds
            only the End marker.

        Raises:
            MalformedTagException: If the stream is truncated or invalid.
            TagLimitException: If a depth or size limit is exceeded.
        """
        if tracker is None:
            tracker = self.new_tracker()
        input = StreamDataInput(stream)

        type_id = input.read_byte()
        if type_id == TagType.END:
            return EndTag()
        serializer = self._serializers.get(type_id)
        if serializer is None:
            raise MalformedTagException(f"Unknown tag type id {type_id}")

        input.read_utf()
        try:
            tag = serializer.read(input, 0, tracker)
        except TagLimitException as e:
            _logger.warning("Rejected NBT payload at offset %d: %s", input.position, e)
            raise
        _logger.debug(
            "Decoded %s (%d bytes, %d accounted)",
            tag.type_id.display_name,
            input.position,
            tracker.read_bytes,
        )
        return tag

    def to_bytes(self, tag: Tag) -> bytes:
        """Encode ``tag`` as uncompressed bytes."""
        buffer = io.BytesIO()
        self.write_tag(tag, buffer)
        return buffer.getvalue()

    def from_bytes(self, data: bytes, tracker: Optional[SizeTracker] = None) -> Tag:
        """Decode uncompressed bytes into a tag."""
        return self.read_tag(io.BytesIO(data), tracker)

    def write_compressed(self, tag: CompoundTag, stream: BinaryIO) -> None:
        """Write ``tag`` gzip-compressed.

        Raises:
            IllegalArgumentException: If ``tag`` is not a compound.
        """
        if not isinstance(tag, CompoundTag):
            raise IllegalArgumentException("Compressed root tag must be a CompoundTag")
        with gzip.GzipFile(
            fileobj=stream,
            mode="wb",
            compresslevel=self._config.compression_level,
            mtime=0,
        ) as gz:
            self.write_tag(tag, gz)

    def read_compressed(
        self, stream: BinaryIO, tracker: Optional[SizeTracker] = None
    ) -> CompoundTag:
        """Read a gzip-compressed root compound.

        Raises:
            MalformedTagException: If the gzip framing is corrupt or the
                root is not a compound.
        """
        try:
            with gzip.GzipFile(fileobj=stream, mode="rb") as gz:
                tag = self.read_tag(gz, tracker)
        except (OSError, EOFError, zlib.error) as e:
            raise MalformedTagException(f"Invalid compressed NBT data: {e}", e)

        if not isinstance(tag, CompoundTag):
            raise MalformedTagException("Root tag must be a named compound tag")
        return tag

    def to_compressed_bytes(self, tag: CompoundTag) -> bytes:
        """Encode ``tag`` as gzip-compressed bytes."""
        buffer = io.BytesIO()
        self.write_compressed(tag, buffer)
        return buffer.getvalue()

    def from_compressed_bytes(
        self, data: bytes, tracker: Optional[SizeTracker] = None
    ) -> CompoundTag:
        """Decode gzip-compressed bytes into a compound."""
        return self.read_compressed(io.BytesIO(data), tracker)


_default_service = TagSerializationService()


def write_tag(tag: Tag, stream: BinaryIO) -> None:
    _default_service.write_tag(tag, stream)


def read_tag(stream: BinaryIO, tracker: Optional[SizeTracker] = None) -> Tag:
    return _default_service.read_tag(stream, tracker)


def write_compressed(tag: CompoundTag, stream: BinaryIO) -> None:
    _default_service.write_compressed(tag, stream)


def read_compressed(stream: BinaryIO, tracker: Optional[SizeTracker] = None) -> CompoundTag:
    return _default_service.read_compressed(stream, tracker)
