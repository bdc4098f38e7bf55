"""Serialization API interfaces.

This module defines the interfaces used by the binary codec: stream
readers and writers for big-endian primitives and modified UTF-8, and
the per-variant :class:`TagSerializer`.

Example:
    Shape of a serializer::

        class ByteSerializer(TagSerializer):
            @property
            def type_id(self) -> int:
                return TagType.BYTE

            def write(self, output: DataOutput, tag: ByteTag) -> None:
                output.write_byte(tag.value)

            def read(self, input: DataInput, depth: int, tracker: SizeTracker) -> ByteTag:
                tracker.read(72)
                return ByteTag(input.read_byte())
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nbtstorage.serialization.size_tracker import SizeTracker
    from nbtstorage.tag.api import Tag


class DataInput(ABC):
    """Interface for reading big-endian binary data.

    Implementations raise :class:`~nbtstorage.exceptions.MalformedTagException`
    when the underlying stream ends early.
    """

    @abstractmethod
    def read_fully(self, length: int) -> bytes:
        """Read exactly ``length`` bytes.

        Args:
            length: Number of bytes to read.

        Returns:
            The bytes read.
        """
        pass

    @abstractmethod
    def read_byte(self) -> int:
        """Read a signed 8-bit value."""
        pass

    @abstractmethod
    def read_unsigned_byte(self) -> int:
        """Read an unsigned 8-bit value."""
        pass

    @abstractmethod
    def read_short(self) -> int:
        """Read a signed 16-bit value."""
        pass

    @abstractmethod
    def read_unsigned_short(self) -> int:
        """Read an unsigned 16-bit value."""
        pass

    @abstractmethod
    def read_int(self) -> int:
        """Read a signed 32-bit value."""
        pass

    @abstractmethod
    def read_long(self) -> int:
        """Read a signed 64-bit value."""
        pass

    @abstractmethod
    def read_float(self) -> float:
        """Read an IEEE-754 binary32 value."""
        pass

    @abstractmethod
    def read_double(self) -> float:
        """Read an IEEE-754 binary64 value."""
        pass

    @abstractmethod
    def read_utf(self) -> str:
        """Read a length-prefixed modified UTF-8 string.

        Returns:
            The decoded text.
        """
        pass

    @property
    @abstractmethod
    def position(self) -> int:
        """Get the number of bytes consumed so far."""
        pass


class DataOutput(ABC):
    """Interface for writing big-endian binary data."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write raw bytes."""
        pass

    @abstractmethod
    def write_byte(self, value: int) -> None:
        """Write a signed 8-bit value."""
        pass

    @abstractmethod
    def write_short(self, value: int) -> None:
        """Write a signed 16-bit value."""
        pass

    @abstractmethod
    def write_int(self, value: int) -> None:
        """Write a signed 32-bit value."""
        pass

    @abstractmethod
    def write_long(self, value: int) -> None:
        """Write a signed 64-bit value."""
        pass

    @abstractmethod
    def write_float(self, value: float) -> None:
        """Write an IEEE-754 binary32 value."""
        pass

    @abstractmethod
    def write_double(self, value: float) -> None:
        """Write an IEEE-754 binary64 value."""
        pass

    @abstractmethod
    def write_utf(self, value: str) -> None:
        """Write a length-prefixed modified UTF-8 string.

        Raises:
            TagSerializationException: If the encoded form exceeds 65535 bytes.
        """
        pass


class TagSerializer(ABC):
    """Reads and writes the payload of one tag variant.

    The type byte and entry name are handled by the caller; a serializer
    only deals with what follows them.
    """

    @property
    @abstractmethod
    def type_id(self) -> int:
        """Get the wire type id this serializer handles."""
        pass

    @abstractmethod
    def write(self, output: DataOutput, tag: "Tag") -> None:
        """Write the payload of ``tag``.

        Args:
            output: The output stream.
            tag: The tag to write.
        """
        pass

    @abstractmethod
    def read(self, input: DataInput, depth: int, tracker: "SizeTracker") -> "Tag":
        """Read a payload and build the tag.

        The estimated cost of the tag is charged to ``tracker`` before
        anything is allocated for it.

        Args:
            input: The input stream.
            depth: Nesting depth of this tag, 0 for the root.
            tracker: Budget for the whole decode.

        Returns:
            The decoded tag.
        """
        pass
