"""NBT storage exceptions.

This module defines the exception hierarchy for the nbtstorage package.
All exceptions inherit from :class:`NBTException`.

Decoding failures come in two flavours. :class:`MalformedTagException`
covers truncated or corrupt streams, while :class:`TagLimitException`
signals that a stream was rejected by the size or depth guard. Callers
may want to log the latter as potential abuse.

Example:
    Handling decode failures::

        from nbtstorage.exceptions import (
            MalformedTagException,
            TagLimitException,
            NBTException,
        )

        try:
            compound = read_compressed(stream)
        except TagLimitException:
            print("Rejected oversized payload")
        except MalformedTagException as e:
            print(f"Corrupt file: {e}")
        except NBTException as e:
            print(f"NBT error: {e}")
"""


class NBTException(Exception):
    """Base class for all nbtstorage exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class IllegalArgumentException(NBTException):
    """Raised when an illegal or inappropriate argument is passed.

    Example:
        - Storing 300 in a ByteTag
        - Passing None as the value of a StringTag
        - Asking a compound to store an unsupported Python type
    """
    pass


class ConfigurationException(NBTException):
    """Raised when there is a configuration error.

    Example:
        - Negative size limit
        - Depth limit outside the supported range
        - Unreadable YAML configuration file
    """
    pass


class TagSerializationException(NBTException):
    """Raised when a tag tree cannot be written to or read from a stream.

    Example:
        - A string whose modified UTF-8 form exceeds 65535 bytes
        - Writing an EndTag where a value is required
    """
    pass


class MalformedTagException(TagSerializationException):
    """Raised when a binary stream does not hold a valid tag tree.

    The whole decode attempt must be discarded; no partial tree is
    ever returned.

    Example:
        - Truncated stream
        - Invalid modified UTF-8 sequence
        - Negative list count or unknown type id
        - Corrupt gzip framing
    """
    pass


class TagLimitException(NBTException):
    """Base class for defensive rejections of hostile or oversized input.

    These failures are not retryable: the same stream will always be
    rejected under the same limits.
    """
    pass


class SizeLimitExceededException(TagLimitException):
    """Raised when decoding would exceed the configured byte budget.

    Args:
        message: The error message.
        limit: The configured ceiling in bytes.
        read_bytes: The running total at the time of failure.
    """

    def __init__(self, message: str, limit: int = -1, read_bytes: int = -1):
        super().__init__(message)
        self._limit = limit
        self._read_bytes = read_bytes

    @property
    def limit(self) -> int:
        """Get the configured byte ceiling."""
        return self._limit

    @property
    def read_bytes(self) -> int:
        """Get the accounted total that tripped the limit."""
        return self._read_bytes


class DepthLimitExceededException(TagLimitException):
    """Raised when compounds or lists are nested deeper than allowed.

    Args:
        message: The error message.
        depth: The depth at which decoding was aborted.
    """

    def __init__(self, message: str, depth: int = -1):
        super().__init__(message)
        self._depth = depth

    @property
    def depth(self) -> int:
        """Get the depth that triggered the failure."""
        return self._depth


class ParseException(NBTException):
    """Raised when SNBT text cannot be parsed.

    The rendered message carries the position of the failure and a short
    window of the input leading up to it::

        Expected value at position 3: {a:<--[HERE]

    Args:
        message: The bare error message.
        input: The full text being parsed.
        cursor: Offset of the failing character.

    Attributes:
        CONTEXT_AMOUNT: Number of characters shown before the cursor.
    """

    CONTEXT_AMOUNT = 10

    def __init__(self, message: str, input: str, cursor: int):
        self._raw_message = message
        self._input = input
        self._cursor = cursor
        super().__init__(self._render())

    @property
    def raw_message(self) -> str:
        """Get the message without position information."""
        return self._raw_message

    @property
    def input(self) -> str:
        """Get the text that failed to parse."""
        return self._input

    @property
    def cursor(self) -> int:
        """Get the offset where parsing failed."""
        return self._cursor

    @property
    def context(self) -> str:
        """Get the context window ending at the failing offset."""
        cursor = min(len(self._input), self._cursor)
        prefix = "..." if cursor > self.CONTEXT_AMOUNT else ""
        window = self._input[max(0, cursor - self.CONTEXT_AMOUNT):cursor]
        return f"{prefix}{window}<--[HERE]"

    def _render(self) -> str:
        return f"{self._raw_message} at position {self._cursor}: {self.context}"
