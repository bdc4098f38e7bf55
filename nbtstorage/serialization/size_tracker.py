"""Decode budget accounting.

A :class:`SizeTracker` accumulates the estimated in-memory cost of a
decode and fails as soon as the total passes its ceiling. Serializers
charge the cost of a tag before allocating it, so a stream that merely
claims an enormous length is rejected before any memory is spent on it.
"""

from typing import Optional

from nbtstorage.exceptions import IllegalArgumentException, SizeLimitExceededException


# Estimated cost in bytes of each tag instance.
END_COST = 64
BYTE_COST = 72
SHORT_COST = 80
INT_COST = 96
LONG_COST = 128
FLOAT_COST = 96
DOUBLE_COST = 128
ARRAY_COST = 192
STRING_COST = 288
STRING_CHAR_COST = 16
LIST_COST = 296
LIST_ELEMENT_COST = 32
COMPOUND_COST = 384
COMPOUND_ENTRY_COST = 224
COMPOUND_DUPLICATE_COST = 288


class SizeTracker:
    """Running byte budget for a single decode.

    Args:
        max_bytes: Ceiling for the accounted total, or None for no limit.

    Example:
        >>> tracker = SizeTracker(2 * 1024 * 1024)
        >>> compound = read_tag(stream, tracker)
        >>> tracker.read_bytes
        1384
    """

    __slots__ = ("_max_bytes", "_read_bytes")

    def __init__(self, max_bytes: Optional[int] = None):
        if max_bytes is not None and max_bytes < 0:
            raise IllegalArgumentException("max_bytes must not be negative")
        self._max_bytes = max_bytes
        self._read_bytes = 0

    @classmethod
    def infinite(cls) -> "SizeTracker":
        """Create a tracker that counts but never fails."""
        return cls(None)

    @property
    def max_bytes(self) -> Optional[int]:
        return self._max_bytes

    @property
    def read_bytes(self) -> int:
        return self._read_bytes

    @property
    def is_infinite(self) -> bool:
        return self._max_bytes is None

    def read(self, amount: int) -> None:
        """Charge ``amount`` bytes to the budget.

        Raises:
            SizeLimitExceededException: If the total now exceeds the ceiling.
        """
        if amount < 0:
            raise IllegalArgumentException("Cannot charge a negative amount")
        self._read_bytes += amount
        if self._max_bytes is not None and self._read_bytes > self._max_bytes:
            raise SizeLimitExceededException(
                f"Tried to read NBT tag that was too big; tried to allocate: "
                f"{self._read_bytes} bytes where max allowed: {self._max_bytes}",
                limit=self._max_bytes,
                read_bytes=self._read_bytes,
            )
