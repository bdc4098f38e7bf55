"""Cursor-based scanner over SNBT text."""

from nbtstorage.exceptions import ParseException


ESCAPE = "\\"
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"


class StringReader:
    """Character cursor over an immutable string.

    Every failure is reported as a :class:`ParseException` positioned at
    the current cursor.

    Args:
        string: The text to scan.
    """

    __slots__ = ("_string", "_cursor")

    def __init__(self, string: str):
        self._string = string
        self._cursor = 0

    @property
    def string(self) -> str:
        return self._string

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, value: int) -> None:
        self._cursor = value

    @property
    def total_length(self) -> int:
        return len(self._string)

    @property
    def remaining_length(self) -> int:
        return len(self._string) - self._cursor

    @property
    def consumed(self) -> str:
        """Get the text before the cursor."""
        return self._string[: self._cursor]

    @property
    def remaining(self) -> str:
        """Get the text from the cursor on."""
        return self._string[self._cursor :]

    def can_read(self, length: int = 1) -> bool:
        return self._cursor + length <= len(self._string)

    def peek(self, offset: int = 0) -> str:
        """Get the character ``offset`` places after the cursor.

        Raises:
            ParseException: If that position is past the end of the input.
        """
        index = self._cursor + offset
        if index >= len(self._string):
            raise self.error("Unexpected end of input")
        return self._string[index]

    def read(self) -> str:
        char = self.peek()
        self._cursor += 1
        return char

    def skip(self) -> None:
        self._cursor += 1

    def skip_whitespace(self) -> None:
        while self.can_read() and self._string[self._cursor].isspace():
            self._cursor += 1

    def expect(self, char: str) -> None:
        """Consume ``char`` or fail without moving the cursor."""
        if not self.can_read() or self.peek() != char:
            raise self.error(f"Expected '{char}'")
        self.skip()

    def error(self, message: str) -> ParseException:
        """Build a :class:`ParseException` at the current cursor."""
        return ParseException(message, self._string, self._cursor)

    @staticmethod
    def is_quoted_string_start(char: str) -> bool:
        return char == DOUBLE_QUOTE or char == SINGLE_QUOTE

    @staticmethod
    def is_allowed_in_unquoted_string(char: str) -> bool:
        return (
            "0" <= char <= "9"
            or "A" <= char <= "Z"
            or "a" <= char <= "z"
            or char in "_-.+"
        )

    def read_quoted_string(self) -> str:
        """Read a ``"``- or ``'``-delimited string.

        Returns an empty string at the end of input.
        """
        if not self.can_read():
            return ""
        quote = self.peek()
        if not self.is_quoted_string_start(quote):
            raise self.error("Expected value")
        self.skip()
        return self.read_string_until(quote)

    def read_string(self) -> str:
        """Read a quoted string if one starts here, else an unquoted token."""
        if not self.can_read():
            return ""
        quote = self.peek()
        if self.is_quoted_string_start(quote):
            self.skip()
            return self.read_string_until(quote)
        return self.read_unquoted_string()

    def read_string_until(self, terminator: str) -> str:
        """Read up to the unescaped ``terminator`` and consume it.

        Only ``terminator`` and the backslash may be escaped.

        Raises:
            ParseException: On any other escape, or when the input ends
                before the terminator.
        """
        result = []
        escaped = False
        while self.can_read():
            char = self.read()
            if escaped:
                if char != terminator and char != ESCAPE:
                    self._cursor -= 1
                    raise self.error(f"Invalid escape of '{char}'")
                result.append(char)
                escaped = False
            elif char == ESCAPE:
                escaped = True
            elif char == terminator:
                return "".join(result)
            else:
                result.append(char)
        raise self.error("Expected value")

    def read_unquoted_string(self) -> str:
        """Read the longest run of unquoted-token characters."""
        start = self._cursor
        while self.can_read() and self.is_allowed_in_unquoted_string(self._string[self._cursor]):
            self._cursor += 1
        return self._string[start : self._cursor]

    def __repr__(self) -> str:
        return f"StringReader(cursor={self._cursor}, total_length={len(self._string)})"
