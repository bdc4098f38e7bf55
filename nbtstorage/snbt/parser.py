"""Recursive-descent parser turning SNBT text into tags.

Grammar::

    value    := compound | array | list | primitive
    compound := '{' (key ':' value (',' key ':' value)*)? '}'
    array    := '[' ('B' | 'I' | 'L') ';' (value (',' value)*)? ']'
    list     := '[' (value (',' value)*)? ']'

Unquoted primitives are classified by suffix, trying boolean, float
(``f``), byte (``b``), long (``l``), short (``s``), int, double (``d``)
and finally an unsuffixed decimal as double. Anything else, including a
literal whose value does not fit its type, becomes a string.
"""

import math
import re
from typing import Callable, List, Optional, Tuple

from nbtstorage.config import ParserConfig
from nbtstorage.exceptions import ParseException
from nbtstorage.logging import get_logger
from nbtstorage.snbt.reader import StringReader
from nbtstorage.tag.api import Tag, TagType
from nbtstorage.tag.builtin import (
    BYTE_MAX,
    BYTE_MIN,
    INT_MAX,
    INT_MIN,
    LONG_MAX,
    LONG_MIN,
    SHORT_MAX,
    SHORT_MIN,
    ByteArrayTag,
    ByteTag,
    DoubleTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    LongArrayTag,
    LongTag,
    ShortTag,
    StringTag,
    to_float32,
)
from nbtstorage.tag.collection import ListTag
from nbtstorage.tag.compound import CompoundTag


_logger = get_logger("snbt")

_DOUBLE_NO_SUFFIX = re.compile(r"[-+]?(?:[0-9]+[.]|[0-9]*[.][0-9]+)(?:e[-+]?[0-9]+)?", re.I)
_DOUBLE = re.compile(r"[-+]?(?:[0-9]+[.]?|[0-9]*[.][0-9]+)(?:e[-+]?[0-9]+)?d", re.I)
_FLOAT = re.compile(r"[-+]?(?:[0-9]+[.]?|[0-9]*[.][0-9]+)(?:e[-+]?[0-9]+)?f", re.I)
_BYTE = re.compile(r"[-+]?(?:0|[1-9][0-9]*)b", re.I)
_LONG = re.compile(r"[-+]?(?:0|[1-9][0-9]*)l", re.I)
_SHORT = re.compile(r"[-+]?(?:0|[1-9][0-9]*)s", re.I)
_INT = re.compile(r"[-+]?(?:0|[1-9][0-9]*)")

_INTEGRAL_TYPES = (TagType.BYTE, TagType.SHORT, TagType.INT, TagType.LONG)

# Array type character -> (tag class, its type, lowest element, highest element).
_ARRAY_TYPES = {
    "B": (ByteArrayTag, TagType.BYTE_ARRAY, BYTE_MIN, BYTE_MAX),
    "I": (IntArrayTag, TagType.INT_ARRAY, INT_MIN, INT_MAX),
    "L": (LongArrayTag, TagType.LONG_ARRAY, LONG_MIN, LONG_MAX),
}


def _integral(tag_class, low: int, high: int) -> Callable[[str], Optional[Tag]]:
    def build(text: str) -> Optional[Tag]:
        try:
            value = int(text)
        except ValueError:
            # Digit runs past the interpreter's int conversion limit.
            return None
        return tag_class(value) if low <= value <= high else None

    return build


def _floating(tag_class, narrow: Callable[[float], float]) -> Callable[[str], Optional[Tag]]:
    def build(text: str) -> Optional[Tag]:
        value = narrow(float(text))
        return tag_class(value) if math.isfinite(value) else None

    return build


# Tried in order; a builder returning None falls through to the next one.
_PRIMITIVES: List[Tuple[re.Pattern, bool, Callable[[str], Optional[Tag]]]] = [
    (_FLOAT, True, _floating(FloatTag, to_float32)),
    (_BYTE, True, _integral(ByteTag, BYTE_MIN, BYTE_MAX)),
    (_LONG, True, _integral(LongTag, LONG_MIN, LONG_MAX)),
    (_SHORT, True, _integral(ShortTag, SHORT_MIN, SHORT_MAX)),
    (_INT, False, _integral(IntTag, INT_MIN, INT_MAX)),
    (_DOUBLE, True, _floating(DoubleTag, float)),
    (_DOUBLE_NO_SUFFIX, False, _floating(DoubleTag, float)),
]


def parse_primitive(text: str) -> Tag:
    """Classify an unquoted literal.

    Args:
        text: A non-empty unquoted token.

    Returns:
        The numeric or boolean tag the literal denotes, or a
        :class:`StringTag` holding the text.
    """
    lowered = text.lower()
    if lowered == "true":
        return ByteTag(1)
    if lowered == "false":
        return ByteTag(0)

    for pattern, suffixed, build in _PRIMITIVES:
        if not pattern.fullmatch(text):
            continue
        tag = build(text[:-1] if suffixed else text)
        if tag is not None:
            return tag
    return StringTag(text)


class SNBTParser:
    """Parser for a single SNBT document.

    Args:
        text: The SNBT text.
        config: Parser limits. Defaults to ``ParserConfig()``.

    Raises:
        ParseException: If ``text`` is longer than the configured limit.

    Example:
        >>> SNBTParser('{name:"Steve",level:5b}').to_compound().get_byte("level")
        5
    """

    def __init__(self, text: str, config: Optional[ParserConfig] = None):
        self._config = config or ParserConfig()
        limit = self._config.max_input_length
        if limit is not None and len(text) > limit:
            raise ParseException(f"Input longer than {limit} characters", text, limit)
        self._reader = StringReader(text)

    @property
    def reader(self) -> StringReader:
        return self._reader

    def to_compound(self) -> CompoundTag:
        """Parse the whole input as a compound."""
        compound = self._parse_compound(0)
        self._check_trailing()
        return compound

    def to_list(self) -> ListTag:
        """Parse the whole input as a list."""
        tags = self._parse_list(0)
        self._check_trailing()
        return tags

    def _check_trailing(self) -> None:
        self._reader.skip_whitespace()
        if self._reader.can_read():
            raise self._reader.error("Trailing data found")

    def _expect(self, char: str) -> None:
        self._reader.skip_whitespace()
        self._reader.expect(char)

    def _read_comma(self) -> bool:
        self._reader.skip_whitespace()
        if self._reader.can_read() and self._reader.peek() == ",":
            self._reader.skip()
            self._reader.skip_whitespace()
            return True
        return False

    def _enter(self, depth: int) -> None:
        if depth > self._config.max_depth:
            raise self._reader.error(f"Tag nesting deeper than {self._config.max_depth}")

    def _parse_value(self, depth: int) -> Tag:
        reader = self._reader
        reader.skip_whitespace()
        if not reader.can_read():
            raise reader.error("Expected value")

        char = reader.peek()
        if char == "{":
            return self._parse_compound(depth)
        if char == "[":
            if (
                reader.can_read(3)
                and not reader.is_quoted_string_start(reader.peek(1))
                and reader.peek(2) == ";"
            ):
                return self._parse_array(depth)
            return self._parse_list(depth)
        return self._parse_primitive()

    def _parse_primitive(self) -> Tag:
        reader = self._reader
        reader.skip_whitespace()
        start = reader.cursor
        if reader.is_quoted_string_start(reader.peek()):
            return StringTag(reader.read_quoted_string())

        text = reader.read_unquoted_string()
        if not text:
            reader.cursor = start
            raise reader.error("Expected value")
        return parse_primitive(text)

    def _read_key(self) -> str:
        reader = self._reader
        reader.skip_whitespace()
        if not reader.can_read():
            raise reader.error("Expected key")
        start = reader.cursor
        key = reader.read_string()
        if not key:
            reader.cursor = start
            raise reader.error("Expected non-empty key")
        return key

    def _parse_compound(self, depth: int) -> CompoundTag:
        self._expect("{")
        self._enter(depth)
        compound = CompoundTag()
        self._reader.skip_whitespace()

        if self._reader.can_read() and self._reader.peek() != "}":
            while True:
                key = self._read_key()
                self._expect(":")
                compound.set_tag(key, self._parse_value(depth + 1))
                if not self._read_comma():
                    break

        self._expect("}")
        return compound

    def _parse_list(self, depth: int) -> ListTag:
        reader = self._reader
        self._expect("[")
        self._enter(depth)
        reader.skip_whitespace()
        if not reader.can_read():
            raise reader.error("Expected value")

        tags = ListTag()
        if reader.peek() != "]":
            while True:
                start = reader.cursor
                tag = self._parse_value(depth + 1)
                if tags.element_type != TagType.END and tag.type_id != tags.element_type:
                    reader.cursor = start
                    raise reader.error(
                        f"Unable to insert {tag.type_id.display_name} into ListTag "
                        f"of type {tags.element_type.display_name}"
                    )
                tags.append(tag)
                if not self._read_comma():
                    break

        self._expect("]")
        return tags

    def _parse_array(self, depth: int) -> Tag:
        reader = self._reader
        self._expect("[")
        start = reader.cursor
        kind = reader.read()
        reader.read()
        reader.skip_whitespace()
        if not reader.can_read():
            raise reader.error("Expected value")
        if kind not in _ARRAY_TYPES:
            reader.cursor = start
            raise reader.error(f"Invalid array type '{kind}' found")

        tag_class, array_type, low, high = _ARRAY_TYPES[kind]
        values = []
        if reader.peek() != "]":
            while True:
                element_start = reader.cursor
                element = self._parse_value(depth + 1)
                if element.type_id not in _INTEGRAL_TYPES or not low <= element.value <= high:
                    reader.cursor = element_start
                    raise reader.error(
                        f"Unable to insert {element.type_id.display_name} into "
                        f"{array_type.display_name}"
                    )
                values.append(element.value)
                if not self._read_comma():
                    break

        self._expect("]")
        return tag_class(values)


def parse(text: str, config: Optional[ParserConfig] = None) -> Tag:
    """Parse SNBT text as a list when it starts with ``[``, else as a compound."""
    parser = SNBTParser(text, config)
    if text.lstrip().startswith("["):
        return parser.to_list()
    return parser.to_compound()


def to_compound(text: str, config: Optional[ParserConfig] = None) -> CompoundTag:
    """Parse SNBT text holding a compound."""
    _logger.debug("Parsing %d characters of SNBT as compound", len(text))
    return SNBTParser(text, config).to_compound()


def to_list(text: str, config: Optional[ParserConfig] = None) -> ListTag:
    """Parse SNBT text holding a list."""
    _logger.debug("Parsing %d characters of SNBT as list", len(text))
    return SNBTParser(text, config).to_list()
