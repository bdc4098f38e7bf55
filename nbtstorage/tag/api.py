"""Tag model interfaces.

Every node of an NBT tree is a :class:`Tag`. The set of variants is
closed: each one is identified by a one-byte :class:`TagType` that is
also its discriminant on the wire.

=====  ===============  ==========================================
 id    variant          payload
=====  ===============  ==========================================
 0     End              none, compound terminator only
 1     Byte             8-bit signed integer
 2     Short            16-bit signed integer
 3     Int              32-bit signed integer
 4     Long             64-bit signed integer
 5     Float            IEEE-754 binary32
 6     Double           IEEE-754 binary64
 7     ByteArray        raw bytes
 8     String           text, modified UTF-8 on the wire
 9     List             homogeneous sequence of tags
 10    Compound         string-keyed mapping of tags
 11    IntArray         sequence of 32-bit integers
 12    LongArray        sequence of 64-bit integers
=====  ===============  ==========================================
"""

import re
from abc import ABC, abstractmethod
from enum import IntEnum


class TagType(IntEnum):
    """Wire type ids of the tag variants."""

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @property
    def display_name(self) -> str:
        """Get the conventional name, e.g. ``TAG_Byte_Array``."""
        return _DISPLAY_NAMES[self]

    @property
    def is_numeric(self) -> bool:
        """Whether this type is one of the six numeric leaves."""
        return TagType.BYTE <= self <= TagType.DOUBLE


# Query-only pseudo type matching any of the six numeric leaves.
ANY_NUMERIC = 99

_DISPLAY_NAMES = {
    TagType.END: "TAG_End",
    TagType.BYTE: "TAG_Byte",
    TagType.SHORT: "TAG_Short",
    TagType.INT: "TAG_Int",
    TagType.LONG: "TAG_Long",
    TagType.FLOAT: "TAG_Float",
    TagType.DOUBLE: "TAG_Double",
    TagType.BYTE_ARRAY: "TAG_Byte_Array",
    TagType.STRING: "TAG_String",
    TagType.LIST: "TAG_List",
    TagType.COMPOUND: "TAG_Compound",
    TagType.INT_ARRAY: "TAG_Int_Array",
    TagType.LONG_ARRAY: "TAG_Long_Array",
}


def tag_type_name(type_id: int) -> str:
    """Get the display name for a raw type id.

    Args:
        type_id: A wire type id or :data:`ANY_NUMERIC`.

    Returns:
        The display name, ``"Any Numeric Tag"`` for 99, or ``"UNKNOWN"``.
    """
    if type_id == ANY_NUMERIC:
        return "Any Numeric Tag"
    try:
        return TagType(type_id).display_name
    except ValueError:
        return "UNKNOWN"


_UNQUOTED_KEY = re.compile(r"[A-Za-z0-9._+-]+")


def quote_string(value: str) -> str:
    """Render text as a double-quoted SNBT string.

    Only backslash and the double quote are escaped, which is exactly
    the set of escapes the SNBT reader accepts.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_key(key: str) -> str:
    """Render a compound key, quoting it only when required."""
    return key if _UNQUOTED_KEY.fullmatch(key) else quote_string(key)


class Tag(ABC):
    """Base class of every tag variant.

    Equality is structural: two tags are equal when they have the same
    type id and recursively equal payloads. Container tags are mutable
    and therefore unhashable.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def type_id(self) -> TagType:
        """Get the wire type id of this tag."""
        pass

    @abstractmethod
    def copy(self) -> "Tag":
        """Create a deep copy sharing no mutable state with this tag."""
        pass

    @abstractmethod
    def to_snbt(self) -> str:
        """Render this tag in canonical SNBT text form."""
        pass

    @abstractmethod
    def _payload_equals(self, other: "Tag", pending: list) -> bool:
        """Compare own payloads; containers push child pairs onto ``pending``."""
        pass

    def _snbt_pieces(self) -> list:
        # Text fragments and child tags, in output order.
        return [self.to_snbt()]

    def _copy_shell(self) -> "Tag":
        # Containers return an empty clone and fill it in _copy_children.
        return self.copy()

    def _copy_children(self, clone: "Tag", pending: list) -> None:
        pass

    def is_empty(self) -> bool:
        """Return whether this tag holds no data."""
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if left.type_id != right.type_id or not left._payload_equals(right, pending):
                return False
        return True

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __str__(self) -> str:
        return self.to_snbt()


def render_snbt(tag: Tag) -> str:
    """Render a tree as SNBT without recursing once per nesting level."""
    out = []
    stack = [tag]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        else:
            stack.extend(reversed(item._snbt_pieces()))
    return "".join(out)


def copy_tree(tag: Tag) -> Tag:
    """Deep-copy a tree without recursing once per nesting level."""
    root = tag._copy_shell()
    pending = [(tag, root)]
    while pending:
        source, clone = pending.pop()
        source._copy_children(clone, pending)
    return root
