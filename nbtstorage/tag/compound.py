"""Compound tag and its typed accessor facade.

A :class:`CompoundTag` maps string keys to tags. On top of the raw
mapping it offers typed setters, getters that fall back to a default
instead of raising, a recursive merge, and convenience encodings for
values the wire format has no type for (booleans, UUIDs, enums, colors
and positions).

Example:
    Reading and writing typed values::

        compound = CompoundTag()
        compound.set_int("level", 12)
        compound.set_boolean("enabled", True)
        compound.set_color("tint", Color(255, 128, 0))

        compound.get_int("level")          # 12
        compound.get_int("missing", 42)    # 42
        compound.get_boolean("enabled")    # True
        compound.get_color("tint")         # Color(255, 128, 0)
"""

import uuid
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar

from nbtstorage.exceptions import IllegalArgumentException
from nbtstorage.tag.api import ANY_NUMERIC, Tag, TagType, copy_tree, format_key, render_snbt
from nbtstorage.tag.builtin import (
    INT_MAX,
    INT_MIN,
    ByteArrayTag,
    ByteTag,
    DoubleTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    LongArrayTag,
    LongTag,
    NumericTag,
    ShortTag,
    StringTag,
)
from nbtstorage.tag.collection import ListTag
from nbtstorage.types import Color, ColorFormat, Position


E = TypeVar("E", bound=Enum)


class _Entry:
    """A stored tag plus the flag recording it was written as a boolean."""

    __slots__ = ("tag", "boolean")

    def __init__(self, tag: Tag, boolean: bool = False):
        self.tag = tag
        self.boolean = boolean


def _render_value(tag: Tag) -> str:
    """Render any tag as a plain string, dispatching on its type id."""
    type_id = tag.type_id
    if type_id == TagType.END:
        return ""
    if type_id == TagType.BYTE:
        if tag.value in (0, 1):
            return "true" if tag.value == 1 else "false"
        return str(tag.value)
    if type_id in (TagType.SHORT, TagType.INT, TagType.LONG):
        return str(tag.value)
    if type_id in (TagType.FLOAT, TagType.DOUBLE):
        return repr(tag.value)
    if type_id == TagType.STRING:
        return tag.value
    if type_id == TagType.BYTE_ARRAY:
        return str(tag.signed_values())
    if type_id in (TagType.INT_ARRAY, TagType.LONG_ARRAY):
        return str(tag.value)
    if type_id == TagType.LIST:
        out = []
        stack = list(reversed(tag))
        while stack:
            element = stack.pop()
            if element.type_id == TagType.LIST:
                stack.extend(reversed(element))
            else:
                out.append(_render_value(element))
        return "".join(out)
    return tag.to_snbt()


class CompoundTag(Tag):
    """String-keyed mapping of tags.

    Keys are unique; storing under an existing key replaces the previous
    tag. Typed getters never raise on a missing key or a type mismatch,
    they return the supplied default instead.
    """

    __slots__ = ("_entries",)

    def __init__(self, tags: Optional[Mapping[str, Tag]] = None):
        self._entries: Dict[str, _Entry] = {}
        if tags:
            for key, tag in tags.items():
                self.set_tag(key, tag)

    @property
    def type_id(self) -> TagType:
        return TagType.COMPOUND

    # -- raw mapping --------------------------------------------------------

    def keys(self) -> List[str]:
        """Get the stored keys."""
        return list(self._entries)

    def items(self) -> List[Tuple[str, Tag]]:
        """Get ``(key, tag)`` pairs."""
        return [(key, entry.tag) for key, entry in self._entries.items()]

    def values(self) -> List[Tag]:
        """Get the stored tags."""
        return [entry.tag for entry in self._entries.values()]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def is_empty(self) -> bool:
        return not self._entries

    def _store(self, key: str, tag: Tag, boolean: bool = False) -> "CompoundTag":
        if not isinstance(key, str):
            raise IllegalArgumentException(f"Compound keys must be str, got {type(key).__name__}")
        if not isinstance(tag, Tag):
            raise IllegalArgumentException(f"Expected a Tag, got {type(tag).__name__}")
        if tag.type_id == TagType.END:
            raise IllegalArgumentException("EndTag cannot be stored in a compound")
        self._entries[key] = _Entry(tag, boolean)
        return self

    def _clear(self) -> None:
        self._entries.clear()

    def set_tag(self, key: str, tag: Tag) -> "CompoundTag":
        """Store a tag under ``key``, replacing any previous value."""
        return self._store(key, tag)

    def get_tag(self, key: str) -> Optional[Tag]:
        """Get the tag stored under ``key`` by reference, or None."""
        entry = self._entries.get(key)
        return entry.tag if entry is not None else None

    def get_tag_id(self, key: str) -> int:
        """Get the type id stored under ``key``, 0 when absent."""
        entry = self._entries.get(key)
        return int(entry.tag.type_id) if entry is not None else int(TagType.END)

    def has_key(self, key: str, type_id: Optional[int] = None) -> bool:
        """Check whether ``key`` is stored, optionally with a given type.

        Args:
            key: The key to look up.
            type_id: Required type id, or :data:`ANY_NUMERIC` to accept
                any of the six numeric types.
        """
        if type_id is None:
            return key in self._entries
        stored = self.get_tag_id(key)
        if stored == type_id:
            return True
        return type_id == ANY_NUMERIC and TagType(stored).is_numeric

    def remove(self, key: str) -> "CompoundTag":
        """Remove ``key`` if present."""
        self._entries.pop(key, None)
        return self

    # -- typed setters -------------------------------------------------------

    def set_byte(self, key: str, value: int) -> "CompoundTag":
        return self._store(key, ByteTag(value))

    def set_short(self, key: str, value: int) -> "CompoundTag":
        return self._store(key, ShortTag(value))

    def set_int(self, key: str, value: int) -> "CompoundTag":
        return self._store(key, IntTag(value))

    def set_long(self, key: str, value: int) -> "CompoundTag":
        return self._store(key, LongTag(value))

    def set_float(self, key: str, value: float) -> "CompoundTag":
        return self._store(key, FloatTag(value))

    def set_double(self, key: str, value: float) -> "CompoundTag":
        return self._store(key, DoubleTag(value))

    def set_string(self, key: str, value: str) -> "CompoundTag":
        return self._store(key, StringTag(value))

    def set_byte_array(self, key: str, value) -> "CompoundTag":
        return self._store(key, ByteArrayTag(value))

    def set_int_array(self, key: str, value) -> "CompoundTag":
        return self._store(key, IntArrayTag(value))

    def set_long_array(self, key: str, value) -> "CompoundTag":
        return self._store(key, LongArrayTag(value))

    def set_boolean(self, key: str, value: bool) -> "CompoundTag":
        """Store a boolean as Byte 1/0 and remember it was a boolean."""
        return self._store(key, ByteTag(1 if value else 0), boolean=True)

    def is_boolean(self, key: str) -> bool:
        """Check whether ``key`` was last written through :meth:`set_boolean`."""
        entry = self._entries.get(key)
        return entry is not None and entry.boolean

    def set(self, key: str, value: Any) -> "CompoundTag":
        """Store a Python value, choosing the tag type from its type.

        ``bool`` becomes a boolean byte, ``int`` an Int (or Long when it
        does not fit 32 bits), ``float`` a Double, ``str`` a String,
        bytes a ByteArray, sequences of ints an Int or Long array and
        mappings a nested compound. UUIDs, enums, colors and positions
        use their composite encodings.

        Raises:
            IllegalArgumentException: If the value type is not supported.
        """
        if isinstance(value, Tag):
            return self.set_tag(key, value)
        if isinstance(value, bool):
            return self.set_boolean(key, value)
        if isinstance(value, Enum):
            return self.set_enum(key, value)
        if isinstance(value, int):
            if INT_MIN <= value <= INT_MAX:
                return self.set_int(key, value)
            return self.set_long(key, value)
        if isinstance(value, float):
            return self.set_double(key, value)
        if isinstance(value, str):
            return self.set_string(key, value)
        if isinstance(value, (bytes, bytearray)):
            return self.set_byte_array(key, value)
        if isinstance(value, uuid.UUID):
            return self.set_unique_id(key, value)
        if isinstance(value, Color):
            return self.set_color(key, value)
        if isinstance(value, Position):
            return self.set_position(key, value)
        if isinstance(value, Mapping):
            nested = CompoundTag()
            for nested_key, nested_value in value.items():
                nested.set(nested_key, nested_value)
            return self.set_tag(key, nested)
        if isinstance(value, (list, tuple)) and all(
            isinstance(v, int) and not isinstance(v, bool) for v in value
        ):
            if all(INT_MIN <= v <= INT_MAX for v in value):
                return self.set_int_array(key, value)
            return self.set_long_array(key, value)
        raise IllegalArgumentException(
            f"Cannot store value of type {type(value).__name__} under '{key}'"
        )

    # -- typed getters -------------------------------------------------------

    def _typed(self, key: str, type_id: TagType) -> Optional[Tag]:
        entry = self._entries.get(key)
        if entry is not None and entry.tag.type_id == type_id:
            return entry.tag
        return None

    def _numeric(self, key: str) -> Optional[NumericTag]:
        entry = self._entries.get(key)
        if entry is not None and isinstance(entry.tag, NumericTag):
            return entry.tag
        return None

    def get_byte(self, key: str, default: int = 0) -> int:
        tag = self._numeric(key)
        return tag.as_byte() if tag is not None else default

    def get_short(self, key: str, default: int = 0) -> int:
        tag = self._numeric(key)
        return tag.as_short() if tag is not None else default

    def get_int(self, key: str, default: int = 0) -> int:
        tag = self._numeric(key)
        return tag.as_int() if tag is not None else default

    def get_long(self, key: str, default: int = 0) -> int:
        tag = self._numeric(key)
        return tag.as_long() if tag is not None else default

    def get_float(self, key: str, default: float = 0.0) -> float:
        tag = self._numeric(key)
        return tag.as_float() if tag is not None else default

    def get_double(self, key: str, default: float = 0.0) -> float:
        tag = self._numeric(key)
        return tag.as_double() if tag is not None else default

    def get_string(self, key: str, default: str = "") -> str:
        tag = self._typed(key, TagType.STRING)
        return tag.value if tag is not None else default

    def get_byte_array(self, key: str, default: bytes = b"") -> bytes:
        tag = self._typed(key, TagType.BYTE_ARRAY)
        return tag.value if tag is not None else default

    def get_int_array(self, key: str, default: Optional[List[int]] = None) -> List[int]:
        tag = self._typed(key, TagType.INT_ARRAY)
        if tag is not None:
            return tag.value
        return list(default) if default is not None else []

    def get_long_array(self, key: str, default: Optional[List[int]] = None) -> List[int]:
        tag = self._typed(key, TagType.LONG_ARRAY)
        if tag is not None:
            return tag.value
        return list(default) if default is not None else []

    def get_boolean(self, key: str, default: bool = False) -> bool:
        """Read a Byte as a boolean; any nonzero value is true."""
        tag = self._typed(key, TagType.BYTE)
        return tag.value != 0 if tag is not None else default

    def get_compound(self, key: str) -> "CompoundTag":
        """Get the nested compound by reference, or a new detached one."""
        tag = self._typed(key, TagType.COMPOUND)
        return tag if tag is not None else CompoundTag()

    def get_list(self, key: str, element_type: int) -> ListTag:
        """Get the nested list by reference when its elements match.

        An empty stored list matches any element type. Otherwise a new,
        detached, empty list is returned.
        """
        tag = self._typed(key, TagType.LIST)
        if tag is None or (not tag.is_empty() and tag.element_type != element_type):
            return ListTag()
        return tag

    def get_value(self, key: str) -> str:
        """Render whatever is stored under ``key`` as plain text.

        Bytes holding 0 or 1 render as ``false``/``true``. Missing keys
        render as an empty string.
        """
        entry = self._entries.get(key)
        return _render_value(entry.tag) if entry is not None else ""

    # -- composite encodings -------------------------------------------------

    def set_unique_id(self, key: str, value: uuid.UUID) -> "CompoundTag":
        return self.set_string(key, str(value))

    def get_unique_id(self, key: str, default: Optional[uuid.UUID] = None) -> Optional[uuid.UUID]:
        """Read a UUID stored as text or as a ``<key>Most``/``<key>Least`` pair."""
        most_key, least_key = key + "Most", key + "Least"
        if self.has_key(most_key, ANY_NUMERIC) and self.has_key(least_key, ANY_NUMERIC):
            most = self.get_long(most_key) & 0xFFFFFFFFFFFFFFFF
            least = self.get_long(least_key) & 0xFFFFFFFFFFFFFFFF
            return uuid.UUID(int=(most << 64) | least)
        tag = self._typed(key, TagType.STRING)
        if tag is None:
            return default
        try:
            return uuid.UUID(tag.value)
        except ValueError:
            return default

    def set_position(self, key: str, position: Position) -> "CompoundTag":
        compound = CompoundTag()
        compound.set_string("world", position.world)
        compound.set_double("x", position.x)
        compound.set_double("y", position.y)
        compound.set_double("z", position.z)
        compound.set_float("yaw", position.yaw)
        compound.set_float("pitch", position.pitch)
        return self.set_tag(key, compound)

    def get_position(self, key: str, default: Optional[Position] = None) -> Optional[Position]:
        compound = self._typed(key, TagType.COMPOUND)
        if compound is None:
            return default
        return Position(
            world=compound.get_string("world", "world"),
            x=compound.get_double("x"),
            y=compound.get_double("y"),
            z=compound.get_double("z"),
            yaw=compound.get_float("yaw"),
            pitch=compound.get_float("pitch"),
        )

    def set_color(
        self, key: str, color: Color, fmt: ColorFormat = ColorFormat.COMPOUND
    ) -> "CompoundTag":
        """Store a color using one of the :class:`ColorFormat` layouts."""
        if fmt == ColorFormat.HEX:
            return self.set_string(key, color.to_hex())
        if fmt == ColorFormat.INT:
            return self.set_int(key, color.as_rgb())
        if fmt == ColorFormat.STRING:
            return self.set_string(key, f"{color.red},{color.green},{color.blue}")
        compound = CompoundTag()
        compound.set_int("r", color.red)
        compound.set_int("g", color.green)
        compound.set_int("b", color.blue)
        return self.set_tag(key, compound)

    def get_color(self, key: str, default: Optional[Color] = None) -> Optional[Color]:
        """Read a color written in any :class:`ColorFormat`.

        The stored value is tried as an ``{r,g,b}`` compound, a packed
        integer, a comma separated string and a ``#RRGGBB`` string, in
        that order. Channels are clamped into 0-255.
        """
        entry = self._entries.get(key)
        if entry is None:
            return default
        tag = entry.tag

        if tag.type_id == TagType.COMPOUND:
            return Color.clamped(tag.get_int("r"), tag.get_int("g"), tag.get_int("b"))

        if tag.type_id == TagType.INT:
            return Color.from_rgb(tag.value)

        if tag.type_id == TagType.STRING:
            text = tag.value.strip()
            try:
                if "," in text:
                    parts = [int(part.strip()) for part in text.split(",")]
                    if len(parts) != 3:
                        return default
                    return Color.clamped(*parts)
                if text.startswith("#"):
                    return Color.from_hex(text)
                return Color.from_rgb(int(text))
            except ValueError:
                return default

        return default

    def set_enum(self, key: str, value: Enum) -> "CompoundTag":
        return self.set_string(key, value.name)

    def get_enum(self, key: str, enum_type: Type[E], default: Optional[E] = None) -> Optional[E]:
        tag = self._typed(key, TagType.STRING)
        if tag is None:
            return default
        try:
            return enum_type[tag.value]
        except KeyError:
            return default

    # -- whole-tree operations -----------------------------------------------

    def merge(self, other: "CompoundTag") -> "CompoundTag":
        """Merge ``other`` into this compound in place.

        Where both sides hold a compound under the same key the two are
        merged recursively. Every other tag from ``other`` is deep-copied
        over whatever this compound holds.
        """
        pending = [(self, other)]
        while pending:
            target, source = pending.pop()
            for key, entry in source._entries.items():
                mine = target._typed(key, TagType.COMPOUND)
                if entry.tag.type_id == TagType.COMPOUND and mine is not None:
                    pending.append((mine, entry.tag))
                else:
                    target._entries[key] = _Entry(copy_tree(entry.tag), entry.boolean)
        return self

    def move(self, old_key: str, new_key: str) -> bool:
        """Rename ``old_key`` to ``new_key``.

        Returns:
            True if ``old_key`` existed and was moved.
        """
        entry = self._entries.pop(old_key, None)
        if entry is None:
            return False
        self._entries[new_key] = entry
        return True

    def copy(self) -> "CompoundTag":
        return copy_tree(self)

    def _copy_shell(self) -> "CompoundTag":
        return CompoundTag()

    def _copy_children(self, clone: Tag, pending: list) -> None:
        for key, entry in self._entries.items():
            child = entry.tag._copy_shell()
            clone._entries[key] = _Entry(child, entry.boolean)
            pending.append((entry.tag, child))

    def to_snbt(self) -> str:
        return render_snbt(self)

    def _snbt_pieces(self) -> list:
        pieces = ["{"]
        for index, (key, entry) in enumerate(self._entries.items()):
            pieces.append(f"{',' if index else ''}{format_key(key)}:")
            pieces.append(entry.tag)
        pieces.append("}")
        return pieces

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        if self._entries.keys() != other._entries.keys():
            return False
        pending.extend(
            (entry.tag, other._entries[key].tag) for key, entry in self._entries.items()
        )
        return True

    def __repr__(self) -> str:
        return f"CompoundTag({self.to_snbt()})"
