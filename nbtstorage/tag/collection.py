"""Homogeneous list tag."""

from typing import Iterable, Iterator, List, TYPE_CHECKING

from nbtstorage.exceptions import IllegalArgumentException
from nbtstorage.logging import get_logger
from nbtstorage.tag.api import Tag, TagType, copy_tree, render_snbt
from nbtstorage.tag.builtin import EndTag

if TYPE_CHECKING:
    from nbtstorage.tag.compound import CompoundTag


_logger = get_logger("tag")


class ListTag(Tag):
    """Ordered sequence of tags sharing a single element type.

    The element type is fixed by the first insertion. Inserting a tag of
    another type is not an error: the insertion is dropped and a warning
    is logged, so the list always stays homogeneous. An empty list has
    element type :attr:`TagType.END`.

    Example:
        >>> tags = ListTag([IntTag(1), IntTag(2)])
        >>> tags.append(StringTag("x"))
        False
        >>> len(tags)
        2
    """

    __slots__ = ("_tags", "_element_type")

    def __init__(self, tags: Iterable[Tag] = ()):
        self._tags: List[Tag] = []
        self._element_type = TagType.END
        for tag in tags:
            self.append(tag)

    @property
    def type_id(self) -> TagType:
        return TagType.LIST

    @property
    def element_type(self) -> TagType:
        """Get the type id shared by every element."""
        return self._element_type

    def _accepts(self, tag: Tag) -> bool:
        if not isinstance(tag, Tag):
            raise IllegalArgumentException(f"Expected a Tag, got {type(tag).__name__}")
        if tag.type_id == TagType.END:
            _logger.warning("Invalid EndTag added to ListTag")
            return False
        if self._element_type != TagType.END and tag.type_id != self._element_type:
            _logger.warning(
                "Mismatching tag types in tag list (%s != %s)",
                tag.type_id.display_name,
                self._element_type.display_name,
            )
            return False
        return True

    def append(self, tag: Tag) -> bool:
        """Add a tag to the end of the list.

        Args:
            tag: The tag to add.

        Returns:
            True if the tag was added, False if it was dropped.

        Raises:
            IllegalArgumentException: If ``tag`` is not a :class:`Tag`.
        """
        if not self._accepts(tag):
            return False
        if self._element_type == TagType.END:
            self._element_type = tag.type_id
        self._tags.append(tag)
        return True

    def set(self, index: int, tag: Tag) -> bool:
        """Replace the tag at ``index``.

        Returns:
            True if the tag was stored, False if it was dropped.
        """
        if not self._accepts(tag):
            return False
        if index < 0 or index >= len(self._tags):
            _logger.warning("Index %d out of bounds to set tag in tag list", index)
            return False
        if self._element_type == TagType.END:
            self._element_type = tag.type_id
        self._tags[index] = tag
        return True

    def remove(self, index: int) -> Tag:
        """Remove and return the tag at ``index``.

        Raises:
            IndexError: If the index is out of range.
        """
        tag = self._tags.pop(index)
        if not self._tags:
            self._element_type = TagType.END
        return tag

    def get(self, index: int) -> Tag:
        """Get the tag at ``index``, or an :class:`EndTag` when out of range."""
        if 0 <= index < len(self._tags):
            return self._tags[index]
        return EndTag()

    def _typed_at(self, index: int, type_id: TagType):
        if 0 <= index < len(self._tags) and self._tags[index].type_id == type_id:
            return self._tags[index]
        return None

    def get_compound_at(self, index: int) -> "CompoundTag":
        """Get the compound at ``index`` by reference, or a new empty one."""
        from nbtstorage.tag.compound import CompoundTag

        tag = self._typed_at(index, TagType.COMPOUND)
        return tag if tag is not None else CompoundTag()

    def get_int_at(self, index: int) -> int:
        tag = self._typed_at(index, TagType.INT)
        return tag.value if tag is not None else 0

    def get_int_array_at(self, index: int) -> List[int]:
        tag = self._typed_at(index, TagType.INT_ARRAY)
        return tag.value if tag is not None else []

    def get_double_at(self, index: int) -> float:
        tag = self._typed_at(index, TagType.DOUBLE)
        return tag.value if tag is not None else 0.0

    def get_float_at(self, index: int) -> float:
        tag = self._typed_at(index, TagType.FLOAT)
        return tag.value if tag is not None else 0.0

    def get_string_at(self, index: int) -> str:
        """Get the text at ``index``; non-string tags render as SNBT."""
        if not 0 <= index < len(self._tags):
            return ""
        tag = self._tags[index]
        return tag.value if tag.type_id == TagType.STRING else tag.to_snbt()

    def _load(self, element_type: TagType, tags: List[Tag]) -> None:
        # Decoders build homogeneous contents up front.
        self._tags = tags
        self._element_type = element_type if tags else TagType.END

    def is_empty(self) -> bool:
        return not self._tags

    def copy(self) -> "ListTag":
        return copy_tree(self)

    def _copy_shell(self) -> "ListTag":
        return ListTag()

    def _copy_children(self, clone: Tag, pending: list) -> None:
        for tag in self._tags:
            child = tag._copy_shell()
            clone._tags.append(child)
            pending.append((tag, child))
        clone._element_type = self._element_type if self._tags else TagType.END

    def to_snbt(self) -> str:
        return render_snbt(self)

    def _snbt_pieces(self) -> list:
        pieces = ["["]
        for index, tag in enumerate(self._tags):
            if index:
                pieces.append(",")
            pieces.append(tag)
        pieces.append("]")
        return pieces

    def _payload_equals(self, other: Tag, pending: list) -> bool:
        if self._element_type != other._element_type or len(self._tags) != len(other._tags):
            return False
        pending.extend(zip(self._tags, other._tags))
        return True

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags)

    def __getitem__(self, index: int) -> Tag:
        return self._tags[index]

    def __repr__(self) -> str:
        return f"ListTag({self.to_snbt()})"
