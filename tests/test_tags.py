"""Unit tests for the leaf tag variants."""

import math

import pytest

from nbtstorage.exceptions import IllegalArgumentException, MalformedTagException
from nbtstorage.tag import (
    ANY_NUMERIC,
    ByteArrayTag,
    ByteTag,
    CompoundTag,
    DoubleTag,
    EndTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    ListTag,
    LongArrayTag,
    LongTag,
    ShortTag,
    StringTag,
    TagType,
    create_tag,
    tag_type_name,
)
from nbtstorage.tag.builtin import INT_MAX, INT_MIN, LONG_MAX, to_float32, wrap_signed


class TestTagType:
    """Tests for TagType and type names."""

    def test_ids(self):
        assert TagType.END == 0
        assert TagType.COMPOUND == 10
        assert TagType.LONG_ARRAY == 12

    def test_display_names(self):
        assert TagType.BYTE_ARRAY.display_name == "TAG_Byte_Array"
        assert TagType.STRING.display_name == "TAG_String"
        assert TagType.END.display_name == "TAG_End"

    def test_tag_type_name(self):
        assert tag_type_name(3) == "TAG_Int"
        assert tag_type_name(ANY_NUMERIC) == "Any Numeric Tag"
        assert tag_type_name(42) == "UNKNOWN"

    def test_is_numeric(self):
        numeric = [t for t in TagType if t.is_numeric]
        assert numeric == [
            TagType.BYTE,
            TagType.SHORT,
            TagType.INT,
            TagType.LONG,
            TagType.FLOAT,
            TagType.DOUBLE,
        ]

    @pytest.mark.parametrize("type_id", list(range(13)))
    def test_create_tag(self, type_id):
        tag = create_tag(type_id)
        assert tag.type_id == type_id

    @pytest.mark.parametrize("type_id", [-1, 13, 99])
    def test_create_tag_unknown(self, type_id):
        with pytest.raises(MalformedTagException):
            create_tag(type_id)


class TestIntegralTags:
    """Tests for Byte, Short, Int and Long tags."""

    @pytest.mark.parametrize(
        "tag_class,low,high",
        [
            (ByteTag, -128, 127),
            (ShortTag, -32768, 32767),
            (IntTag, INT_MIN, INT_MAX),
            (LongTag, -(2 ** 63), LONG_MAX),
        ],
    )
    def test_range(self, tag_class, low, high):
        assert tag_class(low).value == low
        assert tag_class(high).value == high
        with pytest.raises(IllegalArgumentException):
            tag_class(high + 1)
        with pytest.raises(IllegalArgumentException):
            tag_class(low - 1)

    def test_rejects_non_integers(self):
        with pytest.raises(IllegalArgumentException):
            IntTag(1.5)
        with pytest.raises(IllegalArgumentException):
            IntTag("1")

    def test_snbt(self):
        assert ByteTag(5).to_snbt() == "5b"
        assert ShortTag(-5).to_snbt() == "-5s"
        assert IntTag(5).to_snbt() == "5"
        assert LongTag(5).to_snbt() == "5L"
        assert str(ByteTag(1)) == "1b"

    def test_narrowing_wraps(self):
        assert IntTag(300).as_byte() == 44
        assert IntTag(-129).as_byte() == 127
        assert LongTag(2 ** 32 + 7).as_int() == 7
        assert IntTag(70000).as_short() == 4464

    def test_widening(self):
        assert ByteTag(-3).as_long() == -3
        assert IntTag(3).as_double() == 3.0

    def test_wrap_signed(self):
        assert wrap_signed(255, 8) == -1
        assert wrap_signed(128, 8) == -128
        assert wrap_signed(127, 8) == 127

    def test_equality_needs_same_type(self):
        assert IntTag(1) == IntTag(1)
        assert IntTag(1) != IntTag(2)
        assert IntTag(1) != LongTag(1)
        assert IntTag(1) != 1

    def test_hashable(self):
        assert len({IntTag(1), IntTag(1), ByteTag(1)}) == 2


class TestFloatingTags:
    """Tests for Float and Double tags."""

    def test_float_rounds_to_binary32(self):
        tag = FloatTag(0.1)
        assert tag.value == to_float32(0.1)
        assert tag.value != 0.1

    def test_float_overflow_is_infinite(self):
        assert FloatTag(1e39).value == math.inf
        assert to_float32(-1e39) == -math.inf

    def test_double_keeps_precision(self):
        assert DoubleTag(0.1).value == 0.1

    def test_snbt(self):
        assert FloatTag(1.5).to_snbt() == "1.5f"
        assert DoubleTag(-2.25).to_snbt() == "-2.25d"

    def test_integer_accessors_floor_and_saturate(self):
        assert DoubleTag(1.9).as_int() == 1
        assert DoubleTag(-1.5).as_int() == -2
        assert DoubleTag(1e20).as_int() == INT_MAX
        assert DoubleTag(-1e20).as_int() == INT_MIN
        assert DoubleTag(1e30).as_long() == LONG_MAX
        assert DoubleTag(math.inf).as_int() == INT_MAX
        assert DoubleTag(math.nan).as_long() == 0

    def test_as_float_narrows(self):
        assert DoubleTag(0.1).as_float() == to_float32(0.1)

    def test_nan_equals_itself(self):
        assert DoubleTag(math.nan) == DoubleTag(math.nan)

    def test_rejects_non_numbers(self):
        with pytest.raises(IllegalArgumentException):
            DoubleTag("1.0")

    def test_float_and_double_differ(self):
        assert FloatTag(1.5) != DoubleTag(1.5)


class TestStringTag:
    """Tests for StringTag."""

    def test_value(self):
        assert StringTag("abc").value == "abc"
        assert StringTag().is_empty()

    def test_rejects_none(self):
        with pytest.raises(IllegalArgumentException):
            StringTag(None)

    def test_rejects_non_str(self):
        with pytest.raises(IllegalArgumentException):
            StringTag(5)

    def test_snbt_escapes(self):
        assert StringTag('say "hi" \\ bye').to_snbt() == '"say \\"hi\\" \\\\ bye"'


class TestArrayTags:
    """Tests for the typed array tags."""

    def test_byte_array_from_bytes(self):
        tag = ByteArrayTag(b"\x00\xff")
        assert tag.value == b"\x00\xff"
        assert tag.signed_values() == [0, -1]
        assert len(tag) == 2

    def test_byte_array_from_ints(self):
        assert ByteArrayTag([-1, 255, 1]).value == b"\xff\xff\x01"

    def test_byte_array_out_of_range(self):
        with pytest.raises(IllegalArgumentException):
            ByteArrayTag([256])
        with pytest.raises(IllegalArgumentException):
            ByteArrayTag([-129])

    def test_int_array_range(self):
        with pytest.raises(IllegalArgumentException):
            IntArrayTag([INT_MAX + 1])
        assert LongArrayTag([INT_MAX + 1]).value == [INT_MAX + 1]

    def test_snbt(self):
        assert ByteArrayTag([1, -2]).to_snbt() == "[B;1B,-2B]"
        assert IntArrayTag([1, 2]).to_snbt() == "[I;1,2]"
        assert LongArrayTag([1, 2]).to_snbt() == "[L;1L,2L]"
        assert IntArrayTag().to_snbt() == "[I;]"

    def test_value_is_a_copy(self):
        tag = IntArrayTag([1])
        values = tag.value
        values.append(2)
        assert tag.value == [1]

    def test_copy_is_independent(self):
        tag = ByteArrayTag([1, 2])
        clone = tag.copy()
        assert clone == tag
        assert clone is not tag

    def test_arrays_are_unhashable(self):
        with pytest.raises(TypeError):
            hash(IntArrayTag([1]))


class TestEndTag:
    """Tests for EndTag."""

    def test_snbt(self):
        assert EndTag().to_snbt() == "END"

    def test_equality(self):
        assert EndTag() == EndTag()
        assert EndTag() != CompoundTag()

    def test_containers_are_unhashable(self):
        with pytest.raises(TypeError):
            hash(CompoundTag())
        with pytest.raises(TypeError):
            hash(ListTag())
