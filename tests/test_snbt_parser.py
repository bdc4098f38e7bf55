"""Unit tests for nbtstorage.snbt.parser module."""

import pytest

from nbtstorage.config import ParserConfig
from nbtstorage.exceptions import ParseException
from nbtstorage.snbt import SNBTParser, parse, parse_primitive, to_compound, to_list
from nbtstorage.tag import (
    ByteArrayTag,
    ByteTag,
    CompoundTag,
    DoubleTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    ListTag,
    LongArrayTag,
    LongTag,
    ShortTag,
    StringTag,
    TagType,
)


class TestParsePrimitive:
    """Tests for unquoted literal classification."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("5b", ByteTag(5)),
            ("5s", ShortTag(5)),
            ("5l", LongTag(5)),
            ("5.0f", FloatTag(5.0)),
            ("5.0d", DoubleTag(5.0)),
            ("5.0", DoubleTag(5.0)),
            ("5", IntTag(5)),
            ("1b", ByteTag(1)),
            ("-128B", ByteTag(-128)),
            ("-5s", ShortTag(-5)),
            ("3", IntTag(3)),
            ("+7", IntTag(7)),
            ("-2147483648", IntTag(-(2 ** 31))),
            ("5L", LongTag(5)),
            ("1.5f", FloatTag(1.5)),
            ("1F", FloatTag(1.0)),
            ("1e3f", FloatTag(1000.0)),
            ("1.5d", DoubleTag(1.5)),
            ("2D", DoubleTag(2.0)),
            ("1.5", DoubleTag(1.5)),
            ("1.", DoubleTag(1.0)),
            (".5", DoubleTag(0.5)),
            ("-1.5E2", DoubleTag(-150.0)),
            ("true", ByteTag(1)),
            ("TRUE", ByteTag(1)),
            ("false", ByteTag(0)),
        ],
    )
    def test_typed_literals(self, text, expected):
        assert parse_primitive(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "hello",
            "128b",
            "40000s",
            "2147483648",
            "1.2.3",
            "01",
            "1e999d",
            "3.4e39f",
            "minecraft.stone",
            "1" * 5000,
            "-" + "9" * 5000 + "L",
        ],
    )
    def test_falls_back_to_string(self, text):
        assert parse_primitive(text) == StringTag(text)


class TestCompoundParsing:
    """Tests for compound documents."""

    def test_empty(self):
        assert to_compound("{}") == CompoundTag()

    def test_mixed_values(self):
        compound = to_compound('{name:"Steve",level:5b,hp:20.0f,tags:[a,b]}')
        assert compound.get_string("name") == "Steve"
        assert compound.get_tag("level") == ByteTag(5)
        assert compound.get_tag("hp") == FloatTag(20.0)
        assert compound.get_list("tags", TagType.STRING).get_string_at(1) == "b"

    def test_whitespace(self):
        compound = to_compound(" { a : [ 1 , 2 ] , b : { } } ")
        assert len(compound.get_list("a", TagType.INT)) == 2
        assert compound.get_compound("b").is_empty()

    def test_quoted_keys(self):
        compound = to_compound("{\"a b\":1,'c:d':2}")
        assert compound.get_int("a b") == 1
        assert compound.get_int("c:d") == 2

    def test_duplicate_key_last_wins(self):
        assert to_compound("{a:1,a:2}").get_int("a") == 2

    def test_missing_value(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:}")
        assert str(exc_info.value) == "Expected value at position 3: {a:<--[HERE]"

    def test_context_is_truncated(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:1,b:2,c:3,d:}")
        assert exc_info.value.cursor == 15
        assert exc_info.value.context == "...b:2,c:3,d:<--[HERE]"

    def test_trailing_comma(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:1,}")
        assert exc_info.value.raw_message == "Expected non-empty key"
        assert exc_info.value.cursor == 5

    def test_empty_key(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{:1}")
        assert exc_info.value.raw_message == "Expected non-empty key"
        assert exc_info.value.cursor == 1

    def test_unclosed(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:1")
        assert exc_info.value.raw_message == "Expected '}'"
        assert exc_info.value.cursor == 4

    def test_missing_separator(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:b c}")
        assert exc_info.value.raw_message == "Expected '}'"
        assert exc_info.value.cursor == 5

    def test_missing_key_at_end(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:1,")
        assert exc_info.value.raw_message == "Expected key"

    def test_trailing_data(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:1} x")
        assert exc_info.value.raw_message == "Trailing data found"
        assert exc_info.value.cursor == 6

    def test_trailing_whitespace_is_allowed(self):
        assert to_compound("{a:1}  \n").get_int("a") == 1

    def test_overlong_integer_value_is_a_string(self):
        digits = "1" * 5000
        assert to_compound("{a:" + digits + "}").get_string("a") == digits

    def test_not_a_compound(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("")
        assert exc_info.value.raw_message == "Expected '{'"

    def test_unterminated_string_value(self):
        with pytest.raises(ParseException):
            to_compound('{a:"abc}')


class TestListParsing:
    """Tests for list documents."""

    def test_empty(self):
        tags = to_list("[]")
        assert tags.is_empty()
        assert tags.element_type == TagType.END

    def test_homogeneous(self):
        assert to_list("[1,2,3]") == ListTag([IntTag(1), IntTag(2), IntTag(3)])

    def test_nested_lists_of_different_types(self):
        tags = to_list('[[1],["a"]]')
        assert tags.element_type == TagType.LIST
        assert len(tags) == 2

    def test_mixed_types_rejected(self):
        with pytest.raises(ParseException) as exc_info:
            to_list('[1,2,"x"]')
        assert exc_info.value.cursor == 5
        assert exc_info.value.raw_message == (
            "Unable to insert TAG_String into ListTag of type TAG_Int"
        )

    def test_trailing_comma(self):
        with pytest.raises(ParseException) as exc_info:
            to_list("[1,]")
        assert exc_info.value.raw_message == "Expected value"
        assert exc_info.value.cursor == 3

    def test_unclosed(self):
        with pytest.raises(ParseException):
            to_list("[")


class TestArrayParsing:
    """Tests for typed array literals."""

    def test_byte_array(self):
        assert to_list("[[B;1,2,3]]").get(0) == ByteArrayTag([1, 2, 3])

    def test_arrays_in_compound(self):
        compound = to_compound("{b:[B;1b,-2B],i:[I; 1, -2],l:[L;1L,2],e:[B;]}")
        assert compound.get_byte_array("b") == bytes([1, 254])
        assert compound.get_tag("i") == IntArrayTag([1, -2])
        assert compound.get_tag("l") == LongArrayTag([1, 2])
        assert compound.get_tag("e") == ByteArrayTag()

    def test_boolean_element(self):
        assert to_compound("{b:[B;true,false]}").get_byte_array("b") == b"\x01\x00"

    def test_element_out_of_range(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{b:[B;300]}")
        assert exc_info.value.raw_message == "Unable to insert TAG_Int into TAG_Byte_Array"
        assert exc_info.value.cursor == 6

    def test_non_integral_element(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{i:[I;1.5]}")
        assert exc_info.value.raw_message == "Unable to insert TAG_Double into TAG_Int_Array"

    def test_invalid_array_type(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{x:[X;1]}")
        assert exc_info.value.raw_message == "Invalid array type 'X' found"
        assert exc_info.value.cursor == 4

    def test_unterminated_array(self):
        with pytest.raises(ParseException) as exc_info:
            to_compound("{b:[B;")
        assert exc_info.value.raw_message == "Expected value"

    def test_quoted_element_is_a_list(self):
        tags = to_compound("{l:['a;']}").get_list("l", TagType.STRING)
        assert tags.get_string_at(0) == "a;"


class TestParserLimits:
    """Tests for input length and nesting limits."""

    def test_max_input_length(self):
        with pytest.raises(ParseException) as exc_info:
            SNBTParser("{a:10}", ParserConfig(max_input_length=5))
        assert exc_info.value.raw_message == "Input longer than 5 characters"

    def test_input_at_length_limit(self):
        config = ParserConfig(max_input_length=6)
        assert to_compound("{a:10}", config).get_int("a") == 10

    def test_configured_depth(self):
        config = ParserConfig(max_depth=2)
        assert to_compound("{a:{b:{}}}", config).get_compound("a").has_key("b")
        with pytest.raises(ParseException) as exc_info:
            to_compound("{a:{b:{c:{}}}}", config)
        assert exc_info.value.raw_message == "Tag nesting deeper than 2"

    def test_deep_nesting_is_a_parse_error(self):
        with pytest.raises(ParseException) as exc_info:
            to_list("[" * 1000 + "]" * 1000)
        assert exc_info.value.raw_message == "Tag nesting deeper than 256"


class TestParseDispatch:
    """Tests for the module-level entry points."""

    def test_parse_compound(self):
        assert isinstance(parse("{a:1}"), CompoundTag)

    def test_parse_list(self):
        assert parse("  [1,2]") == ListTag([IntTag(1), IntTag(2)])

    def test_parser_object(self):
        parser = SNBTParser("[a]")
        assert parser.to_list().get_string_at(0) == "a"
        assert not parser.reader.can_read()


class TestTextRoundTrip:
    """Tests for rendering then parsing."""

    def test_every_variant(self, sample_compound):
        assert to_compound(sample_compound.to_snbt()) == sample_compound

    def test_keys_and_strings_needing_quotes(self):
        compound = CompoundTag().set_string("a b", 'x"y\\z')
        text = compound.to_snbt()
        assert text == '{"a b":"x\\"y\\\\z"}'
        assert to_compound(text) == compound

    def test_negative_byte_array(self):
        compound = CompoundTag().set_byte_array("b", [-1, 127])
        assert to_compound(compound.to_snbt()) == compound
