"""Unit tests for nbtstorage.exceptions module."""

import pytest

from nbtstorage.exceptions import (
    NBTException,
    IllegalArgumentException,
    ConfigurationException,
    TagSerializationException,
    MalformedTagException,
    TagLimitException,
    SizeLimitExceededException,
    DepthLimitExceededException,
    ParseException,
)


class TestNBTException:
    """Tests for NBTException base class."""

    def test_create_with_message(self):
        ex = NBTException("test message")
        assert str(ex) == "test message"
        assert ex.cause is None

    def test_create_with_message_and_cause(self):
        cause = ValueError("original error")
        ex = NBTException("wrapper message", cause=cause)
        assert str(ex) == "wrapper message"
        assert ex.cause is cause

    def test_create_empty(self):
        ex = NBTException()
        assert str(ex) == ""

    def test_inheritance(self):
        assert isinstance(NBTException("test"), Exception)


class TestHierarchy:
    """Tests for the shape of the exception tree."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            IllegalArgumentException,
            ConfigurationException,
            TagSerializationException,
            TagLimitException,
        ],
    )
    def test_direct_subclasses(self, exc_class):
        assert issubclass(exc_class, NBTException)

    def test_malformed_is_serialization_error(self):
        ex = MalformedTagException("truncated", cause=EOFError())
        assert isinstance(ex, TagSerializationException)
        assert isinstance(ex.cause, EOFError)

    def test_limits_are_not_malformed(self):
        assert not issubclass(SizeLimitExceededException, TagSerializationException)
        assert not issubclass(DepthLimitExceededException, TagSerializationException)


class TestSizeLimitExceededException:
    """Tests for SizeLimitExceededException."""

    def test_attributes(self):
        ex = SizeLimitExceededException("too big", limit=100, read_bytes=150)
        assert isinstance(ex, TagLimitException)
        assert ex.limit == 100
        assert ex.read_bytes == 150
        assert str(ex) == "too big"

    def test_defaults(self):
        ex = SizeLimitExceededException("too big")
        assert ex.limit == -1
        assert ex.read_bytes == -1


class TestDepthLimitExceededException:
    """Tests for DepthLimitExceededException."""

    def test_depth(self):
        ex = DepthLimitExceededException("too deep", depth=513)
        assert isinstance(ex, TagLimitException)
        assert ex.depth == 513


class TestParseException:
    """Tests for ParseException rendering."""

    def test_short_context(self):
        ex = ParseException("Expected value", "{a:}", 3)
        assert str(ex) == "Expected value at position 3: {a:<--[HERE]"
        assert ex.raw_message == "Expected value"
        assert ex.input == "{a:}"
        assert ex.cursor == 3

    def test_truncated_context(self):
        text = "{abcdefghijklmnop:}"
        ex = ParseException("Expected value", text, 18)
        assert ex.context == "...hijklmnop:<--[HERE]"

    def test_context_of_exactly_ten_characters(self):
        ex = ParseException("Oops", "0123456789", 10)
        assert ex.context == "0123456789<--[HERE]"

    def test_cursor_at_start(self):
        ex = ParseException("Expected '{'", "x", 0)
        assert str(ex) == "Expected '{' at position 0: <--[HERE]"

    def test_is_nbt_exception(self):
        assert isinstance(ParseException("x", "", 0), NBTException)
