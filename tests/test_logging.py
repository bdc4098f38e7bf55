"""Unit tests for nbtstorage.logging module."""

import io
import logging

import pytest

from nbtstorage.logging import (
    COMPONENTS,
    NBT_ROOT_LOGGER,
    NBTLoggerFactory,
    configure_logging,
    get_logger,
    set_level,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handler, level and disabled changes made by a test."""
    root = logging.getLogger(NBT_ROOT_LOGGER)
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    root.disabled = False
    NBTLoggerFactory._handler = None
    for component in COMPONENTS + ("test_component",):
        logging.getLogger(f"{NBT_ROOT_LOGGER}.{component}").setLevel(logging.NOTSET)


class TestNBTLoggerFactory:
    """Tests for NBTLoggerFactory class."""

    def test_get_logger_root(self):
        assert NBTLoggerFactory.get_logger().name == NBT_ROOT_LOGGER

    def test_get_logger_component(self):
        logger = NBTLoggerFactory.get_logger("serialization")
        assert logger.name == f"{NBT_ROOT_LOGGER}.serialization"

    def test_library_installs_only_null_handler(self):
        root = logging.getLogger(NBT_ROOT_LOGGER)
        assert any(isinstance(h, logging.NullHandler) for h in root.handlers)

    def test_configure(self):
        logger = NBTLoggerFactory.configure(level=logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert NBTLoggerFactory.is_configured() is True

    def test_configure_twice_replaces_handler(self):
        first = logging.StreamHandler(io.StringIO())
        second = logging.StreamHandler(io.StringIO())
        logger = NBTLoggerFactory.configure(handler=first)
        NBTLoggerFactory.configure(handler=second)
        assert first not in logger.handlers
        assert second in logger.handlers

    def test_configured_handler_receives_records(self):
        stream = io.StringIO()
        NBTLoggerFactory.configure(
            level=logging.INFO,
            format_string="%(name)s:%(message)s",
            handler=logging.StreamHandler(stream),
        )
        get_logger("file").info("saved")
        assert stream.getvalue().strip() == "nbtstorage.file:saved"

    def test_set_level(self):
        NBTLoggerFactory.set_level(logging.WARNING, "test_component")
        assert NBTLoggerFactory.get_logger("test_component").level == logging.WARNING

    def test_disable_and_enable(self):
        NBTLoggerFactory.disable()
        assert logging.getLogger(NBT_ROOT_LOGGER).disabled is True
        NBTLoggerFactory.enable()
        assert logging.getLogger(NBT_ROOT_LOGGER).disabled is False


class TestModuleFunctions:
    """Tests for module-level functions."""

    def test_get_logger(self):
        assert get_logger("snbt").name == f"{NBT_ROOT_LOGGER}.snbt"

    def test_get_logger_empty(self):
        assert get_logger().name == NBT_ROOT_LOGGER

    def test_configure_logging(self):
        logger = configure_logging(level=logging.INFO)
        assert logger.name == NBT_ROOT_LOGGER

    def test_set_level_function(self):
        set_level(logging.ERROR, "tag")
        assert get_logger("tag").level == logging.ERROR

    def test_loggers_are_hierarchical(self):
        assert get_logger("tag").parent is get_logger()
