"""Logging for nbtstorage.

Every module logs through a child of the ``nbtstorage`` logger, named
after its component. The library only attaches a :class:`logging.NullHandler`,
so nothing is printed unless the application configures logging, either
through its own root configuration or through :func:`configure_logging`.

Components:
    ``tag``            dropped list insertions
    ``serialization``  decode summaries and rejected payloads
    ``snbt``           parse calls
    ``file``           loads and saves of storage files

Example:
    >>> import logging
    >>> from nbtstorage.logging import configure_logging, set_level
    >>> configure_logging(level=logging.INFO)
    >>> set_level(logging.DEBUG, "serialization")
"""

import logging
from typing import Optional


NBT_ROOT_LOGGER = "nbtstorage"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
COMPONENTS = ("tag", "serialization", "snbt", "file")

logging.getLogger(NBT_ROOT_LOGGER).addHandler(logging.NullHandler())


class NBTLoggerFactory:
    """Hands out component loggers and owns the optional package handler."""

    _handler: Optional[logging.Handler] = None

    @classmethod
    def get_logger(cls, component: str = "") -> logging.Logger:
        """Get the logger of a component, or the package logger when empty."""
        if not component:
            return logging.getLogger(NBT_ROOT_LOGGER)
        return logging.getLogger(f"{NBT_ROOT_LOGGER}.{component}")

    @classmethod
    def configure(
        cls,
        level: int = logging.INFO,
        format_string: str = DEFAULT_FORMAT,
        handler: Optional[logging.Handler] = None,
    ) -> logging.Logger:
        """Attach a handler to the package logger.

        Calling this again replaces the handler installed by the previous
        call instead of stacking a second one.

        Args:
            level: Level for the package logger and its handler.
            format_string: Format applied to the handler.
            handler: Handler to install. A stderr StreamHandler by default.

        Returns:
            The package logger.
        """
        logger = logging.getLogger(NBT_ROOT_LOGGER)
        if cls._handler is not None:
            logger.removeHandler(cls._handler)

        handler = handler or logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)
        logger.setLevel(level)

        cls._handler = handler
        return logger

    @classmethod
    def set_level(cls, level: int, component: str = "") -> None:
        cls.get_logger(component).setLevel(level)

    @classmethod
    def disable(cls) -> None:
        """Silence the package logger and every component below it."""
        logging.getLogger(NBT_ROOT_LOGGER).disabled = True

    @classmethod
    def enable(cls) -> None:
        logging.getLogger(NBT_ROOT_LOGGER).disabled = False

    @classmethod
    def is_configured(cls) -> bool:
        """Check whether :meth:`configure` installed a handler."""
        return cls._handler is not None


def get_logger(component: str = "") -> logging.Logger:
    """Get the logger of an nbtstorage component."""
    return NBTLoggerFactory.get_logger(component)


def configure_logging(
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Send nbtstorage log records to ``handler`` (stderr by default)."""
    return NBTLoggerFactory.configure(level, format_string, handler)


def set_level(level: int, component: str = "") -> None:
    """Set the level of a component logger, or of the package logger."""
    NBTLoggerFactory.set_level(level, component)
