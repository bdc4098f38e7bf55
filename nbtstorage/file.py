"""Compound tags persisted to gzip-compressed files."""

import os
import tempfile
from typing import Optional, Union

from nbtstorage.config import CodecConfig
from nbtstorage.logging import get_logger
from nbtstorage.serialization.service import TagSerializationService
from nbtstorage.tag.compound import CompoundTag


_logger = get_logger("file")


class StorageFile(CompoundTag):
    """A :class:`CompoundTag` bound to a gzip-compressed NBT file.

    Opening a path creates any missing parent directories and loads the
    file if it already holds data. A missing or empty file starts out as
    an empty compound; a corrupt one raises
    :class:`~nbtstorage.exceptions.MalformedTagException`.

    Changes stay in memory until :meth:`save` is called, except for
    :meth:`move` which saves on success.

    Args:
        path: Location of the file.
        config: Codec settings used for loading and saving.

    Example:
        >>> data = StorageFile("players/steve.dat")
        >>> data.set_int("level", 5)
        >>> data.save()
    """

    __slots__ = ("_path", "_service")

    def __init__(self, path: Union[str, os.PathLike], config: Optional[CodecConfig] = None):
        super().__init__()
        self._path = os.fspath(path)
        self._service = TagSerializationService(config)

        parent = os.path.dirname(self._path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self._load()

    @property
    def path(self) -> str:
        return self._path

    def _load(self) -> None:
        if not os.path.exists(self._path) or os.path.getsize(self._path) == 0:
            _logger.debug("Starting empty storage for %s", self._path)
            return

        with open(self._path, "rb") as f:
            loaded = self._service.read_compressed(f)
        for key, tag in loaded.items():
            self.set_tag(key, tag)
        _logger.debug("Loaded %d keys from %s", len(self), self._path)

    def set_default(self, compound: CompoundTag) -> "StorageFile":
        """Copy in every key of ``compound`` this file does not hold yet."""
        for key, tag in compound.items():
            if key not in self:
                self.set_tag(key, tag.copy())
        return self

    def save(self) -> None:
        """Write the compound to disk.

        The data goes to a temporary file in the same directory which then
        replaces the target, so a failed save leaves the old file intact.
        """
        directory = os.path.dirname(os.path.abspath(self._path))
        fd, temp_path = tempfile.mkstemp(
            prefix=".", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "wb") as f:
                self._service.write_compressed(self, f)
            os.replace(temp_path, self._path)
        except BaseException:
            os.unlink(temp_path)
            raise
        _logger.debug("Saved %d keys to %s", len(self), self._path)

    def move(self, old_key: str, new_key: str) -> bool:
        """Rename a key and save when it existed."""
        moved = super().move(old_key, new_key)
        if moved:
            self.save()
        return moved

    def __repr__(self) -> str:
        return f"StorageFile({self._path!r}, {len(self)} keys)"
