"""SNBT parsing and file storage example for nbtstorage.

This example demonstrates how to:
- Parse SNBT text into compounds and lists
- Read parse errors with their position context
- Load limits from YAML configuration
- Persist a compound with StorageFile
"""

import logging
import tempfile
from pathlib import Path

from nbtstorage import ParseException, StorageConfig, StorageFile, parse, to_compound
from nbtstorage.logging import configure_logging

CONFIG_YAML = """
nbtstorage:
  codec:
    size_limit: 2097152
  parser:
    max_input_length: 4096
    max_depth: 32
"""


def main():
    configure_logging(level=logging.DEBUG)
    config = StorageConfig.from_yaml_string(CONFIG_YAML)

    settings = to_compound(
        '{motd:"Welcome!",maxPlayers:20,pvp:true,spawn:{x:0.5d,y:64d,z:0.5d},'
        "banned:[I;12,99],ops:[Steve,Alex]}",
        config.parser,
    )
    print(f"MOTD: {settings.get_string('motd')}")
    print(f"PvP enabled: {settings.get_boolean('pvp')}")
    print(f"Spawn y: {settings.get_compound('spawn').get_double('y')}")
    print(f"Banned ids: {settings.get_int_array('banned')}")

    print(f"\nParsed list: {parse('[1.5f, 2f, 3f]')}")

    for text in ("{a:1,}", '{tags:[1,2,"x"]}', "{a:1} trailing"):
        try:
            to_compound(text, config.parser)
        except ParseException as e:
            print(f"Rejected {text!r}: {e}")

    with tempfile.TemporaryDirectory() as directory:
        path = Path(directory) / "server" / "settings.dat"

        storage = StorageFile(path, config.codec)
        storage.set_default(settings)
        storage.set_int("maxPlayers", 50)
        storage.save()

        reloaded = StorageFile(path, config.codec)
        print(f"\nReloaded {reloaded!r}")
        print(f"maxPlayers: {reloaded.get_int('maxPlayers')}")

        reloaded.move("motd", "message")
        print(f"Keys after move: {sorted(StorageFile(path).keys())}")


if __name__ == "__main__":
    main()
