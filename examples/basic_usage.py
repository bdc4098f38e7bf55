"""Basic usage example for nbtstorage.

This example demonstrates how to:
- Build a compound with the typed setters
- Encode it with and without gzip framing
- Decode it again under a byte budget
- Store composite values such as positions and colors
"""

import uuid

from nbtstorage import (
    CodecConfig,
    CompoundTag,
    IntTag,
    ListTag,
    SizeLimitExceededException,
    TagSerializationService,
    TagType,
)
from nbtstorage.types import Color, ColorFormat, Position


def main():
    player = CompoundTag()
    player.set_string("name", "Steve")
    player.set_int("level", 5)
    player.set_boolean("online", True)
    player.set_unique_id("id", uuid.uuid4())
    player.set_position("spawn", Position("world", 10.5, 64.0, -3.25))
    player.set_color("cape", Color(200, 40, 40), ColorFormat.HEX)
    player.set_tag("scores", ListTag([IntTag(10), IntTag(25), IntTag(7)]))
    print(f"Player: {player.to_snbt()}")

    service = TagSerializationService()

    raw = service.to_bytes(player)
    compressed = service.to_compressed_bytes(player)
    print(f"\nEncoded {len(raw)} bytes, {len(compressed)} bytes gzipped")

    decoded = service.from_compressed_bytes(compressed)
    print(f"Round trip equal: {decoded == player}")
    print(f"Spawn: {decoded.get_position('spawn')}")
    print(f"Cape: {decoded.get_color('cape')}")

    scores = decoded.get_list("scores", TagType.INT)
    print(f"Best score: {max(scores.get_int_at(i) for i in range(len(scores)))}")

    # A tight budget rejects the same payload before allocating it
    strict = TagSerializationService(CodecConfig(size_limit=1024))
    try:
        strict.from_compressed_bytes(compressed)
    except SizeLimitExceededException as e:
        print(f"\nRejected under a 1 KiB budget: {e}")


if __name__ == "__main__":
    main()
