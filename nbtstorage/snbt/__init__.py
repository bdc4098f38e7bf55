"""SNBT, the textual form of tag trees."""

from nbtstorage.snbt.parser import (
    SNBTParser,
    parse,
    parse_primitive,
    to_compound,
    to_list,
)
from nbtstorage.snbt.reader import StringReader

__all__ = [
    "SNBTParser",
    "StringReader",
    "parse",
    "parse_primitive",
    "to_compound",
    "to_list",
]
