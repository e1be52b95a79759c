"""Emoji translation and the custom emoji directory cache."""

from chatrelay.emoji.directory import CacheEntry, EmojiDirectoryCache
from chatrelay.emoji.normalizer import (
    EmojiNormalizer,
    clean_name,
    normalize,
    resolve_custom_emoji,
)
from chatrelay.emoji.table import BUILTIN_EMOJI, DEFAULT_TABLE, EmojiTable

__all__ = [
    "BUILTIN_EMOJI",
    "DEFAULT_TABLE",
    "CacheEntry",
    "EmojiDirectoryCache",
    "EmojiNormalizer",
    "EmojiTable",
    "clean_name",
    "normalize",
    "resolve_custom_emoji",
]
