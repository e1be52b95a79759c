"""Translation between Unicode emoji and Slack short names."""

from __future__ import annotations

import re
from collections.abc import Mapping

from chatrelay.emoji.table import DEFAULT_TABLE, VARIATION_SELECTOR, EmojiTable
from chatrelay.models.enums import NormalizeTarget

_SUFFIX_RE = re.compile(r"[0-9_]+$")
_SKIN_TONE_RE = re.compile(r"::skin-tone-([2-6])$")
_SHORTCODE_RE = re.compile(r":([\w+-]+)(?:::skin-tone-([2-6]))?:")

# Slack skin-tone-2 .. skin-tone-6 map onto the Fitzpatrick modifiers.
_TONE_MODIFIERS = {str(n): chr(0x1F3FB + n - 2) for n in range(2, 7)}
_MODIFIER_TONES = {modifier: tone for tone, modifier in _TONE_MODIFIERS.items()}

_ALIAS_PREFIX = "alias:"
_MAX_ALIAS_DEPTH = 8


def strip_colons(token: str) -> str:
    return token.replace(":", "")


def clean_name(token: str) -> str:
    """Reduce a Slack short name to its table lookup key.

    Drops a ``::skin-tone-N`` modifier, then a trailing run of digits and
    underscores (Slack's disambiguation suffix), then every colon::

        >>> clean_name(":thumbsup_2:")
        'thumbsup'
    """
    token = _SKIN_TONE_RE.sub("", token.strip(":"))
    return strip_colons(_SUFFIX_RE.sub("", token))


def _skin_tone(token: str) -> str | None:
    match = _SKIN_TONE_RE.search(token.strip(":"))
    return match.group(1) if match else None


class EmojiNormalizer:
    """Pure, total translator between the display and API forms of emoji.

    Unknown tokens are their own fallback: :meth:`normalize` never raises.
    """

    def __init__(self, table: EmojiTable | None = None) -> None:
        self._table = table or DEFAULT_TABLE

    @property
    def table(self) -> EmojiTable:
        return self._table

    def normalize(self, token: str, target: NormalizeTarget | str) -> str:
        """Return *token* in the form expected by *target*.

        ``"api"`` yields a Slack short name (``thumbsup``), ``"display"``
        yields the Unicode glyph (``👍``).
        """
        if NormalizeTarget(target) is NormalizeTarget.API:
            return self.to_api(token)
        return self.to_display(token)

    def to_api(self, token: str) -> str:
        # An exact known name wins over its suffix-stripped form (star2, 100).
        clean = clean_name(token)
        for candidate in (strip_colons(token), clean):
            name = self._resolve_name(candidate)
            if name is not None:
                tone = _skin_tone(token)
                if tone is not None and "::" not in name:
                    return f"{name}::skin-tone-{tone}"
                return name
        return clean or strip_colons(token)

    def to_display(self, token: str) -> str:
        clean = clean_name(token)
        glyph = self._table.glyph_for(strip_colons(token)) or self._table.glyph_for(clean)
        if glyph is not None:
            tone = _skin_tone(token)
            if tone is not None:
                return glyph.replace(VARIATION_SELECTOR, "") + _TONE_MODIFIERS[tone]
            return glyph
        canonical = self._table.canonical(clean)
        if canonical is not None:
            return canonical
        return token

    def _resolve_name(self, candidate: str) -> str | None:
        if not candidate:
            return None
        if self._table.is_name(candidate):
            return candidate
        name = self._table.name_for(candidate)
        if name is not None:
            return name
        # Skin-toned glyph: base glyph followed by one Fitzpatrick modifier.
        tone = _MODIFIER_TONES.get(candidate[-1])
        if tone is not None:
            name = self._table.name_for(candidate[:-1])
            if name is not None:
                return f"{name}::skin-tone-{tone}"
        return None

    def replace_shortcodes(
        self,
        text: str,
        directory: Mapping[str, str] | None = None,
    ) -> tuple[str, dict[str, str]]:
        """Substitute ``:name:`` shortcodes in message text with glyphs.

        Custom workspace emoji from *directory* are consulted first: an alias
        onto a builtin name becomes that glyph, while an image emoji stays as
        a literal shortcode and its URL is collected in the returned mapping.
        Builtin names come next; anything else is left untouched.

        Returns:
            The substituted text and a ``{name: image_url}`` mapping of the
            custom image emoji referenced by the text.
        """
        directory = directory or {}
        custom: dict[str, str] = {}

        def _substitute(match: re.Match[str]) -> str:
            name, tone = match.group(1), match.group(2)
            resolved = resolve_custom_emoji(directory, name)
            if resolved is not None:
                if resolved.startswith(_ALIAS_PREFIX):
                    glyph = self._table.glyph_for(resolved[len(_ALIAS_PREFIX) :])
                    return glyph if glyph is not None else match.group(0)
                custom[name] = resolved
                return match.group(0)
            if self._table.is_name(name):
                token = f"{name}::skin-tone-{tone}" if tone else name
                return self.to_display(token)
            return match.group(0)

        return _SHORTCODE_RE.sub(_substitute, text), custom


def resolve_custom_emoji(directory: Mapping[str, str], name: str) -> str | None:
    """Follow ``alias:`` entries in a Slack emoji directory.

    Returns the image URL *name* ultimately points at, ``"alias:<target>"``
    when the chain leaves the directory (typically an alias onto a standard
    emoji), or ``None`` if *name* is not a custom emoji.  Cycles and overly
    long chains resolve to ``None``.
    """
    value = directory.get(name)
    seen = {name}
    for _ in range(_MAX_ALIAS_DEPTH):
        if value is None or not value.startswith(_ALIAS_PREFIX):
            return value
        target = value[len(_ALIAS_PREFIX) :]
        if target in seen:
            return None
        if target not in directory:
            return value
        seen.add(target)
        value = directory[target]
    return None


_default = EmojiNormalizer()


def normalize(token: str, target: NormalizeTarget | str) -> str:
    """Normalize *token* with the builtin emoji table."""
    return _default.normalize(token, target)
