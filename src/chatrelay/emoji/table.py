"""Bidirectional emoji table between Unicode glyphs and Slack short names."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

VARIATION_SELECTOR = "\ufe0f"

# (glyph, slack name). The first name listed for a glyph is its primary name;
# later names for the same glyph are aliases that only map towards the glyph.
BUILTIN_EMOJI: tuple[tuple[str, str], ...] = (
    ("😊", "smile"),
    ("😄", "laughing"),
    ("😄", "satisfied"),
    ("😀", "grinning"),
    ("😁", "grin"),
    ("😂", "joy"),
    ("🤣", "rolling_on_the_floor_laughing"),
    ("😉", "wink"),
    ("😍", "heart_eyes"),
    ("😎", "sunglasses"),
    ("😅", "sweat_smile"),
    ("😢", "cry"),
    ("😭", "sob"),
    ("😮", "open_mouth"),
    ("😱", "scream"),
    ("😡", "rage"),
    ("🙃", "upside_down_face"),
    ("🙂", "slightly_smiling_face"),
    ("🤔", "thinking_face"),
    ("🤯", "exploding_head"),
    ("🥳", "partying_face"),
    ("🫡", "saluting_face"),
    ("❤️", "heart"),
    ("💔", "broken_heart"),
    ("💯", "100"),
    ("👍", "thumbsup"),
    ("👍", "+1"),
    ("👎", "thumbsdown"),
    ("👎", "-1"),
    ("👋", "wave"),
    ("👌", "ok_hand"),
    ("👏", "clap"),
    ("🙌", "raised_hands"),
    ("🙏", "pray"),
    ("💪", "muscle"),
    ("✌️", "v"),
    ("🤞", "crossed_fingers"),
    ("👀", "eyes"),
    ("🧠", "brain"),
    ("🚀", "rocket"),
    ("🔥", "fire"),
    ("🎉", "tada"),
    ("🎊", "confetti_ball"),
    ("⭐", "star"),
    ("🌟", "star2"),
    ("✨", "sparkles"),
    ("☀️", "sunny"),
    ("⚡", "zap"),
    ("☕", "coffee"),
    ("🍕", "pizza"),
    ("🏆", "trophy"),
    ("💡", "bulb"),
    ("📌", "pushpin"),
    ("📈", "chart_with_upwards_trend"),
    ("🔍", "mag"),
    ("🛠️", "hammer_and_wrench"),
    ("⏳", "hourglass_flowing_sand"),
    ("✅", "white_check_mark"),
    ("✅", "check"),
    ("✔️", "heavy_check_mark"),
    ("☑️", "ballot_box_with_check"),
    ("⚠️", "warning"),
    ("❌", "x"),
    ("❓", "question"),
    ("❗", "exclamation"),
    ("🚫", "no_entry_sign"),
    ("🆗", "ok"),
    ("🙈", "see_no_evil"),
    ("💩", "hankey"),
    ("💩", "poop"),
    ("🤖", "robot_face"),
    ("👻", "ghost"),
)


class EmojiTable:
    """Lookup table generated from a single list of ``(glyph, name)`` pairs.

    Both directions are derived from the same pairs, so for every primary
    pair ``(C, P)`` the table guarantees ``name_for(C) == P`` and
    ``glyph_for(P) == C``.  A glyph written without its trailing variation
    selector (``"❤"`` instead of ``"❤️"``) resolves to the same name.

    Raises:
        ValueError: If a name is bound to two different glyphs, or a token is
            registered both as a glyph and as a name.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]]) -> None:
        self._glyphs: dict[str, str] = {}  # name -> glyph
        self._names: dict[str, str] = {}  # glyph (and bare variant) -> primary name
        self._canonical: dict[str, str] = {}  # glyph variant -> canonical glyph
        self._primary: list[tuple[str, str]] = []

        for glyph, name in pairs:
            existing = self._glyphs.get(name)
            if existing is not None and existing != glyph:
                raise ValueError(f"emoji name {name!r} bound to both {existing!r} and {glyph!r}")
            self._glyphs[name] = glyph
            if glyph not in self._names:
                self._primary.append((glyph, name))
            for variant in (glyph, glyph.replace(VARIATION_SELECTOR, "")):
                self._names.setdefault(variant, name)
                self._canonical.setdefault(variant, glyph)

        overlap = self._glyphs.keys() & self._names.keys()
        if overlap:
            raise ValueError(f"tokens registered as both glyph and name: {sorted(overlap)}")

    def glyph_for(self, name: str) -> str | None:
        """Return the glyph for a Slack short name, or ``None``."""
        return self._glyphs.get(name)

    def name_for(self, glyph: str) -> str | None:
        """Return the primary Slack short name for a glyph, or ``None``."""
        return self._names.get(glyph)

    def canonical(self, glyph: str) -> str | None:
        """Return the canonical spelling of a known glyph, or ``None``."""
        return self._canonical.get(glyph)

    def is_name(self, token: str) -> bool:
        return token in self._glyphs

    def is_glyph(self, token: str) -> bool:
        return token in self._names

    def lookup(self, token: str) -> str | None:
        """Translate *token* to the other side of the table, or ``None``."""
        if token in self._glyphs:
            return self._glyphs[token]
        return self._names.get(token)

    def aliases(self, glyph: str) -> list[str]:
        """Return every name bound to *glyph*, primary name first."""
        canonical = self._canonical.get(glyph)
        return [name for name, g in self._glyphs.items() if g == canonical]

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Iterate over ``(glyph, primary name)`` pairs in registration order."""
        return iter(self._primary)

    def __contains__(self, token: object) -> bool:
        return token in self._glyphs or token in self._names

    def __len__(self) -> int:
        return len(self._primary)


DEFAULT_TABLE = EmojiTable(BUILTIN_EMOJI)
