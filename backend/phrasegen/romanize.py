from __future__ import annotations

from pypinyin import Style, pinyin


def to_pinyin(text: str) -> str:
    """Tone-marked pinyin, one syllable per character, space separated."""
    syllables = pinyin(text, style=Style.TONE, heteronym=False)
    return " ".join(s[0] for s in syllables if s and s[0].strip())
