from __future__ import annotations

from phrasegen.romanize import to_pinyin


def test_tone_marked_syllables() -> None:
    assert to_pinyin("你好") == "nǐ hǎo"


def test_punctuation_does_not_break_rendering() -> None:
    rendered = to_pinyin("我是学生。")
    assert rendered.startswith("wǒ shì xué")
