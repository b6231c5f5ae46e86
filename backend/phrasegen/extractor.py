"""Recover sentences and their vocabulary usage from raw model output.

The model is asked to label each sentence ``SENTENCE_<n>:`` and to use only
the enumerated pool. Neither is guaranteed, so usage is always recomputed from
the literal sentence text; any index list the model reports about itself is
ignored.
"""

from __future__ import annotations

import re
import unicodedata
from typing import List, Sequence

from .schemas import ExtractedSentence

SENTENCE_MARKER = re.compile(r"SENTENCE_\d+\s*:")


def split_sentences(raw: str) -> List[str]:
    """Return the trimmed, non-empty text following each ``SENTENCE_<n>:`` label."""
    parts = SENTENCE_MARKER.split(raw or "")
    # parts[0] is whatever precedes the first label
    return [part.strip() for part in parts[1:] if part.strip()]


def strip_punctuation(text: str) -> str:
    return "".join(
        ch for ch in text
        if not ch.isspace() and not unicodedata.category(ch).startswith("P")
    )


def match_vocabulary(text: str, allowed_pool: Sequence[str]) -> List[str]:
    """Greedy longest-first scan of ``text`` against ``allowed_pool``.

    Returns the matched tokens in first-seen order without duplicates.
    Characters that start no pool token are skipped.
    """
    stream = strip_punctuation(text)
    tokens = sorted({t for t in allowed_pool if t}, key=len, reverse=True)
    used: List[str] = []
    seen = set()
    pos = 0
    while pos < len(stream):
        for token in tokens:
            if stream.startswith(token, pos):
                if token not in seen:
                    seen.add(token)
                    used.append(token)
                pos += len(token)
                break
        else:
            pos += 1
    return used


def extract_sentences(raw: str, allowed_pool: Sequence[str]) -> List[ExtractedSentence]:
    return [
        ExtractedSentence(chinese_text=candidate, used_characters=match_vocabulary(candidate, allowed_pool))
        for candidate in split_sentences(raw)
    ]
