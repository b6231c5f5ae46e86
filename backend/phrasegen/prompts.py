from __future__ import annotations

from typing import Sequence

MAX_SENTENCES_PER_REQUEST = 50


def enumerate_pool(allowed_pool: Sequence[str]) -> str:
    return "\n".join(f"{idx}. {token}" for idx, token in enumerate(allowed_pool, start=1))


def build_sentence_prompt(allowed_pool: Sequence[str], count: int) -> str:
    if not allowed_pool:
        raise ValueError("allowed_pool cannot be empty")
    if count <= 0 or count > MAX_SENTENCES_PER_REQUEST:
        raise ValueError(f"count must be between 1 and {MAX_SENTENCES_PER_REQUEST}")
    listing = enumerate_pool(allowed_pool)
    return f"""
You are a Chinese teacher writing beginner reading practice.

ALLOWED WORDS (use ONLY these, exactly as written):
{listing}

Rules:
- Write EXACTLY {count} short sentences, each at most 40 characters excluding punctuation.
- Every sentence must be complete, grammatical and meaningful. Never output a bare list of words.
- Do not use any character or word that is not in the list above, including measure words.
- Do not invent new words by gluing listed characters together.
- Vary the sentence patterns and the words you use across sentences.
- Punctuation is allowed.

Output format, one sentence per line, nothing else:
SENTENCE_1: <sentence>
SENTENCE_2: <sentence>
...
SENTENCE_{count}: <sentence>

Example with the list 1. 我 2. 是 3. 学生 4. 他 5. 很 6. 好:
SENTENCE_1: 我是学生。
SENTENCE_2: 他很好。
""".strip()
