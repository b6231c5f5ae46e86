from __future__ import annotations

import pytest

from phrasegen.prompts import build_sentence_prompt, enumerate_pool
from phrasegen.schemas import GenerationBatch, merge_unique


def test_pool_is_enumerated_from_one() -> None:
    assert enumerate_pool(["你", "好", "学生"]) == "1. 你\n2. 好\n3. 学生"


def test_prompt_lists_pool_and_requested_labels() -> None:
    prompt = build_sentence_prompt(["我", "是", "学生"], 30)
    assert "3. 学生" in prompt
    assert "EXACTLY 30" in prompt
    assert "SENTENCE_1:" in prompt
    assert "SENTENCE_30:" in prompt


@pytest.mark.parametrize("count", [0, 51, -3])
def test_prompt_rejects_bad_counts(count) -> None:
    with pytest.raises(ValueError):
        build_sentence_prompt(["我"], count)


def test_prompt_rejects_empty_pool() -> None:
    with pytest.raises(ValueError):
        build_sentence_prompt([], 5)


def test_batch_pool_adds_grammar_particles_once() -> None:
    batch = GenerationBatch(
        vocab_group_id=1,
        characters=["我", "是", "我", "学生"],
        grammar_particles=["是", "吗", "的"],
    )
    assert batch.allowed_pool == ["我", "是", "学生", "吗", "的"]


def test_merge_unique_drops_empty_tokens() -> None:
    assert merge_unique(["", "你"], ["你", "好", ""]) == ["你", "好"]
