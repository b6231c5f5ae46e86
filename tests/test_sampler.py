from __future__ import annotations

import random

import pytest
from conftest import seed_vocabulary

from phrasegen.errors import NoVocabularyError
from phrasegen.sampler import CharacterSampler
from phrasegen.schemas import VocabGroup


def test_small_pool_is_filled_with_replacement(session_factory, store) -> None:
    seed_vocabulary(session_factory, {1: ["你", "好"], 2: ["我", "是"]})
    sampler = CharacterSampler(store, rng=random.Random(7))
    batch = sampler.sample(VocabGroup(id=1, chapter_endpoint=2), 300)
    assert len(batch) == 300
    assert set(batch) <= {"你", "好", "我", "是"}


def test_only_chapters_up_to_endpoint_are_sampled(session_factory, store) -> None:
    seed_vocabulary(session_factory, {1: ["一", "二"], 2: ["三"], 3: ["四", "五"]})
    sampler = CharacterSampler(store, rng=random.Random(1))
    batch = sampler.sample(VocabGroup(id=1, chapter_endpoint=2), 50)
    assert len(batch) == 50
    assert set(batch) <= {"一", "二", "三"}


def test_large_pool_is_sampled_without_replacement(session_factory, store) -> None:
    words = [chr(0x4E00 + i) for i in range(400)]
    seed_vocabulary(session_factory, {1: words})
    sampler = CharacterSampler(store, rng=random.Random(3))
    batch = sampler.sample(VocabGroup(id=1, chapter_endpoint=1), 300)
    assert len(batch) == 300
    assert len(set(batch)) == 300


def test_successive_samples_use_fresh_randomness(session_factory, store) -> None:
    words = [chr(0x4E00 + i) for i in range(400)]
    seed_vocabulary(session_factory, {1: words})
    sampler = CharacterSampler(store, rng=random.Random(11))
    group = VocabGroup(id=1, chapter_endpoint=1)
    assert sampler.sample(group, 300) != sampler.sample(group, 300)


def test_empty_pool_raises(session_factory, store) -> None:
    seed_vocabulary(session_factory, {4: ["你"]})
    sampler = CharacterSampler(store)
    with pytest.raises(NoVocabularyError) as excinfo:
        sampler.sample(VocabGroup(id=2, chapter_endpoint=3))
    assert "vocab group 2" in str(excinfo.value)
    assert "chapters 1-3" in str(excinfo.value)
