from __future__ import annotations

import json

import pytest
from sqlalchemy import select

from phrasegen.errors import PersistenceError
from phrasegen.models import PreGeneratedSentence
from phrasegen.repository import SentenceRepository
from phrasegen.schemas import GeneratedSentence


def _sentence(text: str, used=("你",)) -> GeneratedSentence:
    return GeneratedSentence(chinese_text=text, pinyin="nǐ", used_characters=list(used))


def _rows(session_factory, group_id: int):
    db = session_factory()
    try:
        stmt = select(PreGeneratedSentence).where(PreGeneratedSentence.vocab_group_id == group_id)
        return db.execute(stmt).scalars().all()
    finally:
        db.close()


def test_replace_swaps_the_whole_group(session_factory) -> None:
    repo = SentenceRepository(session_factory)
    assert repo.replace(1, [_sentence("旧一"), _sentence("旧二")]) == 2
    assert repo.replace(2, [_sentence("别的")]) == 1

    assert repo.replace(1, [_sentence("新", used=["你", "好"])]) == 1

    rows = _rows(session_factory, 1)
    assert [r.chinese_text for r in rows] == ["新"]
    assert json.loads(rows[0].used_characters) == ["你", "好"]
    assert len(rows[0].id) == 36
    assert rows[0].generation_timestamp is not None
    assert [r.chinese_text for r in _rows(session_factory, 2)] == ["别的"]


def test_replace_with_no_sentences_empties_the_group(session_factory) -> None:
    repo = SentenceRepository(session_factory)
    repo.replace(3, [_sentence("一"), _sentence("二")])
    assert repo.replace(3, []) == 0
    assert _rows(session_factory, 3) == []


def test_failed_insert_rolls_back_the_delete(session_factory) -> None:
    repo = SentenceRepository(session_factory)
    repo.replace(1, [_sentence("旧一"), _sentence("旧二")])

    broken = GeneratedSentence.model_construct(chinese_text=None, pinyin="x", used_characters=[])
    with pytest.raises(PersistenceError) as excinfo:
        repo.replace(1, [_sentence("新"), broken])

    assert "vocab group 1" in str(excinfo.value)
    assert excinfo.value.__cause__ is not None
    assert sorted(r.chinese_text for r in _rows(session_factory, 1)) == ["旧一", "旧二"]


def test_counts_by_group(session_factory) -> None:
    repo = SentenceRepository(session_factory)
    repo.replace(1, [_sentence("一")])
    repo.replace(4, [_sentence("二"), _sentence("三")])
    assert repo.counts_by_group() == {1: 1, 4: 2}
