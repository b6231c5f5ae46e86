from __future__ import annotations

import asyncio
import uuid
from typing import Dict, Iterable, List, Sequence

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from phrasegen.db import Base
from phrasegen.errors import OracleError
from phrasegen.models import VocabularyEntry
from phrasegen.oracle import OracleResult
from phrasegen.vocabulary_store import VocabularyStore


@pytest.fixture
def session_factory():
    """Session factory over a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    yield factory
    engine.dispose()


def seed_vocabulary(session_factory, chapters: Dict[int, Iterable[str]], username: str = "alice") -> None:
    db = session_factory()
    try:
        for chapter, words in chapters.items():
            for word in words:
                db.add(
                    VocabularyEntry(
                        id=str(uuid.uuid4()),
                        username=username,
                        chinese_character=word,
                        pinyin="",
                        chapter=chapter,
                    )
                )
        db.commit()
    finally:
        db.close()


@pytest.fixture
def store(session_factory) -> VocabularyStore:
    return VocabularyStore(session_factory)


class ScriptedOracle:
    """Replays canned outcomes; an ``OracleError`` entry becomes a failed result."""

    def __init__(self, outcomes: Sequence[object], repeat_last: bool = True) -> None:
        self.outcomes = list(outcomes)
        self.repeat_last = repeat_last
        self.calls: List[tuple] = []

    async def generate_sentences(self, allowed_characters, count) -> OracleResult:
        self.calls.append((list(allowed_characters), count))
        index = len(self.calls) - 1
        if index >= len(self.outcomes):
            index = len(self.outcomes) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, OracleError):
            return OracleResult.failure(outcome)
        if isinstance(outcome, Exception):
            raise outcome
        return OracleResult.success(str(outcome))

    async def aclose(self) -> None:
        return None


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


def run(coro):
    return asyncio.run(coro)
