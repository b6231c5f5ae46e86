"""Pydantic models passed between pipeline stages."""

from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field


class VocabGroup(BaseModel):
    """Cumulative vocabulary window: chapters 1 through ``chapter_endpoint``."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    chapter_start: int = 1
    chapter_endpoint: int


class GenerationBatch(BaseModel):
    """One sampled batch of vocabulary handed to the oracle."""

    vocab_group_id: int
    characters: List[str]
    required_sentence_count: int = 30
    grammar_particles: List[str] = Field(default_factory=list)

    @property
    def allowed_pool(self) -> List[str]:
        return merge_unique(self.characters, self.grammar_particles)


class ExtractedSentence(BaseModel):
    chinese_text: str
    used_characters: List[str] = Field(default_factory=list)


class GeneratedSentence(BaseModel):
    """A validated sentence ready to be persisted."""

    chinese_text: str
    pinyin: str
    used_characters: List[str] = Field(default_factory=list)


def merge_unique(*groups: Iterable[str]) -> List[str]:
    """Concatenate token lists, keeping only the first occurrence of each token."""
    seen = set()
    merged: List[str] = []
    for group in groups:
        for token in group:
            if token and token not in seen:
                seen.add(token)
                merged.append(token)
    return merged
