from __future__ import annotations

from typing import Iterable, List

from .schemas import VocabGroup
from .vocabulary_store import VocabularyStore

MAX_VOCAB_GROUPS = 5


def groups_from_chapters(chapters: Iterable[int], max_groups: int = MAX_VOCAB_GROUPS) -> List[VocabGroup]:
    """Build cumulative windows ending at the ``max_groups`` most recent chapters.

    Duplicates collapse; the result is ascending by endpoint with ids 1..N.
    """
    recent = sorted(set(int(c) for c in chapters), reverse=True)[:max_groups]
    recent.reverse()
    return [
        VocabGroup(id=rank, chapter_start=1, chapter_endpoint=chapter)
        for rank, chapter in enumerate(recent, start=1)
    ]


class VocabGroupSelector:
    def __init__(self, store: VocabularyStore, max_groups: int = MAX_VOCAB_GROUPS) -> None:
        self.store = store
        self.max_groups = max_groups

    def compute_groups(self) -> List[VocabGroup]:
        return groups_from_chapters(self.store.list_distinct_chapters(limit=self.max_groups), self.max_groups)
