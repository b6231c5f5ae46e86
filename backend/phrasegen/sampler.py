from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .errors import NoVocabularyError
from .schemas import VocabGroup
from .vocabulary_store import VocabularyStore

DEFAULT_BATCH_SIZE = 300
# Upper bound on the word list enumerated in one prompt
MAX_BATCH_SIZE = 300


def draw(pool: Sequence[str], size: int, rng: random.Random) -> List[str]:
    # Small pools are topped up by sampling with replacement
    if len(pool) < size:
        return rng.choices(pool, k=size)
    return rng.sample(list(pool), size)


class CharacterSampler:
    """Draws fixed-size random batches of vocabulary for a vocab group."""

    def __init__(self, store: VocabularyStore, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.rng = rng or random.Random()

    def sample(self, group: VocabGroup, batch_size: int = DEFAULT_BATCH_SIZE) -> List[str]:
        pool = self.store.characters_in_range(group.chapter_start, group.chapter_endpoint)
        if not pool:
            raise NoVocabularyError(group.id, group.chapter_start, group.chapter_endpoint)
        return draw(pool, batch_size, self.rng)
