"""Drives sentence generation for every vocab group.

A group's attempt walks SAMPLING -> INVOKING -> VALIDATING -> PERSISTING and
ends in DONE. Any failure on the way sends the next attempt back to SAMPLING
with freshly drawn batches; the attempt bound and backoff live in
:class:`~phrasegen.retry.RetryPolicy`.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Dict, List, Optional

from .errors import GenerationError, OracleError
from .extractor import extract_sentences
from .oracle import SentenceOracle
from .repository import SentenceRepository
from .retry import RetryPolicy
from .romanize import to_pinyin
from .sampler import MAX_BATCH_SIZE, CharacterSampler
from .schemas import GeneratedSentence, GenerationBatch, VocabGroup
from .settings import DEFAULT_GRAMMAR_PARTICLES, Settings
from .vocab_groups import VocabGroupSelector

logger = logging.getLogger(__name__)


class GenerationStage(str, enum.Enum):
    IDLE = "idle"
    SAMPLING = "sampling"
    INVOKING = "invoking"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    DONE = "done"


class GenerationOrchestrator:
    def __init__(
        self,
        selector: VocabGroupSelector,
        sampler: CharacterSampler,
        oracle: SentenceOracle,
        repository: SentenceRepository,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        batch_size: int = 300,
        batches_per_group: int = 4,
        sentences_per_batch: int = 30,
        grammar_particles: Optional[List[str]] = None,
    ) -> None:
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
        self.selector = selector
        self.sampler = sampler
        self.oracle = oracle
        self.repository = repository
        self.retry_policy = retry_policy or RetryPolicy()
        self.batch_size = batch_size
        self.batches_per_group = batches_per_group
        self.sentences_per_batch = sentences_per_batch
        self.grammar_particles = list(DEFAULT_GRAMMAR_PARTICLES if grammar_particles is None else grammar_particles)
        self.stage = GenerationStage.IDLE
        self.current_group_id: Optional[int] = None

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        *,
        selector: VocabGroupSelector,
        sampler: CharacterSampler,
        oracle: SentenceOracle,
        repository: SentenceRepository,
    ) -> "GenerationOrchestrator":
        return cls(
            selector,
            sampler,
            oracle,
            repository,
            retry_policy=RetryPolicy(config.max_attempts, config.backoff_base_seconds),
            batch_size=config.batch_size,
            batches_per_group=config.batches_per_group,
            sentences_per_batch=config.sentences_per_batch,
            grammar_particles=config.grammar_particles,
        )

    def _enter(self, stage: GenerationStage) -> None:
        logger.debug("Vocab group %s: %s -> %s", self.current_group_id, self.stage.value, stage.value)
        self.stage = stage

    def draw_batches(self, group: VocabGroup) -> List[GenerationBatch]:
        batches = []
        for _ in range(self.batches_per_group):
            characters = self.sampler.sample(group, self.batch_size)
            if len(characters) != self.batch_size:
                raise GenerationError(f"Expected exactly {self.batch_size} characters, got {len(characters)}")
            batches.append(
                GenerationBatch(
                    vocab_group_id=group.id,
                    characters=characters,
                    required_sentence_count=self.sentences_per_batch,
                    grammar_particles=self.grammar_particles,
                )
            )
        return batches

    async def generate_batch(self, batch: GenerationBatch) -> List[GeneratedSentence]:
        pool = batch.allowed_pool
        self._enter(GenerationStage.INVOKING)
        result = await self.oracle.generate_sentences(pool, batch.required_sentence_count)
        raw = result.unwrap()
        self._enter(GenerationStage.VALIDATING)
        extracted = extract_sentences(raw, pool)
        if not extracted:
            # Unlabelled output or a refusal; persisting nothing would wipe the cached group
            raise OracleError(f"No sentences were generated for vocab group {batch.vocab_group_id}")
        if len(extracted) < batch.required_sentence_count:
            logger.warning(
                "Vocab group %d: got %d sentences, expected %d",
                batch.vocab_group_id, len(extracted), batch.required_sentence_count,
            )
        return [
            GeneratedSentence(
                chinese_text=s.chinese_text,
                pinyin=to_pinyin(s.chinese_text),
                used_characters=s.used_characters,
            )
            for s in extracted
        ]

    async def _attempt_group(self, group: VocabGroup) -> List[GeneratedSentence]:
        self._enter(GenerationStage.SAMPLING)
        batches = self.draw_batches(group)
        sentences: List[GeneratedSentence] = []
        for index, batch in enumerate(batches, start=1):
            produced = await self.generate_batch(batch)
            logger.info("Vocab group %d batch %d/%d: %d sentences", group.id, index, len(batches), len(produced))
            sentences.extend(produced)
        self._enter(GenerationStage.PERSISTING)
        self.repository.replace(group.id, sentences)
        self._enter(GenerationStage.DONE)
        return sentences

    async def run_group(self, group: VocabGroup) -> List[GeneratedSentence]:
        self.current_group_id = group.id
        logger.info(
            "Generating sentences for vocab group %d (chapters %d-%d)",
            group.id, group.chapter_start, group.chapter_endpoint,
        )
        try:
            return await self.retry_policy.run(
                lambda: self._attempt_group(group),
                description=f"generate sentences for vocab group {group.id}",
            )
        finally:
            if self.stage is not GenerationStage.DONE:
                self.stage = GenerationStage.IDLE

    async def run_all(self) -> Dict[int, int]:
        """Regenerate every vocab group in turn; the first exhausted group aborts the cycle."""
        started = time.monotonic()
        groups = self.selector.compute_groups()
        if not groups:
            logger.warning("No vocab groups found - skipping generation")
            return {}
        logger.info("Found %d vocab groups to process", len(groups))
        summary: Dict[int, int] = {}
        for group in groups:
            sentences = await self.run_group(group)
            summary[group.id] = len(sentences)
        logger.info(
            "Generated %d sentences across %d vocab groups in %.2fs",
            sum(summary.values()), len(summary), time.monotonic() - started,
        )
        self.stage = GenerationStage.IDLE
        self.current_group_id = None
        return summary
