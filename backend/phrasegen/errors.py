"""Exceptions raised by the sentence generation pipeline."""

from __future__ import annotations

from typing import Optional


class GenerationError(Exception):
    """Base class for pipeline failures."""


class NoVocabularyError(GenerationError):
    """Raised when a vocab group's chapter range holds no vocabulary."""

    def __init__(self, vocab_group_id: int, chapter_start: int, chapter_endpoint: int) -> None:
        self.vocab_group_id = vocab_group_id
        self.chapter_start = chapter_start
        self.chapter_endpoint = chapter_endpoint
        super().__init__(
            f"No vocabulary found for vocab group {vocab_group_id} "
            f"(chapters {chapter_start}-{chapter_endpoint})"
        )


class OracleError(GenerationError):
    """Raised when the text generation service fails or returns unusable output."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class PersistenceError(GenerationError):
    """Raised after a sentence replacement transaction has been rolled back."""


class RetryExhaustedError(GenerationError):
    """Raised when every attempt of a retried operation has failed."""

    def __init__(self, description: str, attempts: int, last_error: BaseException) -> None:
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed to {description} after {attempts} attempts. Last error: {last_error}"
        )
