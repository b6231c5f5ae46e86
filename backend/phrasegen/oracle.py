"""Text generation backends that write sentences from a constrained word pool."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import httpx

from .errors import OracleError
from .gemini_client import GeminiClient
from .prompts import MAX_SENTENCES_PER_REQUEST, build_sentence_prompt
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OracleResult:
    """Either the raw model text or the error that prevented getting it."""

    text: Optional[str] = None
    error: Optional[OracleError] = None

    @classmethod
    def success(cls, text: str) -> "OracleResult":
        return cls(text=text)

    @classmethod
    def failure(cls, error: OracleError) -> "OracleResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.text or ""


class SentenceOracle(Protocol):
    async def generate_sentences(self, allowed_characters: Sequence[str], count: int) -> OracleResult:
        ...

    async def aclose(self) -> None:
        ...


class GeminiSentenceOracle:
    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def generate_sentences(self, allowed_characters: Sequence[str], count: int) -> OracleResult:
        prompt = build_sentence_prompt(allowed_characters, count)
        logger.info(
            "Requesting %d sentences from %s (%d allowed tokens, prompt %d chars)",
            count, self.client.model, len(allowed_characters), len(prompt),
        )
        started = time.monotonic()
        try:
            text = await self.client.generate(prompt)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            return OracleResult.failure(OracleError(f"Gemini returned HTTP {status}: {e.response.text[:300]}", status_code=status))
        except httpx.RequestError as e:
            return OracleResult.failure(OracleError(f"Gemini request failed: {e!r}"))
        except OracleError as e:
            return OracleResult.failure(e)
        logger.info("Gemini responded in %.2fs", time.monotonic() - started)
        if not text.strip():
            return OracleResult.failure(OracleError("Gemini returned an empty response"))
        return OracleResult.success(text.strip())

    async def aclose(self) -> None:
        await self.client.aclose()


class MockSentenceOracle:
    """Offline stand-in that strings pool tokens into labelled sentences."""

    async def generate_sentences(self, allowed_characters: Sequence[str], count: int) -> OracleResult:
        if not allowed_characters:
            raise ValueError("allowed_characters cannot be empty")
        if count <= 0 or count > MAX_SENTENCES_PER_REQUEST:
            raise ValueError(f"count must be between 1 and {MAX_SENTENCES_PER_REQUEST}")
        pool = list(dict.fromkeys(allowed_characters))
        lines = []
        for i in range(count):
            start = (i * 5) % len(pool)
            lines.append(f"SENTENCE_{i + 1}: {''.join(pool[start:start + 10])}。")
        return OracleResult.success("\n".join(lines))

    async def aclose(self) -> None:
        return None


def build_oracle(config: Settings) -> SentenceOracle:
    if config.mock_oracle_enabled:
        logger.warning("Using mock sentence generator (USE_MOCK_AI set or no Gemini API key)")
        return MockSentenceOracle()
    return GeminiSentenceOracle(GeminiClient(api_key=config.gemini_api_key, model=config.gemini_model, timeout=config.gemini_timeout_seconds))
