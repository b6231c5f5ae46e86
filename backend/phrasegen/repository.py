from __future__ import annotations
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from .errors import PersistenceError
from .models import PreGeneratedSentence
from .schemas import GeneratedSentence

logger = logging.getLogger(__name__)


class SentenceRepository:
	def __init__(self, session_factory: Callable[[], Session]) -> None:
		self._session_factory = session_factory

	def replace(self, vocab_group_id: int, sentences: Sequence[GeneratedSentence]) -> int:
		"""Swap a group's cached sentences for ``sentences`` in one transaction.

		Readers see either the old set or the new one. On failure the delete is
		rolled back and :class:`PersistenceError` is raised.
		"""
		now = datetime.now(timezone.utc).replace(tzinfo=None)
		rows = [
			PreGeneratedSentence(
				id=str(uuid.uuid4()),
				vocab_group_id=vocab_group_id,
				chinese_text=s.chinese_text,
				pinyin=s.pinyin,
				used_characters=json.dumps(list(s.used_characters), ensure_ascii=False),
				generation_timestamp=now,
			)
			for s in sentences
		]
		db = self._session_factory()
		try:
			removed = db.execute(delete(PreGeneratedSentence).where(PreGeneratedSentence.vocab_group_id == vocab_group_id)).rowcount
			db.add_all(rows)
			db.flush()
			db.commit()
		except Exception as e:
			db.rollback()
			raise PersistenceError(f"Failed to replace sentences for vocab group {vocab_group_id}: {e}") from e
		finally:
			db.close()
		logger.info(
			"Replaced %s sentences with %d for vocab group %d",
			removed if removed is not None and removed >= 0 else "?", len(rows), vocab_group_id,
		)
		return len(rows)

	def counts_by_group(self) -> Dict[int, int]:
		stmt = select(PreGeneratedSentence.vocab_group_id, func.count()).group_by(PreGeneratedSentence.vocab_group_id)
		db = self._session_factory()
		try:
			return {int(group_id): int(count) for group_id, count in db.execute(stmt).all()}
		finally:
			db.close()
