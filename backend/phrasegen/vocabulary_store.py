from __future__ import annotations

from typing import Callable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import VocabularyEntry


class VocabularyStore:
	"""Read-only view of the vocabulary table used by the generation pipeline."""

	def __init__(self, session_factory: Callable[[], Session]) -> None:
		self._session_factory = session_factory

	def list_distinct_chapters(self, limit: int | None = None) -> List[int]:
		# Most recent chapter first
		stmt = select(VocabularyEntry.chapter).distinct().order_by(VocabularyEntry.chapter.desc())
		if limit is not None:
			stmt = stmt.limit(limit)
		db = self._session_factory()
		try:
			return [int(chapter) for chapter in db.execute(stmt).scalars().all()]
		finally:
			db.close()

	def characters_in_range(self, chapter_start: int, chapter_end: int) -> List[str]:
		stmt = select(VocabularyEntry.chinese_character).where(
			VocabularyEntry.chapter >= chapter_start,
			VocabularyEntry.chapter <= chapter_end,
		)
		db = self._session_factory()
		try:
			return [str(c) for c in db.execute(stmt).scalars().all() if c]
		finally:
			db.close()
