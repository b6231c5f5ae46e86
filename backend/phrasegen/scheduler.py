from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .orchestrator import GenerationOrchestrator

logger = logging.getLogger(__name__)


def next_run_at(now: datetime, interval_hours: int = 4) -> datetime:
	"""Next anchor strictly after ``now``; anchors fall every ``interval_hours`` from 00:00 UTC."""
	if interval_hours < 1 or interval_hours > 24:
		raise ValueError("interval_hours must be between 1 and 24")
	now = now.astimezone(timezone.utc) if now.tzinfo else now.replace(tzinfo=timezone.utc)
	midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
	candidate = midnight
	while candidate <= now:
		candidate += timedelta(hours=interval_hours)
		# Anchors restart at midnight when 24 is not a multiple of the interval
		if candidate.date() != midnight.date():
			candidate = midnight + timedelta(days=1)
			break
	return candidate


class GenerationScheduler:
	def __init__(
		self,
		orchestrator: GenerationOrchestrator,
		*,
		interval_hours: int = 4,
		clock: Optional[Callable[[], datetime]] = None,
	) -> None:
		self.orchestrator = orchestrator
		self.interval_hours = interval_hours
		self._clock = clock or (lambda: datetime.now(timezone.utc))
		self._task: Optional[asyncio.Task] = None
		self._lock = asyncio.Lock()

	def start(self) -> None:
		if self._task is not None:
			logger.info("Scheduler already running")
			return
		self._task = asyncio.create_task(self._timer_loop())
		logger.info("Scheduler started - next run at %s", self.next_run_at().isoformat())

	def stop(self) -> None:
		if self._task is None:
			return
		self._task.cancel()
		self._task = None
		logger.info("Scheduler stopped")

	def next_run_at(self) -> datetime:
		return next_run_at(self._clock(), self.interval_hours)

	async def _timer_loop(self) -> None:
		anchor = self.next_run_at()
		while True:
			delay = (anchor - self._clock()).total_seconds()
			await asyncio.sleep(max(delay, 0))
			logger.info("Scheduled generation triggered")
			try:
				await self.trigger_generation()
			except Exception:
				# Already logged by trigger_generation; keep the timer alive for the next slot
				pass
			# Each anchor fires at most once, even if the sleep wakes early
			anchor = next_run_at(max(anchor, self._clock()), self.interval_hours)

	async def trigger_generation(self) -> bool:
		"""Run one generation cycle unless one is already in flight.

		Returns ``False`` when skipped, ``True`` when a cycle ran. Errors from
		the cycle are logged and re-raised.
		"""
		if self._lock.locked():
			logger.info("Generation already in progress, skipping")
			return False
		async with self._lock:
			started = time.monotonic()
			logger.info("Starting sentence generation...")
			try:
				await self.orchestrator.run_all()
			except Exception:
				logger.exception("Generation failed after %.2fs", time.monotonic() - started)
				raise
			logger.info("Generation completed successfully in %.2fs", time.monotonic() - started)
			return True

	def is_running(self) -> bool:
		return self._lock.locked()

	def is_scheduler_active(self) -> bool:
		return self._task is not None
