from __future__ import annotations
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from ..scheduler import GenerationScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/phrases", tags=["phrases"])


class VocabGroupOut(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	id: int
	chapter_start: int = Field(alias="chapterStart")
	chapter_end: int = Field(alias="chapterEnd")
	sentence_count: int = Field(alias="sentenceCount")


class GenerateResponse(BaseModel):
	success: bool
	started: bool
	message: str


class StatusResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	running: bool
	scheduler_active: bool = Field(alias="schedulerActive")
	next_run_at: datetime = Field(alias="nextRunAt")


def _scheduler(request: Request) -> GenerationScheduler:
	scheduler = getattr(request.app.state, "scheduler", None)
	if scheduler is None:
		raise HTTPException(status_code=503, detail="Generation scheduler is not initialised")
	return scheduler


@router.post("/generate", response_model=GenerateResponse)
async def generate(request: Request):
	scheduler = _scheduler(request)
	if scheduler.is_running():
		raise HTTPException(status_code=409, detail="Sentence generation already in progress")
	try:
		started = await scheduler.trigger_generation()
	except Exception as e:
		raise HTTPException(status_code=500, detail=str(e))
	if not started:
		raise HTTPException(status_code=409, detail="Sentence generation already in progress")
	return GenerateResponse(success=True, started=True, message="Sentence generation completed")


@router.get("/vocab-groups", response_model=List[VocabGroupOut], response_model_by_alias=True)
def vocab_groups(request: Request):
	scheduler = _scheduler(request)
	orchestrator = scheduler.orchestrator
	try:
		groups = orchestrator.selector.compute_groups()
		counts = orchestrator.repository.counts_by_group()
	except Exception as e:
		logger.exception("Failed to load vocab groups")
		raise HTTPException(status_code=500, detail=f"Failed to get vocab groups: {e}")
	return [
		VocabGroupOut(
			id=g.id,
			chapter_start=g.chapter_start,
			chapter_end=g.chapter_endpoint,
			sentence_count=counts.get(g.id, 0),
		)
		for g in groups
	]


@router.get("/status", response_model=StatusResponse, response_model_by_alias=True)
def status(request: Request):
	scheduler = _scheduler(request)
	return StatusResponse(
		running=scheduler.is_running(),
		scheduler_active=scheduler.is_scheduler_active(),
		next_run_at=scheduler.next_run_at(),
	)
