from typing import Callable, Optional

from fastapi import FastAPI
from sqlalchemy.orm import Session

from .db import Base, engine, SessionLocal
from .logging_setup import setup_logging
from .oracle import SentenceOracle, build_oracle
from .orchestrator import GenerationOrchestrator
from .repository import SentenceRepository
from .sampler import CharacterSampler
from .scheduler import GenerationScheduler
from .settings import Settings, settings
from .vocab_groups import VocabGroupSelector
from .vocabulary_store import VocabularyStore
from .routers import health
from .routers import phrases

app = FastAPI(title="Sentence Generation API")
app.include_router(health.router)
app.include_router(phrases.router)


def build_scheduler(
	config: Settings = settings,
	session_factory: Callable[[], Session] = SessionLocal,
	oracle: Optional[SentenceOracle] = None,
) -> GenerationScheduler:
	store = VocabularyStore(session_factory)
	orchestrator = GenerationOrchestrator.from_settings(
		config,
		selector=VocabGroupSelector(store, config.max_vocab_groups),
		sampler=CharacterSampler(store),
		oracle=oracle or build_oracle(config),
		repository=SentenceRepository(session_factory),
	)
	return GenerationScheduler(orchestrator, interval_hours=config.generation_interval_hours)


@app.get("/info")
def root():
	return {
		"status": "ok",
		"gemini_configured": bool(settings.gemini_api_key),
		"mock_ai": settings.mock_oracle_enabled,
	}


@app.on_event("startup")
async def startup_event():
	setup_logging(settings.log_level.upper(), settings.log_file)
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	app.state.scheduler = build_scheduler()
	if settings.scheduler_enabled:
		app.state.scheduler.start()


@app.on_event("shutdown")
async def shutdown_event():
	scheduler: Optional[GenerationScheduler] = getattr(app.state, "scheduler", None)
	if scheduler is None:
		return
	scheduler.stop()
	await scheduler.orchestrator.oracle.aclose()
