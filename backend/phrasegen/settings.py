from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

DEFAULT_GRAMMAR_PARTICLES: List[str] = ["是", "吗", "的", "呢", "也", "这", "去", "有"]


class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_AI_API_KEY"))
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-flash-lite-latest", validation_alias="GEMINI_MODEL")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")
	# A 30-sentence batch takes noticeably longer than a single prompt
	gemini_timeout_seconds: float = Field(default=60.0, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Offline development: build sentences locally instead of calling Gemini
	use_mock_ai: bool = Field(default=False, validation_alias="USE_MOCK_AI")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Scheduler
	scheduler_enabled: bool = Field(default=True, validation_alias="SCHEDULER_ENABLED")
	generation_interval_hours: int = Field(default=4, ge=1, le=24, validation_alias="GENERATION_INTERVAL_HOURS")

	# Generation pipeline
	max_vocab_groups: int = Field(default=5, ge=1, validation_alias="MAX_VOCAB_GROUPS")
	batch_size: int = Field(default=300, ge=1, le=300, validation_alias="GENERATION_BATCH_SIZE")
	batches_per_group: int = Field(default=4, ge=1, validation_alias="GENERATION_BATCHES_PER_GROUP")
	sentences_per_batch: int = Field(default=30, ge=1, le=50, validation_alias="GENERATION_SENTENCES_PER_BATCH")
	max_attempts: int = Field(default=3, ge=1, validation_alias="GENERATION_MAX_ATTEMPTS")
	backoff_base_seconds: float = Field(default=1.0, ge=0, validation_alias="GENERATION_BACKOFF_BASE_SECONDS")
	# Grammatical glue offered to the model regardless of which words were sampled (JSON list in env)
	grammar_particles: List[str] = Field(default_factory=lambda: list(DEFAULT_GRAMMAR_PARTICLES), validation_alias="GRAMMAR_PARTICLES")

	# Logging
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	@property
	def mock_oracle_enabled(self) -> bool:
		return self.use_mock_ai or not self.gemini_api_key

settings = Settings()
