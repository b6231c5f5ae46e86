from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .errors import OracleError
from .settings import settings

logger = logging.getLogger(__name__)

class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ValueError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		self.provider = settings.gemini_provider
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		self._client = httpx.AsyncClient(timeout=timeout or settings.gemini_timeout_seconds, transport=transport)
		self.last_usage: Dict[str, Any] = {}

	async def generate(self, prompt: str) -> str:
		payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		# httpx errors propagate; the caller decides how to classify them
		r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
		r.raise_for_status()
		try:
			data = r.json()
			text = data["candidates"][0]["content"]["parts"][0]["text"]
		except (ValueError, KeyError, IndexError, TypeError):
			raise OracleError(f"Unexpected Gemini response: {r.text[:500]}")
		self.last_usage = data.get("usageMetadata") or {}
		if self.last_usage:
			logger.debug(
				"Gemini token usage: prompt=%s completion=%s total=%s",
				self.last_usage.get("promptTokenCount", "N/A"),
				self.last_usage.get("candidatesTokenCount", "N/A"),
				self.last_usage.get("totalTokenCount", "N/A"),
			)
		return str(text)

	async def aclose(self) -> None:
		await self._client.aclose()
