from __future__ import annotations
import httpx
from typing import Any, Dict, Optional
from .settings import Settings


class ProviderError(RuntimeError):
	"""A single model attempt failed (transport, HTTP status or response shape)."""

	def __init__(self, model: str, message: str) -> None:
		super().__init__(f"{model}: {message}")
		self.model = model


class GeminiClient:
	def __init__(
		self,
		api_key: str,
		*,
		base_url: str,
		timeout: float = 30.0,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		if not api_key:
			raise ValueError("GEMINI_API_KEY is not configured")
		self.api_key = api_key
		self.base_url = base_url.rstrip("/")
		# The timeout bounds each model attempt individually
		self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

	@classmethod
	def from_settings(
		cls,
		api_key: str,
		settings: Settings,
		*,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> "GeminiClient":
		return cls(
			api_key,
			base_url=settings.gemini_base_url,
			timeout=settings.gemini_timeout_seconds,
			transport=transport,
		)

	def _url(self, model: str) -> str:
		return f"{self.base_url}/{model}:generateContent"

	async def generate(self, prompt: str, *, model: str) -> str:
		payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
		try:
			r = await self._client.post(self._url(model), params={"key": self.api_key}, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise ProviderError(model, f"HTTP {http_err.response.status_code}: {http_err.response.text}") from http_err
		except httpx.RequestError as net_err:
			raise ProviderError(model, f"request failed: {net_err!r}") from net_err
		try:
			data = r.json()
			text = data["candidates"][0]["content"]["parts"][0]["text"]
		except Exception as parse_err:
			raise ProviderError(model, f"Unexpected Gemini response: {r.text}") from parse_err
		if not isinstance(text, str):
			raise ProviderError(model, "Gemini response text is not a string")
		return text

	async def aclose(self) -> None:
		await self._client.aclose()
