"""Fail-soft orchestration of the AI endpoints.

A missing key or a provider outage never turns into an error status: callers
always receive text, either from the model or a fixed fallback message.
"""
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

import httpx

from .dispatcher import dispatch
from .gemini_client import GeminiClient
from .prompt_builder import build_prompt
from .settings import Settings

logger = logging.getLogger(__name__)

UNAVAILABLE_PREFIX = (
	"AI features are temporarily unavailable. Meanwhile, here's a short helpful response based on your input:\n\n"
)
PROVIDER_APOLOGY = "Sorry, the AI provider is currently unavailable. Please try again in a few moments."
WELLNESS_UNAVAILABLE = (
	"AI support is temporarily unavailable. Here's a gentle tip: Take a short 5-min walk and try a breathing exercise."
)
WELLNESS_APOLOGY = "Sorry, I could not reach the AI right now. Please try again later."

# Number of trailing prompt lines echoed back when the provider is unconfigured
ECHO_LINES = 6


def unavailable_text(prompt: str) -> str:
	tail = "\n".join(prompt.split("\n")[-ECHO_LINES:])
	return UNAVAILABLE_PREFIX + tail


async def generate_text(
	prompt: str,
	api_key: str,
	settings: Settings,
	*,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
	client = GeminiClient.from_settings(api_key, settings, transport=transport)
	try:
		return await dispatch(
			client,
			prompt,
			primary=settings.gemini_model_primary,
			secondary=settings.gemini_model_secondary,
		)
	finally:
		await client.aclose()


async def answer(
	body: Any,
	settings: Settings,
	*,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
	prompt = build_prompt(body)
	api_key = settings.provider_key()
	if api_key is None:
		logger.warning("Gemini API key is missing; returning fallback guidance")
		return unavailable_text(prompt)
	try:
		return await generate_text(prompt, api_key, settings, transport=transport)
	except Exception as err:
		logger.error("Gemini provider error: %s", err)
		return PROVIDER_APOLOGY


async def wellness_reply(
	message: Optional[str],
	intent: Any,
	settings: Settings,
	*,
	transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
	# An explicit object, even an empty one, replaces the wellness default
	if not intent and not isinstance(intent, Mapping):
		intent = {"module": "wellness", "input": message or ""}
	prompt = build_prompt({"intent": intent})
	api_key = settings.provider_key()
	if api_key is None:
		logger.warning("Gemini API key is missing; returning wellness tip")
		return WELLNESS_UNAVAILABLE
	try:
		return await generate_text(prompt, api_key, settings, transport=transport)
	except Exception as err:
		logger.error("Gemini error in wellness chat: %s", err)
		return WELLNESS_APOLOGY
