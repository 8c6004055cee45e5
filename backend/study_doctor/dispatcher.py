from __future__ import annotations
import logging
from typing import Optional

from .gemini_client import GeminiClient

logger = logging.getLogger(__name__)


async def dispatch(client: GeminiClient, prompt: str, *, primary: str, secondary: str) -> str:
	"""Generate with the primary model, falling back to the secondary once.

	Exactly one attempt per model, no delay between them. When both fail the
	secondary's error is raised (the primary's only if the secondary gave none).
	"""
	primary_error: Optional[Exception] = None
	try:
		return await client.generate(prompt, model=primary)
	except Exception as err:
		primary_error = err
		logger.warning("Model %s failed, trying %s: %s", primary, secondary, err)

	secondary_error: Optional[Exception] = None
	try:
		return await client.generate(prompt, model=secondary)
	except Exception as err:
		secondary_error = err
	logger.error("Both models failed (%s, %s): %s", primary, secondary, secondary_error or primary_error)
	raise secondary_error or primary_error
