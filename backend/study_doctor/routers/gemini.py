from typing import Any, Optional
import logging

import httpx
from fastapi import APIRouter, Body, HTTPException, Depends
from pydantic import BaseModel

from .. import assistant
from ..settings import Settings, get_settings
from .auth import get_current_user, User

router = APIRouter(prefix="/api", tags=["gemini"])

logger = logging.getLogger(__name__)


class TextResponse(BaseModel):
	text: str


def get_provider_transport() -> Optional[httpx.AsyncBaseTransport]:
	# Default network transport; overridden in tests
	return None


@router.post("/gemini", response_model=TextResponse)
async def generate(
	body: Any = Body(default=None),
	user: User = Depends(get_current_user),
	settings: Settings = Depends(get_settings),
	transport: Optional[httpx.AsyncBaseTransport] = Depends(get_provider_transport),
):
	try:
		text = await assistant.answer(body, settings, transport=transport)
	except Exception:
		logger.exception("Gemini request processing failed for user %s", user.id)
		raise HTTPException(status_code=500, detail="Error processing request with Gemini")
	return TextResponse(text=text)
