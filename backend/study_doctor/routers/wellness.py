from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from .. import assistant
from ..db import get_db
from ..models import WellnessLog
from ..settings import Settings, get_settings
from .auth import User, get_current_user
from .gemini import TextResponse, get_provider_transport

router = APIRouter(prefix="/api/wellness", tags=["wellness"])

logger = logging.getLogger(__name__)


class WellnessLogRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	mood: int = Field(ge=0, le=10)
	stress: int = Field(ge=0, le=10)
	sleep_hours: float = Field(alias="sleepHours", ge=0, le=24)
	sleep_quality: Optional[str] = Field(default=None, alias="sleepQuality")
	notes: Optional[str] = None


class WellnessChatRequest(BaseModel):
	message: Optional[str] = None
	intent: Optional[Any] = None


def serialize_log(row: WellnessLog) -> Dict[str, Any]:
	return {
		"id": row.id,
		"mood": row.mood,
		"stress": row.stress,
		"sleepHours": row.sleep_hours,
		"sleepQuality": row.sleep_quality,
		"notes": row.notes,
		"date": row.date.isoformat() if row.date else None,
	}


@router.post("")
async def save_log(req: WellnessLogRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	row = WellnessLog(
		user_id=user.id,
		mood=req.mood,
		stress=req.stress,
		sleep_hours=req.sleep_hours,
		sleep_quality=req.sleep_quality,
		notes=req.notes,
	)
	try:
		db.add(row)
		db.commit()
		db.refresh(row)
	except Exception:
		db.rollback()
		logger.exception("Saving wellness log failed for user %s", user.id)
		raise HTTPException(status_code=500, detail="Error saving wellness log")
	return {"message": "Wellness log saved", "log": serialize_log(row)}


def _record_chat(db: Session, user_id: int, message: Optional[str], reply: str) -> None:
	"""Best-effort: store the exchange as a wellness note, ignoring any failure."""
	try:
		db.add(WellnessLog(
			user_id=user_id,
			mood=0,
			stress=0,
			sleep_hours=0,
			sleep_quality=None,
			notes=f"User: {message or ''}\nAI: {reply}",
		))
		db.commit()
	except Exception as err:
		db.rollback()
		logger.warning("Failed to log wellness chat: %s", err)


@router.post("/chat", response_model=TextResponse)
async def chat(
	req: WellnessChatRequest,
	user: User = Depends(get_current_user),
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
	transport: Optional[httpx.AsyncBaseTransport] = Depends(get_provider_transport),
):
	try:
		text = await assistant.wellness_reply(req.message, req.intent, settings, transport=transport)
	except Exception:
		logger.exception("Wellness chat failed for user %s", user.id)
		raise HTTPException(status_code=500, detail="Error processing wellness chat")
	_record_chat(db, user.id, req.message, text)
	return TextResponse(text=text)
