from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import StudyPlan
from .auth import User, get_current_user

router = APIRouter(prefix="/api/plan", tags=["study_plan"])

logger = logging.getLogger(__name__)


class PlanRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	# Each day: {"day": ..., "tasks": [{"type": "study" | "revision" | ..., ...}]}
	schedule: List[Dict[str, Any]] = Field(default_factory=list)
	exam_date: Optional[str] = Field(default=None, alias="examDate")
	goals: Optional[str] = None


def load_schedule(row: Optional[StudyPlan]) -> List[Dict[str, Any]]:
	if row is None or not row.schedule:
		return []
	try:
		data = json.loads(row.schedule)
	except Exception:
		logger.warning("Stored schedule for plan %s is not valid JSON", row.id)
		return []
	return data if isinstance(data, list) else []


def serialize_plan(row: StudyPlan) -> Dict[str, Any]:
	return {
		"schedule": load_schedule(row),
		"examDate": row.exam_date or "",
		"goals": row.goals or "",
	}


@router.post("")
async def save_plan(req: PlanRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	try:
		row = db.query(StudyPlan).filter(StudyPlan.user_id == user.id).first()
		if row is None:
			row = StudyPlan(user_id=user.id)
		row.schedule = json.dumps(req.schedule)
		row.exam_date = req.exam_date
		row.goals = req.goals
		db.add(row)
		db.commit()
		db.refresh(row)
	except Exception:
		db.rollback()
		logger.exception("Saving plan failed for user %s", user.id)
		raise HTTPException(status_code=500, detail="Error saving plan")
	return {"message": "Plan saved successfully", "plan": serialize_plan(row)}


@router.get("")
async def get_plan(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	row = db.query(StudyPlan).filter(StudyPlan.user_id == user.id).first()
	if row is None:
		return {"schedule": [], "examDate": "", "goals": ""}
	return serialize_plan(row)
