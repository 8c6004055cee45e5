from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import LearningGap
from .auth import User, get_current_user

router = APIRouter(prefix="/api/gaps", tags=["learning_gaps"])

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Needs Revision"


class GapRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	concept: str = Field(min_length=1)
	subject: str = Field(min_length=1)
	confidence: int = Field(default=50, ge=0, le=100)
	status: Optional[str] = None
	revision_topic: Optional[str] = Field(default=None, alias="revisionTopic")
	activity: Optional[str] = None


def serialize_gap(row: LearningGap) -> Dict[str, Any]:
	return {
		"id": row.id,
		"concept": row.concept,
		"subject": row.subject,
		"confidence": row.confidence,
		"status": row.status,
		"revisionTopic": row.revision_topic,
		"activity": row.activity,
	}


@router.get("")
async def list_gaps(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = db.query(LearningGap).filter(LearningGap.user_id == user.id).order_by(LearningGap.id).all()
	return [serialize_gap(r) for r in rows]


@router.post("")
async def create_gap(req: GapRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	row = LearningGap(
		user_id=user.id,
		concept=req.concept,
		subject=req.subject,
		confidence=req.confidence,
		status=req.status or DEFAULT_STATUS,
		revision_topic=req.revision_topic,
		activity=req.activity,
	)
	try:
		db.add(row)
		db.commit()
		db.refresh(row)
	except Exception:
		db.rollback()
		logger.exception("Saving learning gap failed for user %s", user.id)
		raise HTTPException(status_code=500, detail="Error saving learning gap")
	return serialize_gap(row)


@router.delete("/{gap_id}")
async def delete_gap(gap_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	# Scoped to the owner; deleting someone else's id is a silent no-op
	db.execute(delete(LearningGap).where(LearningGap.id == gap_id, LearningGap.user_id == user.id))
	db.commit()
	return {"message": "Gap deleted successfully"}
