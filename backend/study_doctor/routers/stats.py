from __future__ import annotations
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import LearningGap, StudyPlan, WellnessLog
from .auth import User, get_current_user
from .plan import load_schedule
from .wellness import serialize_log

router = APIRouter(prefix="/api/stats", tags=["stats"])

STUDY_TASK_TYPES = ("study", "revision")
MASTERED_CONFIDENCE = 80


def count_study_hours(schedule: List[Dict[str, Any]]) -> int:
	# One study or revision task counts as one hour
	hours = 0
	for day in schedule:
		tasks = day.get("tasks") if isinstance(day, dict) else None
		for task in tasks or []:
			if isinstance(task, dict) and task.get("type") in STUDY_TASK_TYPES:
				hours += 1
	return hours


@router.get("")
async def get_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	logs = (
		db.query(WellnessLog)
		.filter(WellnessLog.user_id == user.id)
		.order_by(WellnessLog.date.desc(), WellnessLog.id.desc())
		.all()
	)
	plan = db.query(StudyPlan).filter(StudyPlan.user_id == user.id).first()
	gaps = db.query(LearningGap).filter(LearningGap.user_id == user.id).all()

	avg_mood = sum(l.mood for l in logs) / len(logs) if logs else 0
	avg_confidence = sum(g.confidence for g in gaps) / len(gaps) if gaps else 0
	return {
		"studyHours": f"{count_study_hours(load_schedule(plan))}h",
		"conceptsSolved": str(sum(1 for g in gaps if g.confidence >= MASTERED_CONFIDENCE)),
		"avgEvaluation": f"{avg_confidence / 10:.1f}",
		"avgMood": round(avg_mood, 1),
		"studyStreak": f"{len(logs)}d",
		"lastCheckIn": serialize_log(logs[0]) if logs else None,
	}
