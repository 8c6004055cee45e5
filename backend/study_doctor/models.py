from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float, Text, ForeignKey
from .db import Base


class User(Base):
	__tablename__ = "users"
	id = Column(Integer, primary_key=True, autoincrement=True)
	username = Column(String(128), nullable=False)
	# Login identifier
	email = Column(String(256), unique=True, index=True, nullable=False)
	password_hash = Column(String(256), nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class StudyPlan(Base):
	__tablename__ = "study_plans"
	id = Column(Integer, primary_key=True, autoincrement=True)
	# Single plan per user
	user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False)
	schedule = Column(Text, default="[]", nullable=False)  # JSON string of day/task list
	exam_date = Column(String(64), nullable=True)
	goals = Column(Text, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class WellnessLog(Base):
	__tablename__ = "wellness_logs"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	mood = Column(Integer, nullable=False)
	stress = Column(Integer, nullable=False)
	sleep_hours = Column(Float, nullable=False)
	sleep_quality = Column(String(64), nullable=True)
	notes = Column(Text, nullable=True)
	date = Column(DateTime, default=datetime.utcnow, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class LearningGap(Base):
	__tablename__ = "learning_gaps"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	concept = Column(String(256), nullable=False)
	subject = Column(String(256), nullable=False)
	confidence = Column(Integer, default=50, nullable=False)
	status = Column(String(64), default="Needs Revision", nullable=False)
	revision_topic = Column(String(256), nullable=True)
	activity = Column(String(256), nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
