"""Shared fixtures: in-memory database, stubbed provider and an authenticated client."""

import json
import os

# Keep tests away from a developer's real key and database
os.environ["GEMINI_API_KEY"] = ""
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any, Callable, Dict, List, Union

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from study_doctor.db import Base, get_db
from study_doctor.main import app
from study_doctor.routers.gemini import get_provider_transport
from study_doctor.settings import Settings, get_settings

PRIMARY_MODEL = "gemini-1.5-flash"
SECONDARY_MODEL = "gemini-1.5-pro"


def make_settings(**overrides: Any) -> Settings:
	values: Dict[str, Any] = {
		"GEMINI_API_KEY": "test-key",
		"GEMINI_MODEL": PRIMARY_MODEL,
		"GEMINI_FALLBACK_MODEL": SECONDARY_MODEL,
		"JWT_SECRET_KEY": "test-secret",
	}
	values.update(overrides)
	return Settings(_env_file=None, **values)


def gemini_reply(text: str) -> Dict[str, Any]:
	return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeProvider:
	"""Stand-in for the Generative Language API.

	``behaviour`` maps a model id to reply text, an HTTP status code, or an
	exception instance to raise from the transport.
	"""

	def __init__(self) -> None:
		self.behaviour: Dict[str, Union[str, int, Exception]] = {
			PRIMARY_MODEL: "primary says hi",
			SECONDARY_MODEL: "secondary says hi",
		}
		self.calls: List[str] = []
		self.prompts: List[str] = []

	def handler(self, request: httpx.Request) -> httpx.Response:
		model = request.url.path.rsplit("/", 1)[-1].split(":")[0]
		self.calls.append(model)
		body = json.loads(request.content)
		self.prompts.append(body["contents"][0]["parts"][0]["text"])
		outcome = self.behaviour.get(model, 404)
		if isinstance(outcome, Exception):
			raise outcome
		if isinstance(outcome, int):
			return httpx.Response(outcome, json={"error": {"code": outcome}})
		return httpx.Response(200, json=gemini_reply(outcome))

	def transport(self) -> httpx.MockTransport:
		return httpx.MockTransport(self.handler)


@pytest.fixture
def session_factory():
	engine = create_engine(
		"sqlite://",
		connect_args={"check_same_thread": False},
		poolclass=StaticPool,
	)
	Base.metadata.create_all(bind=engine)
	factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
	try:
		yield factory
	finally:
		Base.metadata.drop_all(bind=engine)
		engine.dispose()


@pytest.fixture
def provider() -> FakeProvider:
	return FakeProvider()


@pytest.fixture
def app_settings() -> Settings:
	return make_settings()


@pytest.fixture
def client(session_factory, provider, app_settings):
	def _get_db():
		db = session_factory()
		try:
			yield db
		finally:
			db.close()

	app.dependency_overrides[get_db] = _get_db
	app.dependency_overrides[get_settings] = lambda: app_settings
	app.dependency_overrides[get_provider_transport] = provider.transport
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client) -> Callable[..., Dict[str, str]]:
	def _login(email: str = "student@example.com", username: str = "student", password: str = "password123"):
		res = client.post("/api/register", json={"username": username, "email": email, "password": password})
		assert res.status_code == 201
		res = client.post("/api/login", json={"email": email, "password": password})
		assert res.status_code == 200
		return {"Authorization": f"Bearer {res.json()['token']}"}

	return _login


@pytest.fixture
def auth_headers(register_and_login) -> Dict[str, str]:
	return register_and_login()
