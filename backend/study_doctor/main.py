import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from .db import Base, engine
from .settings import Settings, get_settings, settings
from .routers import auth
from .routers import gemini
from .routers import wellness
from .routers import plan
from .routers import gaps
from .routers import stats

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
	logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


app = FastAPI(title="AI Study Doctor API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origin_list(),
	allow_methods=["*"],
	allow_headers=["*"],
)
app.include_router(auth.router)
app.include_router(gemini.router)
app.include_router(wellness.router)
app.include_router(plan.router)
app.include_router(gaps.router)
app.include_router(stats.router)


@app.get("/info")
def root(settings: Settings = Depends(get_settings)):
	return {"status": "ok", "gemini_configured": settings.provider_key() is not None}


@app.on_event("startup")
async def startup_event():
	configure_logging(settings.log_level)
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	if settings.provider_key() is None:
		logger.warning("GEMINI_API_KEY is missing or a placeholder; AI endpoints will return fallback text")
