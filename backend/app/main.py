"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.database import Base, engine, ping_db

# Import routers
from app.routers import events, strava

# Import all models so Base.metadata knows about them
from app.models.event import Event  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fail fast if the database is unreachable; create tables in SQLite dev mode."""
    try:
        ping_db()
    except Exception:
        logger.critical("Database connection failed at startup")
        raise
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


app = FastAPI(
    title="Marathon Events",
    description="Marathon event listings with admin-moderated submissions and a Strava activity proxy",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Register routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(strava.router, prefix="/api/strava", tags=["Strava"])


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Marathon API is running..."


@app.get("/api/health")
def health_check():
    return {"status": "ok"}


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
