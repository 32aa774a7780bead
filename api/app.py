"""Main FastAPI application with modularized routes."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import LOG_LEVEL
from api.database import init_db
from api.routes import bank, imports
from api.services.cleanup_service import schedule_session_cleanup
from core.logging_setup import setup_console_logging

setup_console_logging(LOG_LEVEL)

app = FastAPI(title="Question Import API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Create the question bank store and start session cleanup."""
    init_db()
    schedule_session_cleanup()


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# Include routers
app.include_router(imports.router)
app.include_router(bank.router)
