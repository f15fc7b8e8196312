"""Career Notes API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CareerNotesError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, enhancer and orchestrator built on startup via lifespan;
      stale enhancing rows settled before serving, in-flight work drained on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careernotes.api.dependencies import set_orchestrator
from careernotes.api.error_handlers import register_error_handlers
from careernotes.api.routes import exports, health, notes, preferences
from careernotes.config import get_settings
from careernotes.infrastructure.database import init_db
from careernotes.infrastructure.note_repository import SqlNoteRepository
from careernotes.infrastructure.observability import setup_logging
from careernotes.infrastructure.preference_store import SqlTonePreferenceStore
from careernotes.services.enhancement_orchestrator import EnhancementOrchestrator
from careernotes.services.enhancers import build_enhancer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.should_auto_create:
        await manager.create_all()
    orchestrator = EnhancementOrchestrator(
        repository=SqlNoteRepository(manager.session),
        enhancer=build_enhancer(settings),
        tone_store=SqlTonePreferenceStore(manager.session),
        timeout_seconds=settings.enhancer_timeout_seconds,
    )
    await orchestrator.recover_stale()
    set_orchestrator(orchestrator)
    logger.info("Career Notes API started")
    yield
    logger.info("Career Notes API shutting down")
    await orchestrator.drain()
    set_orchestrator(None)
    await manager.dispose()


app = FastAPI(
    title="Career Notes API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(notes.router)
app.include_router(exports.router)
app.include_router(preferences.router)

register_error_handlers(app)
