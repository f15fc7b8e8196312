"""Service test fixtures — SQL-backed orchestrator + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database (root conftest test_engine)
    - get_orchestrator dependency overridden: routes, repository and tone store all
      resolve to the test orchestrator
    - db_manager patched so the readiness probe sees the test engine
    - Enhancer is gated: tests observe is_enhancing=True, then open the gate and drain

Design Decisions:
    - Lifespan does not run under ASGITransport: the fixture builds the graph itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

import careernotes.infrastructure.database as db_module
from careernotes.api.dependencies import get_orchestrator
from careernotes.infrastructure.database import DatabaseSessionManager
from careernotes.infrastructure.note_repository import SqlNoteRepository
from careernotes.infrastructure.preference_store import SqlTonePreferenceStore
from careernotes.main import app
from careernotes.services.enhancement_orchestrator import EnhancementOrchestrator

from tests.services.fakes import GatedEnhancer


@pytest.fixture
def api_enhancer():
    return GatedEnhancer(result="Delivered measurable results")


@pytest.fixture
async def api_orchestrator(test_session_factory, api_enhancer):
    orchestrator = EnhancementOrchestrator(
        repository=SqlNoteRepository(test_session_factory),
        enhancer=api_enhancer,
        tone_store=SqlTonePreferenceStore(test_session_factory),
        timeout_seconds=5,
    )
    yield orchestrator
    api_enhancer.gate.set()
    await orchestrator.drain()


@pytest.fixture
async def client(test_engine, test_session_factory, api_orchestrator):
    """FastAPI test client wired to the test orchestrator."""
    app.dependency_overrides[get_orchestrator] = lambda: api_orchestrator

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def settle(api_enhancer, api_orchestrator):
    """Open the enhancer gate and wait for every background enhancement."""
    async def _settle():
        api_enhancer.gate.set()
        await api_orchestrator.drain()
    return _settle
