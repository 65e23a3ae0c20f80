"""CivicTrust API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The ledger is restored from the stored audit log BEFORE the app serves requests

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - One LedgerService per process on app.state: the core's lock is the
      serialization point, so run a single worker
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civictrust.api.error_handlers import register_error_handlers
from civictrust.api.routes import audit, authority, campaigns, donations, health, organizations
from civictrust.config import Settings, get_settings
from civictrust.core.ledger_core import LedgerCore
from civictrust.core.repository_protocols import Clock
from civictrust.infrastructure.audit_store import SqlAuditStore
from civictrust.infrastructure.clock import SystemClock
from civictrust.infrastructure import database
from civictrust.infrastructure.observability import setup_logging
from civictrust.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


async def build_ledger_service(settings: Settings, clock: Clock) -> LedgerService:
    """In-memory ledger, or one restored from the database when persistence is on."""
    if not settings.persist_audit_log:
        logger.warning("Audit log persistence disabled; state is lost on restart")
        return LedgerService(LedgerCore(settings.admin_address, clock))
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    return await LedgerService.restore(
        SqlAuditStore(manager), settings.admin_address, clock,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.ledger = await build_ledger_service(settings, SystemClock())
    logger.info("CivicTrust API started")
    yield
    logger.info("CivicTrust API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="CivicTrust API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(organizations.router)
app.include_router(authority.router)
app.include_router(campaigns.router)
app.include_router(donations.router)
app.include_router(audit.router)

register_error_handlers(app)
