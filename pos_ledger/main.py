"""
POS Ledger: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from pos_ledger.config import get_settings
from pos_ledger.logging_config import configure_logging
from pos_ledger.models.base import SessionLocal
from pos_ledger.services.chart_of_accounts import ChartOfAccountsService
from pos_ledger.api.health import router as health_router
from pos_ledger.api.accounts import router as accounts_router
from pos_ledger.api.journal import router as journal_router
from pos_ledger.api.reports import router as reports_router
from pos_ledger.api.sales import router as sales_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


def seed_chart_of_accounts() -> int:
    """Seed the default chart in its own session."""
    with SessionLocal() as db:
        created = ChartOfAccountsService(db).seed_default_chart_of_accounts()
        db.commit()
    return created


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup fails if the default chart cannot be seeded.
    if settings.SEED_CHART_ON_STARTUP:
        seed_chart_of_accounts()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry bookkeeping for a retail point of sale",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(journal_router)
app.include_router(reports_router)
app.include_router(sales_router)


if __name__ == "__main__":
    uvicorn.run(
        "pos_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
