"""
Comissao - commission engine for the sales dashboard

Main FastAPI application with:
- Commission configuration storage
- SDR and closer commission calculation
- Commission rankings
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.api import api_router
from src.config import settings
from src.db import get_db_context
from src.services.commission_config import CommissionConfigRepository

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Stores the default commission configuration if none exists
    """
    logger.info("Starting Comissao...")

    async with get_db_context() as db:
        if await CommissionConfigRepository(db).ensure_defaults():
            logger.info("Created default commission config")

    logger.info("Comissao started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down Comissao...")


# Create FastAPI application
app = FastAPI(
    title="Comissao",
    description="Commission engine for the sales dashboard",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

app.include_router(api_router)  # /api/* endpoints


# Root redirect
@app.get("/", include_in_schema=False)
async def root():
    """Redirect root to the API docs."""
    return RedirectResponse(url="/docs", status_code=302)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
