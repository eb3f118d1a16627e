"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app import __version__
from app.logging_config import configure_logging, get_logger
from app.middleware.correlation_id import CorrelationIdMiddleware
from app.routers import (
    api_health_router,
    health_router,
    company_router,
    item_router,
    knowledge_router,
    faq_router,
    quick_response_router,
    persona_router,
    guardrail_router,
    chat_pattern_router,
    dashboard_router,
    sync_router,
)
from app.services.knowledge_sync_service import start_knowledge_sync, stop_knowledge_sync

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown: logging, knowledge sync worker (nếu bật), teardown."""
    configure_logging()
    logger.info("app_started", version=__version__)
    await start_knowledge_sync(app)
    yield
    await stop_knowledge_sync()
    logger.info("app_shutdown")


app = FastAPI(
    title="Catalog Admin",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(api_health_router)
app.include_router(health_router)
app.include_router(company_router)
app.include_router(item_router)
app.include_router(knowledge_router)
app.include_router(faq_router)
app.include_router(quick_response_router)
app.include_router(persona_router)
app.include_router(guardrail_router)
app.include_router(chat_pattern_router)
app.include_router(dashboard_router)
app.include_router(sync_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint: app name and version."""
    return {"name": "catalog_admin", "version": __version__}
