# Foundation health: /api/healthz (liveness), /api/readyz (readiness). readyz check DB + outbox backlog.
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.logging_config import get_logger
from app.services.knowledge_sync_service import count_pending

router = APIRouter(prefix="/api", tags=["health"])
logger = get_logger(__name__)


@router.get("/healthz")
def healthz() -> dict[str, str]:
    """Liveness: process dang chay. Luon 200."""
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(db: AsyncSession = Depends(get_db)):
    """Readiness: DB san sang. 200 OK kem so event outbox pending, 503 neu loi."""
    try:
        await db.execute(text("SELECT 1"))
        pending = await count_pending(db)
    except Exception as e:
        logger.warning("readyz.db_fail", error=str(e))
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "db": "fail"},
        )
    return {"status": "ok", "db": "ok", "kb_sync_pending": pending}
