"""Health check endpoint."""
from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    """Health check cho load balancer / Docker."""
    return {"status": "ok", "service": "catalog_admin"}
