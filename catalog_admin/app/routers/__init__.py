"""API routers."""
from app.routers.api_health_router import router as api_health_router
from app.routers.health_router import router as health_router
from app.routers.company_router import router as company_router
from app.routers.item_router import router as item_router
from app.routers.knowledge_router import router as knowledge_router
from app.routers.faq_router import router as faq_router
from app.routers.quick_response_router import router as quick_response_router
from app.routers.persona_router import router as persona_router
from app.routers.guardrail_router import router as guardrail_router
from app.routers.chat_pattern_router import router as chat_pattern_router
from app.routers.dashboard_router import router as dashboard_router
from app.routers.sync_router import router as sync_router

__all__ = [
    "api_health_router",
    "health_router",
    "company_router",
    "item_router",
    "knowledge_router",
    "faq_router",
    "quick_response_router",
    "persona_router",
    "guardrail_router",
    "chat_pattern_router",
    "dashboard_router",
    "sync_router",
]
