"""SQLAlchemy models for Catalog Admin."""
from app.models.company import Company
from app.models.item import Item
from app.models.knowledge_record import KnowledgeRecord
from app.models.knowledge_sync_event import KnowledgeSyncEvent
from app.models.faq import Faq
from app.models.quick_response import QuickResponse
from app.models.persona import Persona
from app.models.guardrail import Guardrail
from app.models.chat_pattern import ChatPattern

__all__ = [
    "Company",
    "Item",
    "KnowledgeRecord",
    "KnowledgeSyncEvent",
    "Faq",
    "QuickResponse",
    "Persona",
    "Guardrail",
    "ChatPattern",
]
