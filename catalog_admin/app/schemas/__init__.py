"""Pydantic request/response schemas."""
from app.schemas.common import ErrorResponse, LockedRecordDetail, MessageResponse
from app.schemas.company import CompanyCreate, CompanyOut, CompanyUpdate
from app.schemas.item import ItemCreate, ItemDeleteResponse, ItemOut, ItemUpdate
from app.schemas.knowledge import (
    KnowledgeCreate,
    KnowledgeOut,
    KnowledgeQueryRequest,
    KnowledgeQueryResponse,
    KnowledgeUpdate,
)
from app.schemas.faq import FaqCreate, FaqOut, FaqUpdate
from app.schemas.quick_response import QuickResponseCreate, QuickResponseOut, QuickResponseUpdate
from app.schemas.persona import PersonaCreate, PersonaOut, PersonaPersonality, PersonaUpdate
from app.schemas.guardrail import GuardrailCreate, GuardrailOut, GuardrailUpdate
from app.schemas.chat_pattern import ChatPatternCreate, ChatPatternOut, ChatPatternUpdate

__all__ = [
    "ErrorResponse",
    "LockedRecordDetail",
    "MessageResponse",
    "CompanyCreate",
    "CompanyOut",
    "CompanyUpdate",
    "ItemCreate",
    "ItemDeleteResponse",
    "ItemOut",
    "ItemUpdate",
    "KnowledgeCreate",
    "KnowledgeOut",
    "KnowledgeQueryRequest",
    "KnowledgeQueryResponse",
    "KnowledgeUpdate",
    "FaqCreate",
    "FaqOut",
    "FaqUpdate",
    "QuickResponseCreate",
    "QuickResponseOut",
    "QuickResponseUpdate",
    "PersonaCreate",
    "PersonaOut",
    "PersonaPersonality",
    "PersonaUpdate",
    "GuardrailCreate",
    "GuardrailOut",
    "GuardrailUpdate",
    "ChatPatternCreate",
    "ChatPatternOut",
    "ChatPatternUpdate",
]
