"""Map mã lỗi ValueError của service sang HTTPException."""
from fastapi import HTTPException, status

from app.schemas.common import LockedRecordDetail
from app.services.knowledge_service import LOCKED_MESSAGE, KnowledgeLockedError
from app.services.quick_response_service import InvalidTriggerPatternError

# code -> (status, detail)
ERROR_MAP = {
    "company_not_found": (status.HTTP_404_NOT_FOUND, "Company not found"),
    "item_not_found": (status.HTTP_404_NOT_FOUND, "Item not found"),
    "knowledge_not_found": (status.HTTP_404_NOT_FOUND, "Knowledge record not found"),
    "faq_not_found": (status.HTTP_404_NOT_FOUND, "FAQ not found"),
    "quick_response_not_found": (status.HTTP_404_NOT_FOUND, "Quick response not found"),
    "persona_not_found": (status.HTTP_404_NOT_FOUND, "Persona not found"),
    "guardrail_not_found": (status.HTTP_404_NOT_FOUND, "Guardrail not found"),
    "chat_pattern_not_found": (status.HTTP_404_NOT_FOUND, "Chat pattern not found"),
    "slug_taken": (status.HTTP_409_CONFLICT, "Slug already in use"),
    "invalid_slug": (status.HTTP_400_BAD_REQUEST, "Slug is empty; provide a slug or a name with letters or digits"),
    "duplicate_item_knowledge": (
        status.HTTP_409_CONFLICT,
        "A knowledge record already exists for this item; it is managed by the item",
    ),
    "item_knowledge_managed": (
        status.HTTP_400_BAD_REQUEST,
        "Item knowledge records are created automatically from items",
    ),
}


def http_error(e: ValueError) -> HTTPException:
    """ValueError(code) -> HTTPException. Code không biết => re-raise bản gốc."""
    if isinstance(e, KnowledgeLockedError):
        detail = LockedRecordDetail(
            message=LOCKED_MESSAGE,
            source_id=e.source_id,
            redirect_to=e.redirect_to,
        )
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail.model_dump(mode="json"))
    if isinstance(e, InvalidTriggerPatternError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_trigger_pattern", "pattern": e.pattern, "message": e.reason},
        )
    mapped = ERROR_MAP.get(str(e))
    if mapped is None:
        raise e
    status_code, detail = mapped
    return HTTPException(status_code=status_code, detail=detail)
