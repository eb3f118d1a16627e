"""Business logic services."""
from app.services.item_service import create_item, delete_item, update_item
from app.services.knowledge_sync_service import drain_outbox

__all__ = [
    "create_item",
    "update_item",
    "delete_item",
    "drain_outbox",
]
