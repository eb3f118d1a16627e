"""Catalog Admin: multi-tenant config API (items, pricing, knowledge base) for the chat backend."""
__version__ = "0.3.0"
