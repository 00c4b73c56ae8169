"""Conversation persistence - Module Exports"""

from .conversation_store import ConversationStoreError, JsonConversationStore

__all__ = [
    "JsonConversationStore",
    "ConversationStoreError",
]
