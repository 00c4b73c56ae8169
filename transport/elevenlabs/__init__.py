"""ElevenLabs Transport Layer - Module Exports"""

from .client import ElevenLabsClient, ElevenLabsClientError
from .normalize import (
    NormalizationError,
    extract_user_name,
    normalize_event,
    parse_event,
)
from .schemas import (
    DEFAULT_SUMMARY,
    DEFAULT_USER,
    POST_CALL_TRANSCRIPTION,
    ConversationData,
    ConversationRecord,
    ElevenLabsWebhookEvent,
)
from .security import SIGNATURE_HEADER, compute_signature, verify_signature
from .webhook import router

__all__ = [
    # Schemas
    "ElevenLabsWebhookEvent",
    "ConversationData",
    "ConversationRecord",
    "POST_CALL_TRANSCRIPTION",
    "DEFAULT_USER",
    "DEFAULT_SUMMARY",
    # Normalization
    "parse_event",
    "normalize_event",
    "extract_user_name",
    "NormalizationError",
    # Security
    "SIGNATURE_HEADER",
    "compute_signature",
    "verify_signature",
    # Client
    "ElevenLabsClient",
    "ElevenLabsClientError",
    # Router
    "router",
]
