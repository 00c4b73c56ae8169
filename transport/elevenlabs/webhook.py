"""
ElevenLabs Webhook Receiver

FastAPI router that receives post-call webhooks and persists conversation records.

Flow:
  RECEIVED → verify signature → parse → skip non-completed event types → normalize → upsert → 200
  RECEIVED → signature rejected → 401
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from config import Config
from storage import ConversationStoreError, JsonConversationStore

from .normalize import NormalizationError, normalize_event, parse_event
from .security import SIGNATURE_HEADER, verify_signature

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ElevenLabs Transport"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be written back to the store
    raise ValueError(f"Non-standard JSON constant: {name}")


def get_conversation_store(request: Request) -> JsonConversationStore:
    """Store created in the application lifespan."""
    return request.app.state.conversation_store


# ============================================================================
# WEBHOOK RECEIVER
# ============================================================================

@router.post("/elevenlabs-webhook")
async def elevenlabs_webhook_receiver(
    request: Request,
    store: JsonConversationStore = Depends(get_conversation_store),
) -> Any:
    """
    Receive ElevenLabs conversation events.

    Flow:
    1. Verify ElevenLabs-Signature over the raw body (401 if invalid)
    2. Parse the event (400 if not JSON / not an event)
    3. Ignore typed events other than post_call_transcription (untyped events are stored)
    4. Normalize to ConversationRecord
    5. Upsert into the conversation store (500 if the write fails)

    Returns:
        {"received": true} for stored and ignored events alike
    """

    # Step 1: Verify signature (security boundary)
    body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)

    if not verify_signature(Config.ELEVENLABS_WEBHOOK_SECRET, body, signature):
        logger.warning(
            "Invalid signature. Ignoring request.",
            extra={"signature_present": signature is not None}
        )
        return _error(status.HTTP_401_UNAUTHORIZED, "Invalid signature")

    # Step 2: Parse
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError:  # JSONDecodeError, UnicodeDecodeError, NaN/Infinity
        logger.warning("Webhook body is not valid JSON")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON payload")

    try:
        event = parse_event(payload)
    except NormalizationError as e:
        logger.warning(f"Webhook payload rejected: {e}")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid event payload")

    # Step 3: Filter by event type
    if not event.is_completed_call:
        logger.info(f"Ignoring event type: {event.type}")
        return {"received": True}

    # Step 4: Normalize
    try:
        conversation_id, record = normalize_event(event)
    except NormalizationError as e:
        logger.warning(f"Webhook event rejected: {e}")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid event payload")

    # Step 5: Persist
    try:
        await store.upsert(conversation_id, record)
    except ConversationStoreError as e:
        logger.error(f"Failed to save conversation: {e}", exc_info=True)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to persist conversation",
        )

    logger.info(
        f"Conversation saved for user: {record.user}",
        extra={"conversation_id": conversation_id, "user": record.user}
    )

    return {"received": True}


@router.get("/elevenlabs-webhook")
async def elevenlabs_webhook_live() -> dict[str, str]:
    """Liveness check for the webhook endpoint. No store access."""
    return {"message": "Webhook endpoint is live"}

