"""
ElevenLabs Event Normalization

PURE CONVERSION - NO I/O

Converts a parsed webhook event into the ConversationRecord that gets persisted.
- user: dynamic variable user_name, else "Anonymous"
- summary: analysis.transcript_summary, else "No summary provided"
- duration / timestamp / cost: passed through, None when absent
- transcript: passed through untouched
"""

from typing import Any

from pydantic import ValidationError

from .schemas import (
    DEFAULT_SUMMARY,
    DEFAULT_USER,
    ConversationRecord,
    ElevenLabsWebhookEvent,
)


class NormalizationError(Exception):
    """Event could not be converted into a conversation record."""
    pass


def parse_event(payload: Any) -> ElevenLabsWebhookEvent:
    """
    Validate a decoded JSON payload against the webhook envelope.

    Raises:
        NormalizationError: Payload is not a webhook event
    """
    if not isinstance(payload, dict):
        raise NormalizationError("Webhook payload must be a JSON object")

    try:
        return ElevenLabsWebhookEvent(**payload)
    except ValidationError as e:
        raise NormalizationError(f"Invalid event structure: {e}")


def extract_user_name(event: ElevenLabsWebhookEvent) -> str:
    client_data = event.data.conversation_initiation_client_data
    if client_data and client_data.dynamic_variables:
        return client_data.dynamic_variables.user_name or DEFAULT_USER
    return DEFAULT_USER


def normalize_event(event: ElevenLabsWebhookEvent) -> tuple[str, ConversationRecord]:
    """
    Convert a completed-call event into (conversation_id, ConversationRecord).

    Raises:
        NormalizationError: Event has no conversation_id
    """
    data = event.data
    if not data.conversation_id:
        raise NormalizationError("Event missing 'data.conversation_id'")

    analysis = data.analysis
    metadata = data.metadata

    summary = DEFAULT_SUMMARY
    if analysis and analysis.transcript_summary:
        summary = analysis.transcript_summary

    record = ConversationRecord(
        user=extract_user_name(event),
        transcript=data.transcript,
        summary=summary,
        duration=metadata.call_duration_secs if metadata else None,
        timestamp=metadata.start_time_unix_secs if metadata else None,
        cost=metadata.cost if metadata else None,
    )

    return data.conversation_id, record
