"""
ElevenLabs Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the inbound webhook envelope and the persisted conversation record.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


# Event type ElevenLabs sends once a call has ended and its transcript is ready
POST_CALL_TRANSCRIPTION = "post_call_transcription"

DEFAULT_USER = "Anonymous"
DEFAULT_SUMMARY = "No summary provided"

Number = Union[int, float]


# ============================================================================
# ELEVENLABS WEBHOOK PAYLOAD SCHEMAS (INPUT)
# ============================================================================

class ConversationAnalysis(BaseModel):
    """Post-call analysis block."""
    transcript_summary: Optional[str] = None

    class Config:
        extra = "allow"


class ConversationMetadata(BaseModel):
    """Call metadata: timing and billing."""
    call_duration_secs: Optional[Number] = None
    start_time_unix_secs: Optional[Number] = None
    cost: Optional[Number] = None

    class Config:
        extra = "allow"


class DynamicVariables(BaseModel):
    """Variables injected by the client when the conversation started."""
    user_name: Optional[str] = None

    class Config:
        extra = "allow"

    @field_validator("user_name", mode="before")
    @classmethod
    def _coerce_user_name(cls, value: Any) -> Optional[str]:
        # Numbers become strings, anything else non-textual falls back to the default
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value
        return None


class ConversationInitiationClientData(BaseModel):
    dynamic_variables: Optional[DynamicVariables] = None

    class Config:
        extra = "allow"


class ConversationData(BaseModel):
    """The `data` object of a webhook event."""
    conversation_id: Optional[str] = None
    agent_id: Optional[str] = None
    status: Optional[str] = None
    transcript: Any = None
    analysis: Optional[ConversationAnalysis] = None
    metadata: Optional[ConversationMetadata] = None
    conversation_initiation_client_data: Optional[ConversationInitiationClientData] = None

    class Config:
        extra = "allow"  # ElevenLabs adds fields over time


class ElevenLabsWebhookEvent(BaseModel):
    """
    Full ElevenLabs webhook envelope.

    ref: https://elevenlabs.io/docs/conversational-ai/workflows/post-call-webhooks
    """

    type: Optional[str] = Field(None, description="Event type, e.g. 'post_call_transcription'")
    event_timestamp: Optional[Number] = None
    data: ConversationData = Field(..., description="Conversation payload")

    class Config:
        extra = "allow"

    @property
    def is_completed_call(self) -> bool:
        """Untyped events carry no marker and are stored like completed calls."""
        return self.type is None or self.type == POST_CALL_TRANSCRIPTION


# ============================================================================
# PERSISTED RECORD (OUTPUT)
# ============================================================================

class ConversationRecord(BaseModel):
    """
    Simplified record of one completed conversation.

    This is exactly what lands in the store file under the conversation id.
    """

    user: str = Field(DEFAULT_USER, description="Caller name from dynamic variables")
    transcript: Any = Field(None, description="Opaque transcript, passed through as-is")
    summary: str = Field(DEFAULT_SUMMARY, description="Post-call transcript summary")
    duration: Optional[Number] = Field(None, description="Call duration in seconds")
    timestamp: Optional[Number] = Field(None, description="Call start, unix seconds")
    cost: Optional[Number] = Field(None, description="Call cost as billed by ElevenLabs")
