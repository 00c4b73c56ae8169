"""
ElevenLabs Event Normalization Tests

Event payload → ConversationRecord, including defaults for missing fields.
"""

import pytest

from transport.elevenlabs.normalize import (
    NormalizationError,
    normalize_event,
    parse_event,
)
from transport.elevenlabs.schemas import (
    DEFAULT_SUMMARY,
    DEFAULT_USER,
    ConversationRecord,
)


def make_payload(**data_overrides):
    data = {
        "conversation_id": "c1",
        "agent_id": "agent_1",
        "transcript": [
            {"role": "agent", "message": "Hello, how can I help?"},
            {"role": "user", "message": "Just testing."},
        ],
        "analysis": {"transcript_summary": "hi"},
        "metadata": {"call_duration_secs": 42, "start_time_unix_secs": 1000, "cost": 5},
        "conversation_initiation_client_data": {
            "dynamic_variables": {"user_name": "Ada"},
        },
    }
    data.update(data_overrides)
    return {"type": "post_call_transcription", "event_timestamp": 1739537297, "data": data}


class TestParseEvent:
    """Test envelope validation."""

    def test_parse_completed_call(self):
        event = parse_event(make_payload())

        assert event.is_completed_call
        assert event.data.conversation_id == "c1"
        assert event.data.metadata.call_duration_secs == 42

    def test_unknown_fields_allowed(self):
        payload = make_payload(has_audio=True)
        payload["extra_field"] = "ignored"

        event = parse_event(payload)
        assert event.data.conversation_id == "c1"

    def test_other_event_type_is_not_completed_call(self):
        payload = make_payload()
        payload["type"] = "post_call_audio"

        assert not parse_event(payload).is_completed_call

    def test_missing_type_is_treated_as_completed_call(self):
        payload = make_payload()
        del payload["type"]

        assert parse_event(payload).is_completed_call

    @pytest.mark.parametrize("payload", [[], "text", 42, None])
    def test_non_object_rejected(self, payload):
        with pytest.raises(NormalizationError):
            parse_event(payload)

    def test_missing_data_rejected(self):
        with pytest.raises(NormalizationError):
            parse_event({"type": "post_call_transcription"})

    def test_wrong_field_type_rejected(self):
        with pytest.raises(NormalizationError):
            parse_event(make_payload(metadata={"call_duration_secs": "long"}))


class TestNormalizeEvent:
    """Test record extraction and defaults."""

    def test_full_event(self):
        conversation_id, record = normalize_event(parse_event(make_payload()))

        assert conversation_id == "c1"
        assert isinstance(record, ConversationRecord)
        assert record.user == "Ada"
        assert record.summary == "hi"
        assert record.duration == 42
        assert record.timestamp == 1000
        assert record.cost == 5
        assert record.transcript[1]["message"] == "Just testing."

    def test_integers_stay_integers(self):
        _, record = normalize_event(parse_event(make_payload()))

        assert isinstance(record.duration, int)
        assert isinstance(record.timestamp, int)

    def test_fractional_cost_preserved(self):
        _, record = normalize_event(
            parse_event(make_payload(metadata={"cost": 12.5}))
        )
        assert record.cost == 12.5

    def test_missing_analysis_uses_default_summary(self):
        payload = make_payload()
        del payload["data"]["analysis"]

        _, record = normalize_event(parse_event(payload))
        assert record.summary == DEFAULT_SUMMARY == "No summary provided"

    @pytest.mark.parametrize("summary", [None, ""])
    def test_empty_summary_uses_default(self, summary):
        _, record = normalize_event(
            parse_event(make_payload(analysis={"transcript_summary": summary}))
        )
        assert record.summary == DEFAULT_SUMMARY

    def test_missing_client_data_defaults_to_anonymous(self):
        payload = make_payload()
        del payload["data"]["conversation_initiation_client_data"]

        _, record = normalize_event(parse_event(payload))
        assert record.user == DEFAULT_USER == "Anonymous"

    @pytest.mark.parametrize(
        "client_data",
        [
            {},
            {"dynamic_variables": None},
            {"dynamic_variables": {}},
            {"dynamic_variables": {"user_name": ""}},
        ],
    )
    def test_partial_client_data_defaults_to_anonymous(self, client_data):
        _, record = normalize_event(
            parse_event(make_payload(conversation_initiation_client_data=client_data))
        )
        assert record.user == DEFAULT_USER

    @pytest.mark.parametrize("user_name, expected", [(1234, "1234"), (12.5, "12.5")])
    def test_numeric_user_name_coerced_to_string(self, user_name, expected):
        _, record = normalize_event(
            parse_event(make_payload(
                conversation_initiation_client_data={"dynamic_variables": {"user_name": user_name}}
            ))
        )
        assert record.user == expected

    @pytest.mark.parametrize("user_name", [True, ["Ada"], {"first": "Ada"}])
    def test_non_text_user_name_defaults_to_anonymous(self, user_name):
        _, record = normalize_event(
            parse_event(make_payload(
                conversation_initiation_client_data={"dynamic_variables": {"user_name": user_name}}
            ))
        )
        assert record.user == DEFAULT_USER

    def test_missing_metadata_gives_nulls(self):
        payload = make_payload()
        del payload["data"]["metadata"]

        _, record = normalize_event(parse_event(payload))
        dumped = record.model_dump()

        assert dumped["duration"] is None
        assert dumped["timestamp"] is None
        assert dumped["cost"] is None

    def test_missing_transcript_passes_through_as_none(self):
        payload = make_payload()
        del payload["data"]["transcript"]

        _, record = normalize_event(parse_event(payload))
        assert record.transcript is None

    @pytest.mark.parametrize("conversation_id", [None, ""])
    def test_missing_conversation_id_rejected(self, conversation_id):
        with pytest.raises(NormalizationError):
            normalize_event(parse_event(make_payload(conversation_id=conversation_id)))

    def test_record_has_exactly_persisted_fields(self):
        _, record = normalize_event(parse_event(make_payload()))

        assert set(record.model_dump().keys()) == {
            "user", "transcript", "summary", "duration", "timestamp", "cost",
        }
