"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Config  # noqa: E402

TEST_WEBHOOK_SECRET = "wsec_test_secret"


@pytest.fixture
def store_path(tmp_path):
    """Conversation store file inside a per-test directory."""
    return tmp_path / "conversations.json"


@pytest.fixture
def configured(monkeypatch, store_path):
    """Point Config at a test secret and a throwaway store file."""
    monkeypatch.setattr(Config, "ELEVENLABS_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    monkeypatch.setattr(Config, "CONVERSATIONS_FILE", str(store_path))
    return Config
