"""
JSON file-backed conversation store.

The whole store is one JSON object on disk:

    {
      "<conversation_id>": {"user": ..., "transcript": ..., "summary": ...,
                            "duration": ..., "timestamp": ..., "cost": ...},
      ...
    }

Key properties:
- load() never raises: a missing or unreadable file is an empty store
- save() replaces the file atomically (temp file + os.replace)
- upsert() serializes read-modify-write per store instance, so concurrent
  webhook deliveries in one process cannot drop each other's entries
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ConversationStoreError(Exception):
    """Store could not be written."""
    pass


class JsonConversationStore:
    """
    Mapping of conversation_id -> conversation record, persisted as one JSON file.

    Holds no conversation data in memory between calls; the file is the
    only owner of history.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: JSON file location. Relative paths resolve against the
                  working directory at call time.
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def load(self) -> dict[str, Any]:
        """
        Read the full store.

        Returns:
            The stored mapping, or {} if the file is missing or corrupt.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read conversation store {self.path}: {e}")
            return {}
        except UnicodeDecodeError as e:
            logger.warning(
                f"Conversation store {self.path} is not valid UTF-8, starting empty: {e}"
            )
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            # Next save() overwrites whatever was in the file
            logger.warning(
                f"Conversation store {self.path} is not valid JSON, starting empty: {e}"
            )
            return {}

        if not isinstance(data, dict):
            logger.warning(
                f"Conversation store {self.path} is not a JSON object, starting empty"
            )
            return {}

        return data

    def save(self, conversations: dict[str, Any]) -> None:
        """
        Write the full store, replacing prior contents.

        Raises:
            ConversationStoreError: File could not be written
        """
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(conversations, f, indent=2, ensure_ascii=False, allow_nan=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise ConversationStoreError(
                f"Failed to write conversation store {self.path}: {e}"
            ) from e

        logger.debug(f"Conversation store saved: {self.path} ({len(conversations)} entries)")

    def _upsert_sync(self, conversation_id: str, record: dict[str, Any]) -> None:
        conversations = self.load()
        conversations[conversation_id] = record
        self.save(conversations)

    async def upsert(
        self,
        conversation_id: str,
        record: Union[BaseModel, dict[str, Any]],
    ) -> None:
        """
        Insert or fully overwrite one conversation.

        Raises:
            ConversationStoreError: File could not be written
        """
        if isinstance(record, BaseModel):
            record = record.model_dump()

        async with self._lock:
            await asyncio.to_thread(self._upsert_sync, conversation_id, record)
