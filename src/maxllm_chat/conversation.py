from __future__ import annotations

from datetime import UTC, datetime

from loguru import logger

from maxllm_chat.context_window import ContextWindowBuilder
from maxllm_chat.errors import Rejected
from maxllm_chat.memory import (
    ChatContext,
    ChatRecordStore,
    HistoryReconstructor,
    MessageRecord,
    Role,
    SessionIdAuthority,
    SessionView,
    SnapshotCache,
)


class Conversation:
    """Owns the live history and keeps both persistence tiers in step with it."""

    def __init__(self, context: ChatContext, window: ContextWindowBuilder):
        self._clock = context.clock
        self._session_ids = SessionIdAuthority(context)
        self._snapshot = SnapshotCache(context)
        self._records = ChatRecordStore(context)
        self._history = HistoryReconstructor(self._records)
        self._window = window
        self._live_history: list[dict] = []
        self._current_model = context.default_model
        self._session_id = self._session_ids.current_id()

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def current_model(self) -> str:
        return self._current_model

    @property
    def live_history(self) -> list[dict]:
        return [dict(m) for m in self._live_history]

    @property
    def records_available(self) -> bool:
        return self._records.available

    def restore(self) -> bool:
        """Repopulate live history from the snapshot. Returns True if one was found."""
        snapshot = self._snapshot.load()
        if snapshot is None:
            return False
        self._live_history = list(snapshot.live_history)
        self._current_model = snapshot.model
        logger.info(f"Restored {len(self._live_history)} message(s) from snapshot (model={self._current_model})")
        return True

    async def open(self) -> None:
        await self._records.open()

    def close(self) -> None:
        self._records.close()

    def set_current_model(self, model: str) -> None:
        self._current_model = model
        self._snapshot.save(self._live_history, self._current_model)

    def append_turn(self, role: Role | str, content: str) -> None:
        role = Role(role)
        if role == Role.ERROR:
            logger.debug(f"Error turn not recorded: {content}")
            return
        self._live_history.append({"role": str(role), "content": content})
        self._records.append(
            MessageRecord(
                session_id=self._session_id,
                timestamp=self._clock(),
                role=role,
                content=content,
                model=self._current_model,
            )
        )
        self._snapshot.save(self._live_history, self._current_model)

    def build_outgoing_messages(self, new_content: str) -> list[dict] | Rejected:
        messages = self._window.build(self._live_history, new_content)
        rejected = self._window.check(messages)
        if rejected is not None:
            return rejected
        return messages

    def reset_conversation(self) -> None:
        # Not atomic: an interruption can leave the old session id with its
        # records still present.
        self._live_history = []
        self._snapshot.clear()
        self._records.clear()
        self._session_id = self._session_ids.rotate(force=True)
        logger.info(f"Conversation reset; active session is now {self._session_id}")

    def export_conversation(self) -> dict:
        return {
            "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "model": self._current_model,
            "messages": self.live_history,
        }

    async def list_session_history(self) -> list[SessionView]:
        return await self._history.reconstruct()
