from __future__ import annotations

import json
from datetime import UTC, datetime

from loguru import logger

from maxllm_chat.errors import SnapshotCorrupt
from maxllm_chat.memory.context import ChatContext
from maxllm_chat.memory.models import Snapshot

SNAPSHOT_KEY = "maxllm_data"


class SnapshotCache:
    """Single overwrite-in-place slot holding the resume state."""

    def __init__(self, context: ChatContext):
        self._state = context.state
        self._default_model = context.default_model

    def save(self, live_history: list[dict], model: str) -> None:
        payload = {
            "chatHistory": [{"role": m["role"], "content": m["content"]} for m in live_history],
            "currentModel": model,
            "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds"),
        }
        self._state.set_item(SNAPSHOT_KEY, json.dumps(payload, ensure_ascii=True))

    def load(self) -> Snapshot | None:
        raw = self._state.get_item(SNAPSHOT_KEY)
        if raw is None:
            return None
        try:
            return self._decode(raw)
        except SnapshotCorrupt as ex:
            logger.warning(f"Discarding saved conversation: {ex}")
            return None

    def clear(self) -> None:
        self._state.remove_item(SNAPSHOT_KEY)

    def _decode(self, raw: str) -> Snapshot:
        try:
            data = json.loads(raw)
        except ValueError as ex:
            raise SnapshotCorrupt(f"unparseable snapshot ({ex})") from ex
        if not isinstance(data, dict):
            raise SnapshotCorrupt("snapshot is not an object")

        history = data.get("chatHistory") or []
        if not isinstance(history, list):
            raise SnapshotCorrupt("chatHistory is not a list")
        live_history: list[dict] = []
        for entry in history:
            if not isinstance(entry, dict) or entry.get("role") not in ("user", "assistant"):
                raise SnapshotCorrupt(f"unexpected history entry: {entry!r}")
            content = entry.get("content", "")
            if not isinstance(content, str):
                raise SnapshotCorrupt(f"non-text content in history entry: {entry!r}")
            live_history.append({"role": entry["role"], "content": content})

        model = data.get("currentModel") or self._default_model
        written_at = data.get("timestamp")
        return Snapshot(
            live_history=live_history,
            model=str(model),
            written_at=str(written_at) if written_at is not None else None,
        )
