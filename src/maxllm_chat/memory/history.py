from __future__ import annotations

from maxllm_chat.memory.models import MessageRecord, SessionView
from maxllm_chat.memory.record_store import ChatRecordStore


class HistoryReconstructor:
    def __init__(self, records: ChatRecordStore):
        self._records = records

    async def reconstruct(self) -> list[SessionView]:
        """Group every stored record by session, most recent session first.

        Records within a session are ordered by timestamp; ties keep storage
        order because the scan is already in ascending id order and both
        sorts are stable.
        """
        grouped: dict[str, list[MessageRecord]] = {}
        for record in await self._records.scan_all():
            grouped.setdefault(record.session_id, []).append(record)

        views = [
            SessionView(session_id=session_id, records=tuple(sorted(records, key=lambda r: r.timestamp)))
            for session_id, records in grouped.items()
        ]
        views.sort(key=lambda v: v.started_at, reverse=True)
        return views
