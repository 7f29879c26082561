from __future__ import annotations

from datetime import datetime

from maxllm_chat.memory import MessageRecord, SessionView


class HistoryPrinter:
    def __init__(self, *, line_prefix: str):
        self._line_prefix = line_prefix

    @staticmethod
    def format_time(timestamp_ms: int) -> str:
        return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")

    def format_session_header(self, view: SessionView) -> str:
        return f"{self._line_prefix}{view.session_id} - {self.format_time(view.started_at)}"

    def format_record_lines(self, record: MessageRecord) -> list[str]:
        lines = [f"{self._line_prefix}  [{record.role}] {self.format_time(record.timestamp)}"]
        for line in record.content.splitlines() or [""]:
            lines.append(f"{self._line_prefix}    {line}")
        return lines

    def format_history_lines(self, sessions: list[SessionView]) -> list[str]:
        if not sessions:
            return [f"{self._line_prefix}No records yet."]
        lines: list[str] = []
        for view in sessions:
            lines.append(self.format_session_header(view))
            for record in view.records:
                lines.extend(self.format_record_lines(record))
        return lines
