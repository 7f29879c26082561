from __future__ import annotations

import sqlite3

from loguru import logger

from maxllm_chat.errors import StoreUnavailable, WriteFailed
from maxllm_chat.memory.context import ChatContext
from maxllm_chat.memory.models import MessageRecord, Role
from maxllm_chat.memory.store import MemoryStore


class ChatRecordStore:
    """Append-only log of message records, best effort.

    Until ``open()`` succeeds, or when the database cannot be opened at all,
    the store is degraded: writes and reads quietly do nothing. Callers never
    see a storage exception.
    """

    def __init__(self, context: ChatContext):
        self._db_path = context.records_db_path
        self._store: MemoryStore | None = None
        self._opened = False

    @property
    def available(self) -> bool:
        return self._store is not None

    async def open(self) -> ChatRecordStore:
        if self._opened:
            return self
        self._opened = True
        try:
            self._store = self._connect()
        except StoreUnavailable as ex:
            logger.warning(f"Record store unavailable; records will not be persisted: {ex}")
            return self
        logger.info(f"Record store opened at {self._db_path}")
        return self

    def append(self, record: MessageRecord) -> None:
        if self._store is None:
            return
        if record.role == Role.ERROR:
            logger.debug("Skipping error record; error turns are not persisted")
            return
        try:
            self._insert(record)
        except WriteFailed as ex:
            logger.warning(f"Failed to persist {record.role} record for {record.session_id}: {ex}")

    async def scan_all(self) -> list[MessageRecord]:
        if self._store is None:
            return []
        try:
            cursor = self._store.execute(
                """
                SELECT id, session_id, timestamp, role, content, model
                FROM chat_records
                ORDER BY id ASC
                """
            )
            return [self._to_record(row) for row in cursor]
        except (sqlite3.Error, ValueError) as ex:
            logger.warning(f"Record scan failed: {ex}")
            return []

    def clear(self) -> None:
        if self._store is None:
            return
        try:
            self._store.execute("DELETE FROM chat_records")
            self._store.commit()
        except sqlite3.Error as ex:
            self._store.rollback()
            logger.warning(f"Failed to clear record store: {ex}")
            return
        logger.info("Record store cleared")

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def _connect(self) -> MemoryStore:
        if not self._db_path:
            raise StoreUnavailable("records are disabled")
        try:
            return MemoryStore(self._db_path)
        except (sqlite3.Error, OSError) as ex:
            raise StoreUnavailable(str(ex)) from ex

    def _insert(self, record: MessageRecord) -> None:
        assert self._store is not None
        try:
            cursor = self._store.execute(
                """
                INSERT INTO chat_records (session_id, timestamp, role, content, model)
                VALUES (?, ?, ?, ?, ?)
                """,
                (record.session_id, record.timestamp, str(record.role), record.content, record.model),
            )
            self._store.commit()
        except sqlite3.Error as ex:
            self._store.rollback()
            raise WriteFailed(str(ex)) from ex
        logger.debug(f"Persisted record {cursor.lastrowid} ({record.role}) for {record.session_id}")

    @staticmethod
    def _to_record(row: sqlite3.Row) -> MessageRecord:
        return MessageRecord(
            id=int(row["id"]),
            session_id=str(row["session_id"]),
            timestamp=int(row["timestamp"]),
            role=Role(row["role"]),
            content=str(row["content"]),
            model=str(row["model"]),
        )
