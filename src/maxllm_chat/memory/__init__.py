from maxllm_chat.memory.context import DEFAULT_MODEL, ChatContext
from maxllm_chat.memory.history import HistoryReconstructor
from maxllm_chat.memory.kv_state import KeyValueState
from maxllm_chat.memory.models import MessageRecord, Role, SessionView, Snapshot
from maxllm_chat.memory.record_store import ChatRecordStore
from maxllm_chat.memory.session_ids import SessionIdAuthority
from maxllm_chat.memory.snapshot import SnapshotCache
from maxllm_chat.memory.store import MemoryStore

__all__ = [
    "DEFAULT_MODEL",
    "ChatContext",
    "ChatRecordStore",
    "HistoryReconstructor",
    "KeyValueState",
    "MemoryStore",
    "MessageRecord",
    "Role",
    "SessionIdAuthority",
    "SessionView",
    "Snapshot",
    "SnapshotCache",
]
