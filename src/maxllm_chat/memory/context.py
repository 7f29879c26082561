from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from maxllm_chat.memory.kv_state import KeyValueState

DEFAULT_MODEL = "deepseek/deepseek-r1:free"


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class ChatContext:
    """Shared handles passed to every conversation component."""

    state: KeyValueState
    records_db_path: str | None = None
    default_model: str = DEFAULT_MODEL
    clock: Callable[[], int] = field(default=epoch_millis)
