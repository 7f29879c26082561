import math

from loguru import logger

from maxllm_chat.errors import Rejected
from maxllm_chat.memory.models import Role


def estimate_size(messages: list[dict]) -> int:
    """Rough token estimate: ~4 characters per token. Returns 0 on malformed input."""
    try:
        total_chars = sum(len(m.get("content") or "") for m in messages)
    except (TypeError, AttributeError):
        return 0
    return math.ceil(total_chars / 4)


class ContextWindowBuilder:
    def __init__(
        self,
        system_prompt: str,
        history_window: int = 10,
        token_budget: int = 1000,
    ):
        self._system_prompt = system_prompt
        self._history_window = max(0, history_window)
        self._token_budget = token_budget

    def build(self, live_history: list[dict], new_user_content: str) -> list[dict]:
        turns = [
            {"role": m["role"], "content": m["content"]}
            for m in live_history
            if m.get("role") != Role.ERROR
        ]
        recent = turns[-self._history_window:] if self._history_window else []
        return [
            {"role": "system", "content": self._system_prompt},
            *recent,
            {"role": "user", "content": new_user_content},
        ]

    def check(self, messages: list[dict]) -> Rejected | None:
        estimated = estimate_size(messages)
        if estimated > self._token_budget:
            logger.info(
                f"Context window rejected: estimated ~{estimated:,} tokens, budget {self._token_budget:,}"
            )
            return Rejected(estimated_tokens=estimated, budget=self._token_budget)
        return None
