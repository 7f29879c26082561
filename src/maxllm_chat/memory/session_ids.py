from __future__ import annotations

from loguru import logger

from maxllm_chat.memory.context import ChatContext

SESSION_ID_KEY = "maxllm_session_id"


class SessionIdAuthority:
    def __init__(self, context: ChatContext):
        self._state = context.state
        self._clock = context.clock

    def current_id(self) -> str:
        return self.rotate(force=False)

    def rotate(self, force: bool = False) -> str:
        existing = self._state.get_item(SESSION_ID_KEY)
        if existing and not force:
            return existing

        base = f"session-{self._clock()}"
        new_id = base
        if existing and (existing == base or existing.startswith(f"{base}-")):
            # Same millisecond as the id being replaced: bump its counter.
            counter = existing[len(base) + 1:]
            new_id = f"{base}-{int(counter) + 1 if counter.isdigit() else 1}"

        self._state.set_item(SESSION_ID_KEY, new_id)
        logger.info(f"Started session {new_id}")
        return new_id
