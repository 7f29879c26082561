from __future__ import annotations

from dataclasses import dataclass


class StoreError(Exception):
    """Base class for record store failures. Never raised past the store."""


class StoreUnavailable(StoreError):
    pass


class WriteFailed(StoreError):
    pass


class SnapshotCorrupt(ValueError):
    pass


@dataclass(frozen=True)
class Rejected:
    """Outcome of a turn whose context window exceeds the token budget.

    Returned instead of the outgoing messages; the caller asks the user to
    clear the conversation.
    """

    estimated_tokens: int
    budget: int
    reason: str = "too-long"
