import shutil
import unittest
from pathlib import Path
from uuid import uuid4

from maxllm_chat.memory import ChatContext, KeyValueState


PROJECT_ROOT = Path(__file__).resolve().parents[2]


class FakeClock:
    """Millisecond clock that advances by ``step`` on every read."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


class ChatStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp_dir = PROJECT_ROOT / ".test-artifacts" / f"{self.__class__.__name__.lower()}-{uuid4().hex}"
        self._tmp_dir.mkdir(parents=True, exist_ok=True)
        self._clock = FakeClock()
        self._context = self.make_context()

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp_dir, ignore_errors=True)

    def make_context(self, *, records: bool = True) -> ChatContext:
        return ChatContext(
            state=KeyValueState(str(self._tmp_dir / "state.json")),
            records_db_path=str(self._tmp_dir / "records.db") if records else None,
            clock=self._clock,
        )
