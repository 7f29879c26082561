import asyncio
import io
import json
from contextlib import redirect_stdout

import openai

from maxllm_chat.context_window import ContextWindowBuilder
from maxllm_chat.conversation import Conversation
from maxllm_chat.shell import ChatShell
from maxllm_chat.system_prompt import get_system_prompt
from tests.memory.base import ChatStoreTestCase


class _FakeProvider:
    def __init__(self, reply: str = "hello there", error: Exception | None = None) -> None:
        self._reply = reply
        self._error = error
        self.calls: list[tuple[str, list[dict]]] = []

    async def complete(self, model: str, messages: list[dict]) -> str:
        self.calls.append((model, messages))
        if self._error is not None:
            raise self._error
        return self._reply


class ChatShellTests(ChatStoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._conversation = Conversation(self._context, ContextWindowBuilder(get_system_prompt()))
        asyncio.run(self._conversation.open())
        self._provider = _FakeProvider()
        self._shell = ChatShell(self._conversation, self._provider, show_spinner=False)

    def tearDown(self) -> None:
        self._conversation.close()
        super().tearDown()

    def _run(self, *inputs: str) -> str:
        buf = io.StringIO()
        with redirect_stdout(buf):
            for text in inputs:
                asyncio.run(self._shell.run(text))
        return buf.getvalue()

    def test_chat_turn_records_user_and_reply(self) -> None:
        out = self._run("hi")
        self.assertIn("assistant> hello there", out)
        self.assertEqual(
            [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello there"}],
            self._conversation.live_history,
        )
        model, messages = self._provider.calls[0]
        self.assertEqual(self._conversation.current_model, model)
        self.assertEqual(["system", "user"], [m["role"] for m in messages])

    def test_provider_failure_keeps_only_user_turn(self) -> None:
        self._provider = _FakeProvider(error=openai.OpenAIError("rate limited"))
        self._shell = ChatShell(self._conversation, self._provider, show_spinner=False)
        out = self._run("hi")
        self.assertIn("Error: rate limited", out)
        self.assertEqual([{"role": "user", "content": "hi"}], self._conversation.live_history)

    def test_too_long_message_is_not_sent(self) -> None:
        out = self._run("x" * 5000)
        self.assertIn("Conversation too long", out)
        self.assertIn("/clear", out)
        self.assertEqual([], self._provider.calls)
        self.assertEqual([], self._conversation.live_history)

    def test_help_lists_commands(self) -> None:
        out = self._run("/help")
        for command in ("/clear", "/history", "/model [model_id]", "/export [path]"):
            self.assertIn(command, out)

    def test_unknown_command(self) -> None:
        out = self._run("/bogus")
        self.assertIn("Unknown local command: /bogus", out)
        self.assertEqual([], self._provider.calls)

    def test_model_show_and_set(self) -> None:
        out = self._run("/model", "/model openai/gpt-4o-mini")
        self.assertIn("Current model: deepseek/deepseek-r1:free", out)
        self.assertIn("Model set to openai/gpt-4o-mini", out)
        self.assertEqual("openai/gpt-4o-mini", self._conversation.current_model)

    def test_clear_starts_new_session(self) -> None:
        self._run("hi")
        old_session = self._conversation.session_id
        out = self._run("/clear")
        self.assertIn("Conversation cleared", out)
        self.assertNotEqual(old_session, self._conversation.session_id)
        self.assertEqual([], self._conversation.live_history)

    def test_history_prints_sessions(self) -> None:
        out = self._run("/history")
        self.assertIn("No records yet.", out)

        self._run("hi")
        out = self._run("/history")
        self.assertIn(self._conversation.session_id, out)
        self.assertIn("[user]", out)
        self.assertIn("[assistant]", out)
        self.assertIn("hello there", out)

    def test_history_unavailable_without_store(self) -> None:
        conversation = Conversation(self.make_context(records=False), ContextWindowBuilder(get_system_prompt()))
        asyncio.run(conversation.open())
        shell = ChatShell(conversation, self._provider, show_spinner=False)
        buf = io.StringIO()
        with redirect_stdout(buf):
            asyncio.run(shell.run("/history"))
        self.assertIn("History unavailable", buf.getvalue())

    def test_export_writes_json(self) -> None:
        self._run("hi")
        target = self._tmp_dir / "exports" / "chat.json"
        out = self._run(f"/export {target}")
        self.assertIn("Exported 2 message(s)", out)
        data = json.loads(target.read_text(encoding="utf-8"))
        self.assertEqual(self._conversation.current_model, data["model"])
        self.assertEqual(self._conversation.live_history, data["messages"])
        self.assertIn("timestamp", data)
