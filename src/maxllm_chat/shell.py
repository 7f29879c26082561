from __future__ import annotations

import asyncio
import json
from datetime import date
from pathlib import Path

import openai
from loguru import logger

from maxllm_chat.commands.router import CommandRouter
from maxllm_chat.conversation import Conversation
from maxllm_chat.errors import Rejected
from maxllm_chat.memory import Role
from maxllm_chat.provider import CompletionProvider
from maxllm_chat.services.history_printer import HistoryPrinter
from maxllm_chat.spinner import loading


class ChatShell:
    _LINE_PREFIX = "assistant> "

    def __init__(
        self,
        conversation: Conversation,
        provider: CompletionProvider,
        *,
        show_spinner: bool = True,
    ):
        self._conversation = conversation
        self._provider = provider
        self._show_spinner = show_spinner
        self._history_printer = HistoryPrinter(line_prefix=self._LINE_PREFIX)
        self._run_lock = asyncio.Lock()
        self._command_router = CommandRouter(
            on_help=self._on_help,
            on_clear=self._handle_clear_command,
            on_history=self._handle_history_command,
            on_model=self._handle_model_command,
            on_export=self._handle_export_command,
            on_unknown=self._on_unknown_command,
        )

    def print_restored_history(self) -> None:
        for message in self._conversation.live_history:
            prefix = "you> " if message["role"] == Role.USER else self._LINE_PREFIX
            print(f"{prefix}{message['content']}")

    async def run(self, user_message: str) -> None:
        async with self._run_lock:
            if await self._command_router.try_handle(user_message):
                return
            await self._send(user_message.strip())

    async def _send(self, user_message: str) -> None:
        outgoing = self._conversation.build_outgoing_messages(user_message)
        if isinstance(outgoing, Rejected):
            print(
                f"{self._LINE_PREFIX}Conversation too long (~{outgoing.estimated_tokens:,} tokens, "
                f"limit {outgoing.budget:,}). Use /clear to start a new conversation."
            )
            return

        self._conversation.append_turn(Role.USER, user_message)
        try:
            with loading(prefix=self._LINE_PREFIX, enabled=self._show_spinner):
                reply = await self._provider.complete(self._conversation.current_model, outgoing)
        except openai.OpenAIError as ex:
            logger.warning(f"Completion request failed: {ex}")
            message = f"Error: {ex}"
            self._conversation.append_turn(Role.ERROR, message)
            print(f"{self._LINE_PREFIX}{message}")
            return

        self._conversation.append_turn(Role.ASSISTANT, reply)
        print(f"{self._LINE_PREFIX}{reply}")

    async def _on_help(self) -> None:
        print(f"{self._LINE_PREFIX}Local commands:")
        print(f"{self._LINE_PREFIX}- /help")
        print(f"{self._LINE_PREFIX}- /clear")
        print(f"{self._LINE_PREFIX}- /history")
        print(f"{self._LINE_PREFIX}- /model [model_id]")
        print(f"{self._LINE_PREFIX}- /export [path]")

    async def _handle_clear_command(self) -> None:
        self._conversation.reset_conversation()
        print(f"{self._LINE_PREFIX}Conversation cleared. New session: {self._conversation.session_id}")

    async def _handle_history_command(self) -> None:
        if not self._conversation.records_available:
            print(f"{self._LINE_PREFIX}History unavailable (database not initialized).")
            return
        sessions = await self._conversation.list_session_history()
        for line in self._history_printer.format_history_lines(sessions):
            print(line)

    async def _handle_model_command(self, command: str) -> None:
        parts = command.split(maxsplit=1)
        if len(parts) == 1:
            print(f"{self._LINE_PREFIX}Current model: {self._conversation.current_model}")
            return
        self._conversation.set_current_model(parts[1].strip())
        print(f"{self._LINE_PREFIX}Model set to {self._conversation.current_model}")

    async def _handle_export_command(self, command: str) -> None:
        parts = command.split(maxsplit=1)
        if len(parts) == 2:
            path = Path(parts[1].strip())
        else:
            path = Path.cwd() / f"maxllm-chat-{date.today().isoformat()}.json"
        data = self._conversation.export_conversation()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as ex:
            print(f"{self._LINE_PREFIX}Export failed: {ex}")
            return
        print(f"{self._LINE_PREFIX}Exported {len(data['messages'])} message(s) to {path}")

    def _on_unknown_command(self, command: str) -> None:
        print(f"{self._LINE_PREFIX}Unknown local command: {command}. Type /help for commands.")
