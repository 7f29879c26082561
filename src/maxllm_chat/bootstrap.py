from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from maxllm_chat.app_config import AppConfig, RuntimeEnv
from maxllm_chat.context_window import ContextWindowBuilder
from maxllm_chat.conversation import Conversation
from maxllm_chat.logging_config import setup_logging
from maxllm_chat.memory import ChatContext, KeyValueState
from maxllm_chat.provider import create_provider
from maxllm_chat.shell import ChatShell
from maxllm_chat.system_prompt import get_system_prompt


@dataclass
class AppRuntime:
    shell: ChatShell
    conversation: Conversation
    restored: bool
    log_descriptions: list[str]


def _resolve_path(path: str) -> str:
    resolved = Path(path)
    if not resolved.is_absolute():
        resolved = Path.cwd() / resolved
    return str(resolved)


def build_context(app: AppConfig) -> ChatContext:
    return ChatContext(
        state=KeyValueState(_resolve_path(app.state_path)),
        records_db_path=_resolve_path(app.records_db_path) if app.records_enabled else None,
        default_model=app.model,
    )


def bootstrap_runtime(app: AppConfig, env: RuntimeEnv) -> AppRuntime:
    """Wire the runtime and restore the snapshot. The record store is left unopened."""
    log_descriptions = setup_logging(level=app.log_level, consumers=app.log_consumers)

    conversation = Conversation(
        build_context(app),
        ContextWindowBuilder(
            get_system_prompt(),
            history_window=app.history_window,
            token_budget=app.token_budget,
        ),
    )
    restored = conversation.restore()

    provider = create_provider(
        "openrouter",
        env.openrouter_api_key,
        temperature=app.temperature,
        max_tokens=app.max_tokens,
    )

    return AppRuntime(
        shell=ChatShell(conversation, provider),
        conversation=conversation,
        restored=restored,
        log_descriptions=log_descriptions,
    )


async def start_runtime(runtime: AppRuntime) -> None:
    # Restored history goes on screen before the record store is opened.
    if runtime.restored:
        runtime.shell.print_restored_history()
        print()
    await runtime.conversation.open()
