from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from maxllm_chat.memory.context import DEFAULT_MODEL


@dataclass
class RuntimeEnv:
    openrouter_api_key: str
    provider_env_var: str


@dataclass
class AppConfig:
    model: str
    temperature: float
    max_tokens: int
    history_window: int
    token_budget: int
    state_path: str
    records_enabled: bool
    records_db_path: str
    log_level: str
    log_consumers: list | None


def load_json_config() -> dict:
    config_path = Path.cwd() / "config.json"
    if config_path.exists():
        with open(config_path) as f:
            return json.load(f)
    return {}


def _to_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return bool(value)


def parse_app_config(config: dict) -> AppConfig:
    return AppConfig(
        model=str(config.get("Model", DEFAULT_MODEL)).strip() or DEFAULT_MODEL,
        temperature=float(config.get("Temperature", 0.7)),
        max_tokens=int(config.get("MaxTokens", 2000)),
        history_window=int(config.get("HistoryWindow", 10)),
        token_budget=int(config.get("TokenBudget", 1000)),
        state_path=str(config.get("StatePath", ".maxllm/state.json")),
        records_enabled=_to_bool(config.get("RecordsEnabled", True), default=True),
        records_db_path=str(config.get("RecordsDbPath", ".maxllm/records.db")),
        log_level=config.get("LogLevel", "INFO"),
        log_consumers=config.get("LogConsumers"),
    )


def resolve_runtime_env() -> RuntimeEnv:
    return RuntimeEnv(
        openrouter_api_key=os.environ.get("OPENROUTER_API_KEY", ""),
        provider_env_var="OPENROUTER_API_KEY",
    )
