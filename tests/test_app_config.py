import unittest
from unittest.mock import patch

from maxllm_chat.app_config import parse_app_config, resolve_runtime_env
from maxllm_chat.memory import DEFAULT_MODEL


class AppConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        app = parse_app_config({})
        self.assertEqual(DEFAULT_MODEL, app.model)
        self.assertEqual(0.7, app.temperature)
        self.assertEqual(2000, app.max_tokens)
        self.assertEqual(10, app.history_window)
        self.assertEqual(1000, app.token_budget)
        self.assertTrue(app.records_enabled)
        self.assertEqual(".maxllm/records.db", app.records_db_path)
        self.assertEqual(".maxllm/state.json", app.state_path)
        self.assertIsNone(app.log_consumers)

    def test_overrides(self) -> None:
        app = parse_app_config(
            {
                "Model": "openai/gpt-4o-mini",
                "HistoryWindow": "4",
                "TokenBudget": 250,
                "RecordsEnabled": "off",
                "LogLevel": "DEBUG",
                "LogConsumers": [{"type": "console"}],
            }
        )
        self.assertEqual("openai/gpt-4o-mini", app.model)
        self.assertEqual(4, app.history_window)
        self.assertEqual(250, app.token_budget)
        self.assertFalse(app.records_enabled)
        self.assertEqual("DEBUG", app.log_level)
        self.assertEqual([{"type": "console"}], app.log_consumers)

    def test_blank_model_falls_back_to_default(self) -> None:
        self.assertEqual(DEFAULT_MODEL, parse_app_config({"Model": "  "}).model)

    def test_runtime_env_reads_openrouter_key(self) -> None:
        with patch.dict("os.environ", {"OPENROUTER_API_KEY": "sk-test"}):
            env = resolve_runtime_env()
        self.assertEqual("sk-test", env.openrouter_api_key)
        self.assertEqual("OPENROUTER_API_KEY", env.provider_env_var)


if __name__ == "__main__":
    unittest.main()
