import asyncio
import sys

from dotenv import load_dotenv
from loguru import logger

from maxllm_chat.app_config import load_json_config, parse_app_config, resolve_runtime_env
from maxllm_chat.bootstrap import bootstrap_runtime, start_runtime


async def main() -> None:
    load_dotenv()

    app = parse_app_config(load_json_config())
    env = resolve_runtime_env()
    if not env.openrouter_api_key:
        logger.error(f"{env.provider_env_var} environment variable is required.")
        sys.exit(1)

    runtime = bootstrap_runtime(app, env)
    conversation = runtime.conversation

    print("maxLLM chat (type 'exit' to quit, '/help' for commands)")
    print(f"Model: {conversation.current_model}")
    print(f"Session: {conversation.session_id}")
    if runtime.log_descriptions:
        print(f"Logging: {', '.join(runtime.log_descriptions)}")
    print()

    await start_runtime(runtime)
    if not conversation.records_available:
        print("History: unavailable (records will not be persisted)")
        print()

    try:
        while True:
            try:
                user_input = input("you> ")
            except (EOFError, KeyboardInterrupt):
                break

            trimmed = user_input.strip()

            if trimmed in ("exit", "quit"):
                break

            if not trimmed:
                continue

            try:
                await runtime.shell.run(trimmed)
                print()
            except Exception as ex:
                logger.error(f"Unhandled error: {ex}")
    finally:
        conversation.close()


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
