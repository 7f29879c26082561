def get_system_prompt() -> str:
    return "You are maxLLM, a helpful and friendly AI assistant."
