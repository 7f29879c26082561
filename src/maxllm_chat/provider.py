from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    async def complete(self, model: str, messages: list[dict]) -> str:
        """Send the full message list and return the assistant's reply text."""
        ...


def create_provider(
    provider_name: str,
    api_key: str,
    *,
    temperature: float = 0.7,
    max_tokens: int = 2000,
) -> CompletionProvider:
    """Factory: create a CompletionProvider by name."""
    name = provider_name.strip().lower()
    if name == "openrouter":
        from maxllm_chat.providers.openrouter_provider import OpenRouterProvider
        return OpenRouterProvider(api_key, temperature=temperature, max_tokens=max_tokens)
    raise ValueError(f"Unknown provider: {provider_name!r}. Supported: 'openrouter'")
