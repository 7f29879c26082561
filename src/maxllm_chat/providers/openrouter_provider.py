import openai
from loguru import logger

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

_DEFAULT_HEADERS = {"X-Title": "maxLLM Chatbot"}


class OpenRouterProvider:
    def __init__(self, api_key: str, *, temperature: float = 0.7, max_tokens: int = 2000):
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            default_headers=_DEFAULT_HEADERS,
        )
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def complete(self, model: str, messages: list[dict]) -> str:
        logger.debug(f"API request: model={model}, messages={len(messages)}")
        response = await self._client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        if not response.choices:
            raise openai.OpenAIError("API request failed: response contained no choices")
        text = response.choices[0].message.content or ""
        logger.debug(f"API response: finish_reason={response.choices[0].finish_reason}, len={len(text)}")
        return text
