from typing import Any, AsyncIterator

from openai import AsyncOpenAI
from prose_review.llm.llm_client import LLMClient


class OpenAIClient(LLMClient):
    def __init__(self, model_name: str, temperature: float = 0.25, max_tokens: int = 16384):
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        # Liest OPENAI_API_KEY automatisch aus der Umgebung
        self.client = AsyncOpenAI()

    async def stream(
        self, system_prompt: str, user_prompt: str, **kwargs: Any
    ) -> AsyncIterator[str]:
        response = await self.client.chat.completions.create(
            model=kwargs.get("model", self.model_name),
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=kwargs.get("temperature", self.temperature),
            max_tokens=kwargs.get("max_tokens", self.max_tokens),
            stream=True,
        )

        try:
            async for chunk in response:
                if not chunk.choices:
                    continue
                text = chunk.choices[0].delta.content
                if text:
                    yield text
        finally:
            # auch bei aclose() (Abbruch) die HTTP-Verbindung sofort freigeben
            await response.close()
