"""OpenAI chat completions client for short text answers."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_lookup.services.estimator import CompletionClient


@dataclass
class OpenAIChatClient(CompletionClient):
    """Completion client backed by the OpenAI chat completions API."""

    client: AsyncOpenAI
    timeout_seconds: float = 15

    @classmethod
    def create(cls, api_key: str) -> "OpenAIChatClient":
        """Create an OpenAI chat client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(self, *, model: str, prompt: str, temperature: float) -> str:
        """Send a single user message and return the reply text."""
        response = await self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=16,
            timeout=self.timeout_seconds,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("OpenAI returned an empty response")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
