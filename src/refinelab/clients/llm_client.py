"""Async Claude client used by the AI feedback agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from refinelab.config import LLMConfig
from refinelab.utils.json_parser import extract_json

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Reply text plus token usage."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Claude Messages API wrapper with exponential-backoff retries and token accounting."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        model: str = LLMConfig.model,
        max_tokens: int = LLMConfig.max_tokens,
        max_retries: int = LLMConfig.max_retries,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self._usage: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @classmethod
    def from_config(cls, config: LLMConfig, api_key: str | None = None) -> LLMClient:
        return cls(
            api_key=api_key,
            timeout=config.timeout,
            model=config.model,
            max_tokens=config.max_tokens,
            max_retries=config.max_retries,
        )

    async def generate(
        self,
        prompt: str,
        system: str = "",
        temperature: float = 0.0,
    ) -> LLMResponse:
        kwargs: dict = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s, prompt=%d chars", self.model, len(prompt))
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(min=1, max=10),
                reraise=True,
            ):
                with attempt:
                    message = await self.client.messages.create(**kwargs)
        except Exception:
            logger.error("LLM call failed after %d attempts", self.max_retries, exc_info=True)
            raise

        usage = message.usage
        self._usage.append((self.model, usage.input_tokens, usage.output_tokens))
        logger.debug("LLM response: %d input, %d output tokens", usage.input_tokens, usage.output_tokens)
        return LLMResponse(
            text=message.content[0].text,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
        )

    async def generate_json(self, prompt: str, system: str = "") -> dict | list:
        """Send a prompt and parse JSON from the reply (ValueError if none)."""
        response = await self.generate(prompt, system=system)
        return extract_json(response.text)

    def usage_summary(self) -> dict:
        """Return accumulated token usage and reset it."""
        summary = {
            "input": sum(u[1] for u in self._usage),
            "output": sum(u[2] for u in self._usage),
            "calls": len(self._usage),
        }
        self._usage.clear()
        return summary
