"""Decoder client abstractions and implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Any

from fastapi import Depends
from openai import AsyncOpenAI

from storefront.config import settings


class DecoderClient(ABC):
    """Abstract decoder interface for text generation models."""

    @abstractmethod
    async def decode(self, prompt: str, *, system: str | None = None) -> str:
        """Return the completion for ``prompt`` under an optional system prompt."""


class OpenAIDecoderClient(DecoderClient):
    """Decoder backed by an OpenAI-compatible Chat Completions endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("OpenAI API key is required to initialize decoder client")
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url or None)
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def decode(self, prompt: str, *, system: str | None = None) -> str:
        messages: list[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        options: dict[str, Any] = {}
        if self._max_tokens is not None:
            options["max_tokens"] = self._max_tokens
        if self._temperature is not None:
            options["temperature"] = self._temperature

        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            **options,
        )

        if getattr(completion, "choices", None):
            message = completion.choices[0].message
            content = getattr(message, "content", None)
            if isinstance(content, list):
                # Some compatible providers return list-based content payloads
                text_chunks = (
                    part.get("text", "") for part in content if isinstance(part, dict)
                )
                return "".join(text_chunks)
            if content:
                return content

        return ""


_decoder_client: DecoderClient | None = None


def _initialize_decoder() -> DecoderClient | None:
    if not settings.OPENAI_API_KEY:
        return None
    return OpenAIDecoderClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
        max_tokens=settings.CHAT_MAX_TOKENS,
        temperature=settings.CHAT_TEMPERATURE,
    )


_decoder_client = _initialize_decoder()


def get_decoder_client() -> DecoderClient | None:
    """FastAPI dependency to obtain the configured decoder client if available."""

    return _decoder_client


DecoderDependency = Annotated[DecoderClient | None, Depends(get_decoder_client)]
