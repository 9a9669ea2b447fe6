from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from openai import APIStatusError, OpenAI, OpenAIError

from careermatch.config import Settings
from careermatch.errors import InvalidModelOutput, UpstreamError
from careermatch.types import ModelResponse

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProviderConfig:
    name: str
    base_url: str
    api_key: str
    timeout_sec: int


class LLMProvider:
    def __init__(self, config: ProviderConfig):
        self.config = config
        self.client = OpenAI(
            base_url=config.base_url,
            api_key=config.api_key or "unset",
            timeout=float(config.timeout_sec),
            max_retries=0,
        )

    def complete_chat(
        self,
        *,
        model: str,
        system: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> ModelResponse:
        if not self.config.api_key:
            raise UpstreamError("OpenAI API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except APIStatusError as exc:
            logger.error(
                "Chat completion failed provider=%s status=%s body=%s",
                self.config.name,
                exc.status_code,
                exc.message,
            )
            raise UpstreamError(f"OpenAI API error: {exc.status_code}") from exc
        except OpenAIError as exc:
            logger.error("Chat completion unreachable provider=%s error=%s", self.config.name, exc)
            raise UpstreamError(f"OpenAI API unavailable: {exc}") from exc

        text = self._extract_chat_text(response)
        raw = response.model_dump() if hasattr(response, "model_dump") else {}
        if not isinstance(raw, dict):
            raw = {"raw": raw}
        return ModelResponse(content=text, raw=raw)

    @staticmethod
    def _extract_chat_text(response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""

        message = getattr(choices[0], "message", None)
        if message is None:
            return ""

        content = getattr(message, "content", "")
        if isinstance(content, str):
            return content
        if content is None:
            return ""
        return str(content)


def parse_json_array(content: str) -> list[Any]:
    candidate = content.strip()
    if not candidate:
        raise InvalidModelOutput("Invalid AI response format: empty completion")

    if "```" in candidate:
        parts = candidate.split("```")
        for part in parts:
            part = part.strip()
            if part.startswith("json"):
                part = part[4:].strip()
            if part.startswith("[") and part.endswith("]"):
                candidate = part
                break

    try:
        value = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse JSON model output: %s", candidate[:500])
        raise InvalidModelOutput("Invalid AI response format") from exc

    if not isinstance(value, list):
        logger.warning("Model output is %s, expected a JSON array", type(value).__name__)
        raise InvalidModelOutput("Invalid AI response format: expected a JSON array")
    return value


def build_provider(settings: Settings) -> LLMProvider:
    return LLMProvider(
        ProviderConfig(
            name="openai",
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            timeout_sec=settings.openai_timeout_sec,
        )
    )
