import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx
from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    OpenAI,
)

from .errors import (
    AuthError,
    ConfigError,
    GenerationTimeoutError,
    MalformedResponseError,
    NetworkError,
    QuotaError,
    RateLimitError,
    RemoteServiceError,
)


logger = logging.getLogger("uvicorn.error")
DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_MODEL = "deepseek-chat"
PLACEHOLDER_API_KEY = "your-deepseek-api-key-here"
MAX_PROVIDER_ERROR_CHARS = 300


def _truncate(text: str, max_chars: int = MAX_PROVIDER_ERROR_CHARS) -> str:
    value = (text or "").strip()
    if len(value) <= max_chars:
        return value
    return value[: max_chars - 3] + "..."


@dataclass(frozen=True)
class LLMSettings:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


def load_llm_settings() -> LLMSettings:
    api_key = os.getenv("DEEPSEEK_API_KEY", "").strip()
    if api_key == PLACEHOLDER_API_KEY:
        api_key = ""
    return LLMSettings(
        api_key=api_key or None,
        base_url=os.getenv("DEEPSEEK_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        model=os.getenv("DEEPSEEK_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
    )


@dataclass(frozen=True)
class GenerationOptions:
    temperature: float = 0.7
    max_tokens: int = 4000
    json_mode: bool = False
    timeout_seconds: float = 60.0
    model: Optional[str] = None


class GenerationClient(Protocol):
    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        options: GenerationOptions,
    ) -> str:
        pass


def _extract_content(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        parts = []
        for item in value:
            if isinstance(item, dict):
                text = item.get("text")
                if text:
                    parts.append(str(text))
        return "\n".join(parts).strip()
    return str(value or "").strip()


def _status_error(exc: APIStatusError) -> Exception:
    status_code = exc.status_code
    detail = _truncate(getattr(exc, "message", "") or str(exc))
    if status_code == 401:
        return AuthError("Invalid API key for the generation service. Please check server configuration.")
    if status_code == 402:
        return QuotaError("Generation service quota exceeded. Please check billing.")
    if status_code == 429:
        return RateLimitError("Generation service rate limit exceeded. Please try again later.")
    return RemoteServiceError(f"Generation service error ({status_code}): {detail}")


class ChatGenerationClient:
    """Two-message chat completion against an OpenAI-compatible endpoint.

    Every provider failure is translated into the ``errors`` taxonomy. The
    SDK's own retries are switched off; retry policy belongs to the caller.
    """

    def __init__(self, settings: LLMSettings, http_client: Optional[httpx.Client] = None) -> None:
        if not settings.is_configured:
            raise ConfigError("Generation service is not configured. Set DEEPSEEK_API_KEY.")
        self._settings = settings
        self._client = OpenAI(
            base_url=settings.base_url,
            api_key=settings.api_key,
            max_retries=0,
            http_client=http_client,
        )

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        options: GenerationOptions,
    ) -> str:
        kwargs = {
            "model": options.model or self._settings.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "timeout": options.timeout_seconds,
        }
        if options.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**kwargs)
        except APIStatusError as exc:
            raise _status_error(exc) from exc
        except APITimeoutError as exc:
            raise GenerationTimeoutError(
                f"Generation service timed out after {int(options.timeout_seconds)} seconds."
            ) from exc
        except APIConnectionError as exc:
            raise NetworkError(
                "No response from the generation service. Please check connectivity."
            ) from exc
        except (APIError, ValueError) as exc:
            raise MalformedResponseError("Generation service returned an unreadable response.") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedResponseError("Generation service response did not contain choices.")
        message = getattr(choices[0], "message", None)
        content = _extract_content(getattr(message, "content", None))
        if not content:
            raise MalformedResponseError("Generation service returned empty content.")
        return content


def build_generation_client(settings: LLMSettings) -> Optional[ChatGenerationClient]:
    if not settings.is_configured:
        logger.warning("llm_client_unconfigured reason=missing DEEPSEEK_API_KEY")
        return None
    logger.info("llm_client_ready base_url=%s model=%s", settings.base_url, settings.model)
    return ChatGenerationClient(settings)
