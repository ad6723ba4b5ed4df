from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
import orjson
import structlog

from .config import DEFAULT_BASE_URL, DEFAULT_MODEL, Settings
from .errors import ConfigurationError, ProviderError

logger = structlog.get_logger()

PROVIDER_FAILURE = "Falha ao gerar a petição no servidor."


class LLMClient(Protocol):
    def generate(self, prompt: str) -> str:
        ...


def _upstream_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        if message:
            return message
    return resp.text


def _extract_text(data: Any) -> str:
    if not isinstance(data, dict):
        raise ProviderError(PROVIDER_FAILURE, detail=f"Resposta inesperada do Gemini: {orjson.dumps(data).decode()}")
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback")
        detail = f"Nenhum candidato retornado: {orjson.dumps(feedback or data).decode()}"
        raise ProviderError(PROVIDER_FAILURE, detail=detail)
    first = candidates[0] or {}
    parts = (first.get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    if not text:
        reason = first.get("finishReason", "UNKNOWN")
        raise ProviderError(PROVIDER_FAILURE, detail=f"Resposta vazia do Gemini (finishReason={reason})")
    return text


@dataclass
class GeminiClient:
    """
    Blocking client for the Gemini ``generateContent`` REST endpoint.

    One request per call, no retries and no streaming.
    """

    api_key: str | None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 120.0
    temperature: float = 0.4
    max_output_tokens: int = 8192
    transport: httpx.BaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "Servidor mal configurado.",
                detail="Credencial do provedor de geração ausente.",
            )

    def __repr__(self) -> str:
        return f"GeminiClient(model={self.model!r}, base_url={self.base_url!r})"

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.BaseTransport | None = None) -> "GeminiClient":
        return cls(
            api_key=settings.require_api_key(),
            model=settings.model,
            base_url=settings.base_url,
            timeout=settings.timeout,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(self.endpoint, content=orjson.dumps(payload), headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("llm.request_failed", model=self.model, error=str(exc))
            raise ProviderError(PROVIDER_FAILURE, detail=str(exc)) from exc

        if resp.status_code != 200:
            detail = _upstream_message(resp)
            logger.warning("llm.bad_status", model=self.model, status=resp.status_code)
            raise ProviderError(PROVIDER_FAILURE, detail=detail, status_code=resp.status_code)

        try:
            data = orjson.loads(resp.content)
        except orjson.JSONDecodeError as exc:
            raise ProviderError(PROVIDER_FAILURE, detail=f"Resposta não-JSON do Gemini: {resp.text}") from exc

        text = _extract_text(data)
        logger.info("llm.generated", model=self.model, chars=len(text))
        return text


@dataclass
class StaticLLMClient:
    """
    Test/deterministic client.
    """

    text: str
    prompts: list[str] = field(default_factory=list)

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text
