from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from .composer import DEFAULT_MORAL_CEILING
from .currency import parse_brl
from .errors import ConfigurationError
from .normalizer import IntakePolicy

DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at start-up."""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 120.0
    temperature: float = 0.4
    max_output_tokens: int = 8192
    intake_policy: IntakePolicy = IntakePolicy.NON_EMPTY
    moral_ceiling: Decimal = DEFAULT_MORAL_CEILING
    port: int = 10000
    log_level: str = "INFO"

    def __repr__(self) -> str:
        key = "set" if self.api_key else "missing"
        return f"Settings(model={self.model!r}, api_key={key}, intake_policy={self.intake_policy.value!r})"

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(
                "Servidor mal configurado.",
                detail="GEMINI_API_KEY (ou API_KEY) não definida no ambiente.",
            )
        return self.api_key

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        def number(key: str, default, cast):
            raw = env.get(key)
            if raw is None or not raw.strip():
                return default
            try:
                return cast(raw.strip())
            except ValueError as exc:
                raise ConfigurationError(f"Valor inválido para {key}: {raw!r}") from exc

        policy_raw = env.get("INTAKE_POLICY", IntakePolicy.NON_EMPTY.value).strip().lower()
        try:
            policy = IntakePolicy(policy_raw)
        except ValueError as exc:
            raise ConfigurationError(f"Valor inválido para INTAKE_POLICY: {policy_raw!r}") from exc

        ceiling = DEFAULT_MORAL_CEILING
        if env.get("MORAL_DAMAGES_CEILING"):
            ceiling = parse_brl(env["MORAL_DAMAGES_CEILING"])
            if ceiling is None or ceiling < 0:
                raise ConfigurationError(
                    f"Valor inválido para MORAL_DAMAGES_CEILING: {env['MORAL_DAMAGES_CEILING']!r}"
                )

        api_key = (env.get("GEMINI_API_KEY") or env.get("API_KEY") or "").strip() or None

        return cls(
            api_key=api_key,
            model=(env.get("GEMINI_MODEL") or DEFAULT_MODEL).strip(),
            base_url=(env.get("GEMINI_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            timeout=number("GEMINI_TIMEOUT", 120.0, float),
            temperature=number("GEMINI_TEMPERATURE", 0.4, float),
            max_output_tokens=number("GEMINI_MAX_OUTPUT_TOKENS", 8192, int),
            intake_policy=policy,
            moral_ceiling=ceiling,
            port=number("PORT", 10000, int),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
