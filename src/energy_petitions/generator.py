from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import structlog

from .composer import compose
from .config import Settings
from .errors import ConfigurationError, PetitionError, ProviderError
from .llm import PROVIDER_FAILURE, GeminiClient, LLMClient
from .normalizer import normalize
from .planner import plan
from .result import to_result
from .schema import PetitionResult

logger = structlog.get_logger()


@dataclass
class PetitionService:
    llm_client: LLMClient | None
    settings: Settings = field(default_factory=Settings)
    config_error: ConfigurationError | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PetitionService":
        try:
            client = GeminiClient.from_settings(settings)
        except ConfigurationError as exc:
            logger.error("config.provider_unavailable", reason=exc.detail)
            return cls(llm_client=None, settings=settings, config_error=exc)
        logger.info("config.provider_ready", model=settings.model)
        return cls(llm_client=client, settings=settings)

    def build_prompt(self, raw: Mapping[str, Any] | None) -> str:
        case = normalize(raw, policy=self.settings.intake_policy)
        sections = plan(case)
        logger.debug(
            "petition.planned",
            problem_type=case.problem_type,
            urgent_relief=sections.include_urgent_relief,
            material=sections.include_material_damages,
            moral=sections.include_moral_damages,
            debt_nullity=sections.include_debt_nullity,
        )
        return compose(case, sections, moral_ceiling=self.settings.moral_ceiling)

    def _client(self) -> LLMClient:
        if self.llm_client is None:
            raise self.config_error or ConfigurationError("Servidor mal configurado.")
        return self.llm_client

    def generate(self, raw: Mapping[str, Any] | None) -> PetitionResult:
        try:
            prompt = self.build_prompt(raw)
            text = self._client().generate(prompt)
        except PetitionError as exc:
            logger.warning("petition.failed", code=exc.code, message=exc.message, detail=exc.detail)
            return to_result(exc)
        except Exception as exc:
            logger.exception("petition.unexpected_error")
            return to_result(ProviderError(PROVIDER_FAILURE, detail=str(exc)))
        logger.info("petition.generated", chars=len(text))
        return to_result(text)
