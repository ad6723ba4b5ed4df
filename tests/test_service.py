from dataclasses import dataclass, replace
from decimal import Decimal

import pytest

from energy_petitions import (
    ConfigurationError,
    InputError,
    IntakePolicy,
    PetitionService,
    ProviderError,
    Settings,
    StaticLLMClient,
    to_result,
)
from energy_petitions.llm import PROVIDER_FAILURE
from energy_petitions.result import MISCONFIGURED

INTAKE = {
    "action-city-state": "Belo Horizonte/MG",
    "author-name": "Maria da Silva",
    "company-name": "Companhia Energética Exemplo S.A.",
    "problem-type": "power-cutoff",
    "cutoff-date": "02/04/2024",
    "urgent-decision": "sim",
}


@dataclass
class RaisingClient:
    error: Exception

    def generate(self, prompt: str) -> str:
        raise self.error


def test_success_returns_provider_text_verbatim():
    llm = StaticLLMClient(text="  Texto da petição.\n\nNestes termos,\n")
    service = PetitionService(llm)

    result = service.generate(INTAKE)

    assert result.status == 200
    assert result.ok
    assert result.to_payload() == {"text": "  Texto da petição.\n\nNestes termos,\n"}
    assert len(llm.prompts) == 1
    assert "Maria da Silva" in llm.prompts[0]
    assert "DA TUTELA DE URGÊNCIA" in llm.prompts[0]


def test_empty_payload_is_input_error_without_calling_provider():
    llm = StaticLLMClient(text="nunca")
    service = PetitionService(llm)

    result = service.generate({})

    assert result.status == 400
    assert result.error_code == "invalid_input"
    assert result.to_payload()["error"] == "Nenhum dado recebido do formulário."
    assert llm.prompts == []


def test_lenient_policy_composes_fully_defaulted_prompt():
    llm = StaticLLMClient(text="ok")
    service = PetitionService(llm, settings=Settings(intake_policy=IntakePolicy.LENIENT))

    result = service.generate({})

    assert result.status == 200
    assert "Não informado" in llm.prompts[0]


def test_strict_policy_needs_name_and_problem_type():
    service = PetitionService(StaticLLMClient(text="ok"), settings=Settings(intake_policy=IntakePolicy.STRICT))
    assert service.generate({"author-name": "Maria"}).status == 400
    assert service.generate({"author-name": "Maria", "problem-type": "other"}).status == 200


def test_missing_credential_is_reported_on_first_attempt():
    service = PetitionService.from_settings(Settings(api_key=None))

    result = service.generate(INTAKE)

    assert result.status == 500
    assert result.error_code == "server_misconfigured"
    assert result.text is None
    payload = result.to_payload()
    assert payload["error"] == MISCONFIGURED
    assert "details" not in payload


def test_provider_failure_keeps_upstream_detail():
    upstream = "API key not valid. Please pass a valid API key."
    service = PetitionService(RaisingClient(ProviderError(PROVIDER_FAILURE, detail=upstream)))

    result = service.generate(INTAKE)

    assert result.status == 502
    assert result.to_payload() == {"error": PROVIDER_FAILURE, "code": "generation_failed", "details": upstream}


def test_unexpected_error_is_classified():
    service = PetitionService(RaisingClient(RuntimeError("boom")))
    result = service.generate(INTAKE)
    assert result.status == 502
    assert result.error_code == "generation_failed"
    assert result.detail == "boom"


def test_moral_ceiling_setting_reaches_prompt():
    llm = StaticLLMClient(text="ok")
    settings = replace(Settings(), moral_ceiling=Decimal("7000.00"))
    service = PetitionService(llm, settings=settings)

    service.generate({"material-value": "R$ 300,00", "dano-moral-pergunta": "sim"})

    assert "Atribua à causa o valor de R$ 7.300,00." in llm.prompts[0]


def test_to_result_mapping():
    assert to_result("texto").to_payload() == {"text": "texto"}

    bad_input = to_result(InputError("Campos obrigatórios ausentes: author-name."))
    assert (bad_input.status, bad_input.error_code) == (400, "invalid_input")
    assert bad_input.message == "Campos obrigatórios ausentes: author-name."

    config = to_result(ConfigurationError("x", detail="GEMINI_API_KEY não definida"))
    assert (config.status, config.error_code) == (500, "server_misconfigured")
    assert config.detail is None

    provider = to_result(ProviderError("x", detail="quota"))
    assert (provider.status, provider.error_code, provider.message) == (502, "generation_failed", PROVIDER_FAILURE)
    assert provider.detail == "quota"


def test_settings_from_env_defaults():
    settings = Settings.from_env({})
    assert settings.api_key is None
    assert settings.model == "gemini-2.5-pro"
    assert settings.intake_policy is IntakePolicy.NON_EMPTY
    assert settings.moral_ceiling == Decimal("10000.00")
    assert settings.port == 10000


def test_settings_from_env_overrides():
    settings = Settings.from_env(
        {
            "API_KEY": "legacy",
            "GEMINI_API_KEY": "preferred",
            "GEMINI_MODEL": "gemini-2.5-flash",
            "GEMINI_TIMEOUT": "30",
            "INTAKE_POLICY": "STRICT",
            "MORAL_DAMAGES_CEILING": "R$ 15.000,00",
            "PORT": "8080",
        }
    )
    assert settings.api_key == "preferred"
    assert settings.model == "gemini-2.5-flash"
    assert settings.timeout == 30.0
    assert settings.intake_policy is IntakePolicy.STRICT
    assert settings.moral_ceiling == Decimal("15000.00")
    assert settings.port == 8080

    assert Settings.from_env({"API_KEY": "legacy"}).api_key == "legacy"


@pytest.mark.parametrize(
    "env",
    [
        {"GEMINI_TIMEOUT": "soon"},
        {"PORT": "http"},
        {"INTAKE_POLICY": "whatever"},
        {"MORAL_DAMAGES_CEILING": "muito"},
    ],
)
def test_settings_from_env_rejects_bad_values(env):
    with pytest.raises(ConfigurationError):
        Settings.from_env(env)


def test_oversized_amount_still_generates():
    llm = StaticLLMClient(text="ok")
    service = PetitionService(llm)

    result = service.generate({"material-value": "99999999999999999999999999,99", "dano-moral-pergunta": "sim"})

    assert result.status == 200
    assert "Atribua à causa o valor de R$ 10.000,00." in llm.prompts[0]
