from __future__ import annotations

from .errors import ConfigurationError, InputError, PetitionError, ProviderError
from .llm import PROVIDER_FAILURE
from .schema import PetitionResult

MISCONFIGURED = "Servidor mal configurado. Contate o administrador."


def to_result(outcome: str | PetitionError) -> PetitionResult:
    """Map a generation outcome onto the wire contract; provider text is passed through untouched."""
    if isinstance(outcome, str):
        return PetitionResult(status=200, text=outcome)
    if isinstance(outcome, InputError):
        return PetitionResult(status=400, error_code=outcome.code, message=outcome.message, detail=outcome.detail)
    if isinstance(outcome, ConfigurationError):
        # Operator detail stays in the logs.
        return PetitionResult(status=500, error_code=outcome.code, message=MISCONFIGURED)
    if isinstance(outcome, ProviderError):
        return PetitionResult(status=502, error_code=outcome.code, message=PROVIDER_FAILURE, detail=outcome.detail)
    return PetitionResult(status=500, error_code=outcome.code, message=PROVIDER_FAILURE, detail=outcome.detail)
