from __future__ import annotations


class PetitionError(Exception):
    """Base class for every classified pipeline failure."""

    code = "petition_error"

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InputError(PetitionError):
    """Payload missing, empty or below the configured completeness policy."""

    code = "invalid_input"


class ConfigurationError(PetitionError):
    """Operator-side problem, e.g. the provider credential is absent."""

    code = "server_misconfigured"


class ProviderError(PetitionError):
    """Any failure reported by the generative-text provider.

    ``detail`` carries the upstream message verbatim.
    """

    code = "generation_failed"

    def __init__(self, message: str, detail: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, detail=detail)
        self.status_code = status_code
