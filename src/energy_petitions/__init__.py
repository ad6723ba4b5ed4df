"""
Initial-petition generation for consumer disputes with electric utilities.

Pipeline: normalize -> plan -> compose -> generate -> to_result.
"""

from .composer import compose
from .config import Settings
from .errors import ConfigurationError, InputError, PetitionError, ProviderError
from .generator import PetitionService
from .llm import GeminiClient, LLMClient, StaticLLMClient
from .normalizer import IntakePolicy, normalize, problem_type_label
from .planner import plan
from .result import to_result
from .schema import IntakeForm, NormalizedCase, PetitionResult, ProblemType, SectionPlan

__all__ = [
    "compose",
    "Settings",
    "ConfigurationError",
    "InputError",
    "PetitionError",
    "ProviderError",
    "PetitionService",
    "GeminiClient",
    "LLMClient",
    "StaticLLMClient",
    "IntakePolicy",
    "normalize",
    "problem_type_label",
    "plan",
    "to_result",
    "IntakeForm",
    "NormalizedCase",
    "PetitionResult",
    "ProblemType",
    "SectionPlan",
]
