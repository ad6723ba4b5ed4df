from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional, Tuple, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator


ProblemType = Literal[
    "power-cutoff",
    "voltage-damage",
    "improper-fine",
    "connection-refusal",
    "improper-billing",
    "other",
]

PROBLEM_TYPES: Tuple[str, ...] = get_args(ProblemType)


def _to_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, bool)):
        return None
    if isinstance(value, (list, tuple)):
        parts = [_to_text(v) for v in value]
        joined = ", ".join(p for p in parts if p)
        return joined or None
    text = str(value).strip()
    return text or None


class IntakeForm(BaseModel):
    """
    Intake form as posted by the front-end (kebab-case keys).

    Every recognized key is declared here; anything else is dropped.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=lambda name: name.replace("_", "-"),
    )

    action_city_state: Optional[str] = None

    author_name: Optional[str] = None
    author_cpf: Optional[str] = None
    author_address: Optional[str] = None
    author_contact: Optional[str] = None

    company_name: Optional[str] = None
    company_cnpj: Optional[str] = None
    company_address: Optional[str] = None
    company_details: Optional[str] = Field(default=None, description="CNPJ e endereço num só campo")

    problem_type: Optional[str] = None
    customer_number: Optional[str] = Field(default=None, description="Unidade consumidora")
    protocol_numbers: Optional[str] = None

    cutoff_date: Optional[str] = None
    cutoff_notice: Optional[str] = None
    cutoff_reason: Optional[str] = None
    reconnection_date: Optional[str] = None

    damage_date: Optional[str] = None
    damaged_equipment: Optional[str] = None
    repair_cost: Optional[str] = None
    damage_claim_protocol: Optional[str] = None

    fine_date: Optional[str] = None
    fine_amount: Optional[str] = None
    fine_reason: Optional[str] = None
    inspection_present: Optional[str] = None

    connection_request_date: Optional[str] = None
    refusal_reason: Optional[str] = None
    connection_deadline: Optional[str] = None

    bill_period: Optional[str] = None
    billed_amount: Optional[str] = None
    usual_amount: Optional[str] = None

    other_description: Optional[str] = None
    facts_summary: Optional[str] = None

    evidence: Tuple[str, ...] = ()

    urgent_decision: Optional[str] = None
    material_value: Optional[str] = None
    moral_damage_requested: Optional[str] = Field(default=None, alias="dano-moral-pergunta")
    moral_value: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v: Any, info) -> Any:
        if info.field_name == "evidence":
            return v
        return _to_text(v)

    @field_validator("evidence", mode="before")
    @classmethod
    def coerce_evidence(cls, v: Any) -> Tuple[str, ...]:
        if v is None:
            return ()
        items = v if isinstance(v, (list, tuple)) else [v]
        out: List[str] = []
        for item in items:
            text = _to_text(item)
            if text:
                out.append(text)
        return tuple(out)


class FactLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class NormalizedCase(BaseModel):
    """Fully defaulted view of an IntakeForm; no field is ever None except the typed extras."""

    model_config = ConfigDict(frozen=True)

    venue: str
    author_name: str
    author_cpf: str
    author_address: str
    author_contact: str
    company_name: str
    company_cnpj: str
    company_address: str

    problem_type: Optional[ProblemType] = None
    problem_label: str
    customer_number: str
    protocol_numbers: str
    facts: Tuple[FactLine, ...] = ()
    facts_summary: str
    evidence: Tuple[str, ...] = ()

    urgent_relief: bool = False
    moral_damages: bool = False
    material_value: str
    material_amount: Optional[Decimal] = None
    moral_value: str
    moral_amount: Optional[Decimal] = None
    moral_arbitrated: bool = Field(default=False, description="Valor do dano moral fica a critério do juízo")


@dataclass(frozen=True)
class SectionPlan:
    include_urgent_relief: bool = False
    include_material_damages: bool = False
    include_moral_damages: bool = False
    include_debt_nullity: bool = False


class PetitionResult(BaseModel):
    status: int = 200
    text: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_code is None

    def to_payload(self) -> Dict[str, Any]:
        if self.ok:
            return {"text": self.text}
        payload: Dict[str, Any] = {"error": self.message, "code": self.error_code}
        if self.detail:
            payload["details"] = self.detail
        return payload
