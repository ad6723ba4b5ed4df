from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Tuple

import structlog

from .currency import ZERO_BRL, parse_brl
from .errors import InputError
from .schema import PROBLEM_TYPES, FactLine, IntakeForm, NormalizedCase, ProblemType

logger = structlog.get_logger()

NOT_INFORMED = "Não informado"
NOT_APPLICABLE = "N/A"
NO_EVIDENCE = "Nenhuma prova especificada"
TO_BE_ARBITRATED = "a ser arbitrado"
UNSPECIFIED_LABEL = "Não especificado"

# Exact, case-sensitive affirmative token used by the form's yes/no selects.
YES_TOKEN = "sim"

_ARBITRATED_RE = re.compile(r"arbitr", re.IGNORECASE)


class IntakePolicy(str, Enum):
    """How much of the payload must be present before a prompt is composed."""

    LENIENT = "lenient"
    NON_EMPTY = "non_empty"
    STRICT = "strict"


PROBLEM_LABELS: Dict[ProblemType, str] = {
    "power-cutoff": "Corte indevido no fornecimento de energia elétrica",
    "voltage-damage": "Danos a aparelhos elétricos por oscilação de tensão",
    "improper-fine": "Multa ou cobrança por suposta irregularidade no medidor (TOI)",
    "connection-refusal": "Recusa ou demora na ligação de energia (ligação nova)",
    "improper-billing": "Cobrança indevida ou fatura com valor abusivo",
    "other": "Outro problema com a concessionária de energia",
}

# Fact fields narrated for each problem type, in display order.
FACT_FIELDS: Dict[ProblemType, List[Tuple[str, str]]] = {
    "power-cutoff": [
        ("cutoff_date", "Data do corte"),
        ("cutoff_notice", "Houve aviso prévio do corte"),
        ("cutoff_reason", "Motivo alegado pela concessionária"),
        ("reconnection_date", "Data da religação"),
    ],
    "voltage-damage": [
        ("damage_date", "Data da oscilação/queima"),
        ("damaged_equipment", "Aparelhos danificados"),
        ("repair_cost", "Custo de conserto ou reposição"),
        ("damage_claim_protocol", "Protocolo do pedido de ressarcimento"),
    ],
    "improper-fine": [
        ("fine_date", "Data da inspeção/autuação"),
        ("fine_amount", "Valor cobrado"),
        ("fine_reason", "Irregularidade alegada"),
        ("inspection_present", "Consumidor presente na inspeção"),
    ],
    "connection-refusal": [
        ("connection_request_date", "Data do pedido de ligação"),
        ("refusal_reason", "Motivo da recusa ou demora"),
        ("connection_deadline", "Prazo informado pela concessionária"),
    ],
    "improper-billing": [
        ("bill_period", "Mês/período da fatura contestada"),
        ("billed_amount", "Valor cobrado"),
        ("usual_amount", "Valor médio habitual"),
    ],
    "other": [
        ("other_description", "Descrição do problema"),
    ],
}


def resolve_problem_type(value: Any) -> ProblemType | None:
    if isinstance(value, str) and value.strip() in PROBLEM_TYPES:
        return value.strip()  # type: ignore[return-value]
    return None


def problem_type_label(value: Any) -> str:
    """Human-readable label for any problem-type value; unknown values get a generic label."""
    problem = resolve_problem_type(value)
    if problem is None:
        return UNSPECIFIED_LABEL
    return PROBLEM_LABELS[problem]


def parse_flag(value: str | None) -> bool:
    return value == YES_TOKEN


def _or(value: str | None, fallback: str) -> str:
    return value if value else fallback


def check_policy(raw: Any, policy: IntakePolicy) -> None:
    if policy is IntakePolicy.LENIENT:
        return
    if raw is None or not isinstance(raw, Mapping) or len(raw) == 0:
        raise InputError("Nenhum dado recebido do formulário.")
    if policy is IntakePolicy.STRICT:
        missing = [
            key for key in ("problem-type", "author-name")
            if not isinstance(raw.get(key), str) or not raw.get(key, "").strip()
        ]
        if missing:
            raise InputError(
                "Campos obrigatórios ausentes: " + ", ".join(missing) + "."
            )


def _fact_lines(form: IntakeForm, problem: ProblemType | None) -> Tuple[FactLine, ...]:
    if problem is None:
        return ()
    return tuple(
        FactLine(label=label, value=_or(getattr(form, field), NOT_APPLICABLE))
        for field, label in FACT_FIELDS[problem]
    )


def _respondent_details(form: IntakeForm) -> Tuple[str, str]:
    cnpj = form.company_cnpj
    address = form.company_address
    # Older forms send one combined "CNPJ/endereço" field
    if not cnpj and not address and form.company_details:
        return form.company_details, form.company_details
    return _or(cnpj, NOT_INFORMED), _or(address, NOT_INFORMED)


def normalize(raw: Mapping[str, Any] | None, policy: IntakePolicy = IntakePolicy.NON_EMPTY) -> NormalizedCase:
    check_policy(raw, policy)
    payload = dict(raw) if isinstance(raw, Mapping) else {}
    form = IntakeForm.model_validate(payload)

    problem = resolve_problem_type(form.problem_type)
    if form.problem_type and problem is None:
        logger.info("intake.unknown_problem_type", value=form.problem_type)

    moral_damages = parse_flag(form.moral_damage_requested)
    moral_arbitrated = False
    if not moral_damages:
        moral_value, moral_amount = ZERO_BRL, None
    elif form.moral_value and not _ARBITRATED_RE.search(form.moral_value):
        moral_value, moral_amount = form.moral_value, parse_brl(form.moral_value)
    else:
        moral_value, moral_amount, moral_arbitrated = TO_BE_ARBITRATED, None, True

    cnpj, company_address = _respondent_details(form)

    return NormalizedCase(
        venue=_or(form.action_city_state, NOT_INFORMED),
        author_name=_or(form.author_name, NOT_INFORMED),
        author_cpf=_or(form.author_cpf, NOT_INFORMED),
        author_address=_or(form.author_address, NOT_INFORMED),
        author_contact=_or(form.author_contact, NOT_INFORMED),
        company_name=_or(form.company_name, NOT_INFORMED),
        company_cnpj=cnpj,
        company_address=company_address,
        problem_type=problem,
        problem_label=problem_type_label(problem),
        customer_number=_or(form.customer_number, NOT_APPLICABLE),
        protocol_numbers=_or(form.protocol_numbers, NOT_APPLICABLE),
        facts=_fact_lines(form, problem),
        facts_summary=_or(form.facts_summary, NOT_APPLICABLE),
        evidence=form.evidence,
        urgent_relief=parse_flag(form.urgent_decision),
        moral_damages=moral_damages,
        material_value=_or(form.material_value, ZERO_BRL),
        material_amount=parse_brl(form.material_value),
        moral_value=moral_value,
        moral_amount=moral_amount,
        moral_arbitrated=moral_arbitrated,
    )
