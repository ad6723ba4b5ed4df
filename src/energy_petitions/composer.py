from __future__ import annotations

import string
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Callable, Dict, List, Optional

from .currency import PRECISION, format_brl
from .normalizer import NO_EVIDENCE
from .schema import NormalizedCase, SectionPlan
from .templates import (
    DEBT_NULLITY_STATUTE,
    FACTS_INSTRUCTION,
    JEC_TEMPLATE,
    LAW_INSTRUCTION,
    MORAL_DAMAGES_STATUTE,
    MORAL_TO_BE_ARBITRATED,
    SECTION_TITLES,
    STATUTES,
    URGENT_RELIEF_DEFAULT_MEASURE,
    URGENT_RELIEF_INSTRUCTION,
    URGENT_RELIEF_MEASURES,
    PetitionTemplate,
)

DEFAULT_MORAL_CEILING = Decimal("10000.00")


@dataclass(frozen=True)
class ComposeContext:
    template: PetitionTemplate = JEC_TEMPLATE
    # Stands in for an arbitrated moral amount when summing the claim value.
    moral_ceiling: Decimal = DEFAULT_MORAL_CEILING


SectionFn = Callable[[NormalizedCase, SectionPlan, ComposeContext], Optional[List[str]]]


def _bullets(items: List[str]) -> List[str]:
    return [f"- {item}" for item in items]


def _lettered(items: List[str]) -> List[str]:
    return [f"{letter}) {item}" for letter, item in zip(string.ascii_lowercase, items)]


def _urgent_measure(case: NormalizedCase) -> str:
    if case.problem_type is None:
        return URGENT_RELIEF_DEFAULT_MEASURE
    return URGENT_RELIEF_MEASURES[case.problem_type]


def claim_value(case: NormalizedCase, plan: SectionPlan, moral_ceiling: Decimal = DEFAULT_MORAL_CEILING) -> Decimal:
    # Only positive amounts count towards the claim.
    amounts = []
    if plan.include_material_damages:
        amounts.append(case.material_amount)
    if plan.include_moral_damages:
        amounts.append(moral_ceiling if case.moral_arbitrated else case.moral_amount)
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return sum((amount for amount in amounts if amount is not None and amount > 0), Decimal("0.00"))


def render_addressing(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    heading = ctx.template.heading.format(venue=case.venue.upper())
    return [f'Use exatamente: "{heading}."']


def render_parties(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    lines = [
        "Qualificação completa do autor (nacionalidade brasileira; estado civil e profissão "
        "entre colchetes para completar):",
    ]
    lines.extend(
        _bullets(
            [
                f"Nome completo: {case.author_name}",
                f"CPF: {case.author_cpf}",
                f"Endereço: {case.author_address}",
                f"Contato (e-mail/telefone): {case.author_contact}",
            ]
        )
    )
    lines.append("Qualificação da ré (pessoa jurídica de direito privado, concessionária de energia elétrica):")
    lines.extend(
        _bullets(
            [
                f"Razão social: {case.company_name}",
                f"CNPJ: {case.company_cnpj}",
                f"Endereço da sede: {case.company_address}",
            ]
        )
    )
    return lines


def render_facts(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    lines = [FACTS_INSTRUCTION]
    items = [
        f"Problema principal: {case.problem_label}",
        f"Unidade consumidora / nº de instalação: {case.customer_number}",
        f"Protocolos de atendimento: {case.protocol_numbers}",
    ]
    items.extend(f"{fact.label}: {fact.value}" for fact in case.facts)
    items.append(f"Relato do consumidor: {case.facts_summary}")
    lines.extend(_bullets(items))
    lines.append("Provas disponíveis (mencione-as como documentos anexos):")
    lines.extend(_bullets(list(case.evidence) or [NO_EVIDENCE]))
    return lines


def cited_statutes(case: NormalizedCase, plan: SectionPlan) -> List[str]:
    cited = [text for types, text in STATUTES if types is None or case.problem_type in types]
    if plan.include_debt_nullity:
        cited.append(DEBT_NULLITY_STATUTE)
    if plan.include_moral_damages:
        cited.append(MORAL_DAMAGES_STATUTE)
    return cited


def render_law(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    return [LAW_INSTRUCTION] + _bullets(cited_statutes(case, plan))


def render_urgent_relief(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> Optional[List[str]]:
    if not plan.include_urgent_relief:
        return None
    return [URGENT_RELIEF_INSTRUCTION, f"Medida pretendida: {_urgent_measure(case)}."]


def request_items(case: NormalizedCase, plan: SectionPlan) -> List[str]:
    items = ["A citação da ré para, querendo, responder à presente ação, sob pena de revelia."]
    if plan.include_urgent_relief:
        items.append(
            f"A concessão da tutela de urgência, para determinar {_urgent_measure(case)}, "
            "sob pena de multa diária."
        )
    items.append("A inversão do ônus da prova, conforme o Art. 6º, VIII, do CDC.")

    merits = []
    if plan.include_urgent_relief:
        merits.append("confirmar a tutela de urgência concedida")
    if plan.include_debt_nullity:
        merits.append("declarar a nulidade e a inexigibilidade do débito discutido")
    if plan.include_material_damages:
        merits.append(f"condenar a ré ao pagamento de indenização por danos materiais no valor de {case.material_value}")
    if not merits:
        merits.append("reconhecer a falha na prestação do serviço e condenar a ré a saná-la")
    items.append("A procedência total da ação para " + "; ".join(merits) + ".")

    if plan.include_moral_damages:
        if case.moral_arbitrated:
            amount = f"em valor {MORAL_TO_BE_ARBITRATED}"
        else:
            amount = f"no valor de {case.moral_value}, ou em valor que Vossa Excelência entender justo"
        items.append(f"A condenação da ré ao pagamento de indenização por danos morais {amount}.")
    return items


def render_requests(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    return ["Liste os pedidos de forma clara, exatamente nesta ordem:"] + _lettered(request_items(case, plan))


def render_claim_value(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    total = format_brl(claim_value(case, plan, ctx.moral_ceiling))
    return [f"Atribua à causa o valor de {total}."]


def render_closing(case: NormalizedCase, plan: SectionPlan, ctx: ComposeContext) -> List[str]:
    return [
        "Use exatamente:",
        "Nestes termos, pede deferimento.",
        "",
        f"{case.venue}, [Data].",
        "",
        "________________________________________",
        case.author_name,
    ]


SECTION_RENDERERS: Dict[str, SectionFn] = {
    "addressing": render_addressing,
    "parties": render_parties,
    "facts": render_facts,
    "law": render_law,
    "urgent_relief": render_urgent_relief,
    "requests": render_requests,
    "claim_value": render_claim_value,
    "closing": render_closing,
}


def compose(
    case: NormalizedCase,
    plan: SectionPlan,
    moral_ceiling: Decimal = DEFAULT_MORAL_CEILING,
    template: PetitionTemplate = JEC_TEMPLATE,
) -> str:
    ctx = ComposeContext(template=template, moral_ceiling=moral_ceiling)
    out: List[str] = []
    if template.preamble:
        out.append(template.preamble)
        out.append("")

    number = 0
    for name in template.sections_order:
        body = SECTION_RENDERERS[name](case, plan, ctx)
        if body is None:
            continue
        number += 1
        out.append(f"{number}. **{SECTION_TITLES[name]}:**")
        out.extend(body)
        out.append("")

    if template.closing:
        out.append(template.closing)
    return "\n".join(out)
