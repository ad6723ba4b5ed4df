from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .schema import PROBLEM_TYPES, ProblemType


@dataclass(frozen=True)
class PetitionTemplate:
    heading: str
    sections_order: List[str]
    preamble: str = ""
    closing: str = "Agora, por favor, gere o texto completo e coeso da petição inicial."


PREAMBLE = (
    "Você é um assistente jurídico especializado em criar petições iniciais para o Juizado "
    "Especial Cível (JEC) do Brasil, com foco em direito do consumidor contra concessionárias "
    "de energia elétrica. Sua linguagem deve ser formal, clara, objetiva e persuasiva.\n"
    "Baseado exclusivamente nos dados abaixo, gere o texto completo de uma petição inicial. "
    "Não invente fatos, datas, valores ou documentos que não estejam nos dados. Onde um dado "
    "constar como \"Não informado\" ou \"N/A\", deixe um espaço entre colchetes para o autor "
    "completar.\n\n"
    "ESTRUTURA DA PETIÇÃO:"
)

JEC_TEMPLATE = PetitionTemplate(
    heading=(
        "EXCELENTÍSSIMO(A) SENHOR(A) DOUTOR(A) JUIZ(A) DE DIREITO DO JUIZADO ESPECIAL "
        "CÍVEL DA COMARCA DE {venue}"
    ),
    preamble=PREAMBLE,
    sections_order=[
        "addressing",
        "parties",
        "facts",
        "law",
        "urgent_relief",
        "requests",
        "claim_value",
        "closing",
    ],
)

SECTION_TITLES = {
    "addressing": "Endereçamento",
    "parties": "Qualificação das Partes",
    "facts": "Seção \"DOS FATOS\"",
    "law": "Seção \"DO DIREITO\"",
    "urgent_relief": "Seção \"DA TUTELA DE URGÊNCIA\"",
    "requests": "Seção \"DOS PEDIDOS\"",
    "claim_value": "Seção \"DO VALOR DA CAUSA\"",
    "closing": "Fechamento",
}

FACTS_INSTRUCTION = (
    "Narre os acontecimentos de forma cronológica e detalhada, usando apenas os dados a seguir. "
    "Seja claro e direto."
)

LAW_INSTRUCTION = (
    "Fundamente juridicamente o pedido. Destaque a relação de consumo, a responsabilidade "
    "objetiva da concessionária e a falha na prestação do serviço. Cite os dispositivos abaixo:"
)

URGENT_RELIEF_INSTRUCTION = (
    "O autor pediu uma decisão urgente (liminar). Crie esta seção justificando a medida com "
    "base no \"periculum in mora\" (o perigo da demora) e no \"fumus boni iuris\" (a fumaça do "
    "bom direito), nos termos do Art. 300 do CPC, explicando por que o autor não pode esperar "
    "pela decisão final."
)

URGENT_RELIEF_MEASURES: Dict[ProblemType, str] = {
    "power-cutoff": "o restabelecimento imediato do fornecimento de energia elétrica",
    "voltage-damage": "a abstenção de suspender o fornecimento enquanto durar o litígio",
    "improper-fine": (
        "a suspensão da cobrança e a abstenção de cortar o fornecimento ou negativar o nome "
        "do autor em razão do débito discutido"
    ),
    "connection-refusal": "a ligação imediata da unidade consumidora",
    "improper-billing": (
        "a suspensão da cobrança e a abstenção de cortar o fornecimento ou negativar o nome "
        "do autor em razão do débito discutido"
    ),
    "other": "a adoção imediata das providências necessárias à regularização do serviço",
}

URGENT_RELIEF_DEFAULT_MEASURE = "a adoção imediata das providências necessárias à regularização do serviço"

# (problem types that trigger the citation, citation). None matches every case.
STATUTES: List[Tuple[Tuple[str, ...] | None, str]] = [
    (None, "Código de Defesa do Consumidor (Lei nº 8.078/1990), Art. 14: responsabilidade objetiva do "
           "fornecedor pela falha na prestação do serviço."),
    (None, "CDC, Art. 6º, VIII: inversão do ônus da prova em favor do consumidor hipossuficiente."),
    (("power-cutoff", "connection-refusal"),
     "CDC, Art. 22: os serviços públicos essenciais devem ser adequados, eficientes, seguros e "
     "contínuos."),
    (PROBLEM_TYPES,
     "Resolução Normativa ANEEL nº 1.000/2021: regras de prestação do serviço público de "
     "distribuição de energia elétrica."),
]

DEBT_NULLITY_STATUTE = (
    "CDC, Art. 42, parágrafo único: cobrança indevida e direito à repetição do indébito em dobro."
)

MORAL_DAMAGES_STATUTE = (
    "Dano moral in re ipsa, pela privação de serviço essencial, e teoria do desvio produtivo do "
    "consumidor, pela perda de tempo útil na tentativa de solução administrativa."
)

MORAL_TO_BE_ARBITRATED = "a ser arbitrado por Vossa Excelência"
