"""
Quick demo of the petition pipeline with a sample intake form.

Usage:
    python scripts/petition_demo.py --dry-run
    python scripts/petition_demo.py --mode static --output peticao.txt
    GEMINI_API_KEY=... python scripts/petition_demo.py --mode gemini
"""

import argparse
import json
from pathlib import Path

from energy_petitions import PetitionService, Settings, StaticLLMClient
from energy_petitions.logs import configure_logging

SAMPLE_INTAKE = {
    "action-city-state": "Belo Horizonte/MG",
    "author-name": "Maria da Silva",
    "author-cpf": "123.456.789-00",
    "author-address": "Rua das Flores, 100, Belo Horizonte/MG",
    "author-contact": "maria@example.com / (31) 99999-0000",
    "company-name": "Companhia Energética Exemplo S.A.",
    "company-cnpj": "00.000.000/0001-00",
    "problem-type": "improper-billing",
    "customer-number": "3001234567",
    "protocol-numbers": "2024-000123, 2024-000456",
    "bill-period": "março/2024",
    "billed-amount": "R$ 1.480,32",
    "usual-amount": "R$ 210,00",
    "facts-summary": "A fatura de março veio sete vezes maior que a média sem qualquer mudança de consumo.",
    "evidence": ["Faturas dos últimos 12 meses", "Protocolos de reclamação"],
    "urgent-decision": "sim",
    "material-value": "R$ 300,00",
    "dano-moral-pergunta": "sim",
    "moral-value": "",
}


def main(mode: str, output: Path | None, dry_run: bool) -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if mode == "static":
        service = PetitionService(StaticLLMClient(text="[petição gerada pelo cliente estático]"), settings=settings)
    else:
        service = PetitionService.from_settings(settings)

    if dry_run:
        content = service.build_prompt(SAMPLE_INTAKE)
    else:
        result = service.generate(SAMPLE_INTAKE)
        if not result.ok:
            print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
            raise SystemExit(1)
        content = result.text or ""

    print(content)
    if output:
        output.write_text(content, encoding="utf-8")
        print(f"Salvo em: {output}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", choices=["static", "gemini"], default="static")
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--dry-run", action="store_true", help="Mostra o prompt sem chamar o provedor")
    args = parser.parse_args()
    main(mode=args.mode, output=args.output, dry_run=args.dry_run)
