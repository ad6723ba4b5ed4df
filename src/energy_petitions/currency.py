from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

ZERO_BRL = "R$ 0,00"

# Larger figures are treated as typos, not amounts.
MAX_BRL = Decimal("999999999999.99")
# Enough digits for any sum of capped amounts plus a configured ceiling.
PRECISION = 60

_CENTS = Decimal("0.01")
_NUMBER_RE = re.compile(r"^-?[\d.,]+$")


def parse_brl(value: str | None) -> Decimal | None:
    """
    Parse a Brazilian currency string ("R$ 1.234,56", "300", "300,5").

    Returns None when the text holds no amount or the amount exceeds MAX_BRL.
    """
    if value is None:
        return None
    text = value.replace("R$", "").replace(" ", "").replace(" ", "").strip()
    if not text or not _NUMBER_RE.match(text):
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif text.count(".") > 1 or re.search(r"\.\d{3}$", text):
        # "1.234" and "1.234.567" are thousands separators
        text = text.replace(".", "")
    with localcontext() as ctx:
        ctx.prec = PRECISION
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
        if abs(amount) > MAX_BRL:
            return None
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_brl(amount: Decimal) -> str:
    with localcontext() as ctx:
        ctx.prec = PRECISION
        quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        sign = "-" if quantized < 0 else ""
        integer, _, cents = f"{abs(quantized):.2f}".partition(".")
    groups = []
    while len(integer) > 3:
        groups.insert(0, integer[-3:])
        integer = integer[:-3]
    groups.insert(0, integer)
    return f"{sign}R$ {'.'.join(groups)},{cents}"
