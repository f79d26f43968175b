"""
Formattazione e parsing importi
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

format_currency riproduce toLocaleString("en", {min/maxFractionDigits: 2})
di JavaScript: separatore migliaia ",", due decimali, arrotondamento
half-up sul decimale più corto che rappresenta il float (repr), come ICU.
parse_currency non solleva mai eccezioni: input malformato → 0.
"""

from __future__ import annotations

import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP

_CENTS = Decimal("0.01")

# Precisione sufficiente per qualunque float finito (max ~1.8e308)
_WIDE_CONTEXT = Context(prec=400)

# Prefisso numerico accettato da parseFloat
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_NUMERIC_INPUT = re.compile(r"\d*\.?\d*")
_THOUSANDS_BOUNDARY = re.compile(r"\B(?=(\d{3})+(?!\d))")


def round_cents(value: float) -> Decimal:
    """Arrotonda half-up ai centesimi partendo da repr(value): 1.005 → 1.01."""
    return Decimal(repr(float(value))).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT)


def format_currency(value: float) -> str:
    """
    Formatta un importo con separatore migliaia e 2 decimali.

    Examples:
        1234.5 → "1,234.50"
        -42.1 → "-42.10"
        1.005 → "1.01"
        2.675 → "2.68"
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-∞" if value < 0 else "∞"

    return f"{round_cents(value):,.2f}"


def parse_currency(text: str) -> float:
    """
    Recupera il valore numerico da una stringa eventualmente formattata.

    Rimuove le virgole e interpreta il prefisso numerico come parseFloat.
    Stringa vuota, caratteri estranei o valori non finiti → 0.
    """
    if not text:
        return 0.0
    match = _FLOAT_PREFIX.match(str(text).replace(",", ""))
    if match is None:
        return 0.0
    value = float(match.group(1).replace("Infinity", "inf"))
    return value if math.isfinite(value) else 0.0


def is_numeric_input(raw: str) -> bool:
    """True se il testo (senza virgole) contiene solo cifre e al più un punto."""
    return _NUMERIC_INPUT.fullmatch(raw.replace(",", "")) is not None


def group_digits(raw: str) -> str:
    """
    Inserisce le virgole mentre l'utente digita.

    Trasformazione puramente testuale applicata all'intera stringa,
    parte decimale compresa ("1234.5678" → "1,234.5,678"); le virgole
    vengono comunque rimosse da parse_currency.
    """
    raw = raw.replace(",", "")
    if not raw:
        return ""
    return _THOUSANDS_BOUNDARY.sub(",", raw)
