"""
Importo in lettere
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Converte un importo nella riga "amount in words" stampata sul documento,
es. 1234.50 → "One Thousand Two Hundred and Thirty Four and Fifty Cents".

Due modalità:
- normale (default): spazio prima di "Cents", "Zero" come parte intera
  quando ci sono solo centesimi, prefisso "Minus" per importi negativi
- legacy (legacy_spacing=True): stringa identica a quella stampata sui
  documenti storici ("...FiftyCents", "and FiftyCents" sotto l'unità,
  stringa vuota per importi negativi)
"""

from __future__ import annotations

import math

from quotebill.domain.currency import round_cents

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]

TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]

# Indici 0 e 1 inutilizzati
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

MILLION = 1_000_000
THOUSAND = 1_000


def convert_chunk(n: int) -> str:
    """
    Converte un blocco 0..999. Ogni parola è seguita da uno spazio.

    Il ramo teens termina subito: un'eventuale cifra residua
    non viene mai aggiunta.
    """
    if n == 0:
        return ""

    result = ""

    if n >= 100:
        result += ONES[n // 100] + " Hundred "
        n %= 100
        if n > 0:
            result += "and "

    if n >= 20:
        result += TENS[n // 10] + " "
        n %= 10
    elif n >= 10:
        result += TEENS[n - 10] + " "
        return result

    if n > 0:
        result += ONES[n] + " "

    return result


def _whole_words(whole: int) -> str:
    result = ""
    remaining = whole

    if remaining >= MILLION:
        millions = remaining // MILLION
        # Oltre 999 milioni il blocco viene scomposto a sua volta
        head = convert_chunk(millions) if millions < THOUSAND else _whole_words(millions) + " "
        result += head + "Million "
        remaining %= MILLION

    if remaining >= THOUSAND:
        result += convert_chunk(remaining // THOUSAND) + "Thousand "
        remaining %= THOUSAND

    result += convert_chunk(remaining)
    return result.strip()


def _cents(amount: float) -> int:
    # Math.round di JavaScript: half verso +infinito
    return math.floor((amount % 1) * 100 + 0.5)


def to_words(amount: float, legacy_spacing: bool = False) -> str:
    """
    Converte un importo in parole inglesi.

    In modalità normale l'importo è prima arrotondato ai centesimi come
    in format_currency, quindi un residuo tipo -3.5e-15 diventa "Zero".

    Args:
        amount: Importo
        legacy_spacing: Riproduce la stringa storica, senza spazio prima di "Cents"

    Returns:
        str: Importo in lettere, senza suffisso valuta. Non solleva mai eccezioni.
    """
    amount = float(amount)
    if not math.isfinite(amount):
        return ""
    if amount == 0:
        return "Zero"

    if legacy_spacing:
        if amount < 0:
            return ""
        result = _whole_words(math.floor(amount))
        cents = _cents(amount)
        if cents > 0:
            result += " and " + convert_chunk(cents).strip() + "Cents"
        return result.strip()

    # Stesso arrotondamento dell'importo formattato: -0.00 resta "Zero"
    rounded = round_cents(amount)
    if rounded == 0:
        return "Zero"
    if rounded < 0:
        return f"Minus {to_words(float(-rounded))}"

    whole = int(rounded)
    cents = int((rounded - whole) * 100)
    result = _whole_words(whole)
    if cents > 0:
        result = (result or "Zero") + " and " + convert_chunk(cents).strip() + " Cents"
    return result.strip()


def amount_in_words(amount: float, suffix: str = "Rupees Only", legacy_spacing: bool = False) -> str:
    """Importo in lettere con il suffisso valuta, es. "... Rupees Only"."""
    words = to_words(amount, legacy_spacing=legacy_spacing)
    return f"{words} {suffix}".strip()
