"""Normalization utilities for currency and CPF/CNPJ input.

These helpers run on every keystroke of a form field, so they are pure and
total: partial or empty input never raises. The only exception is
``parse_currency_display``, which converts a display string back to a
stored amount and rejects text that is not a currency value.

Display conventions follow pt-BR: ``.`` groups thousands and ``,`` separates
the two fractional digits (``1.234,56``).
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

_NON_DIGITS = re.compile(r"\D")

# Applied once to the leading digits, only when enough digits are present
_CPF_PATTERN = re.compile(r"(\d{3})(\d{3})(\d{3})(\d{2})")
_CNPJ_PATTERN = re.compile(r"(\d{2})(\d{3})(\d{3})(\d{4})(\d{2})")

CPF_LENGTH = 11
CNPJ_LENGTH = 14

TWO_PLACES = Decimal("0.01")

TRUTHY_FLAGS = frozenset({"sim", "yes", "1", "true"})


def digits_only(raw: str | None) -> str:
    """Return only the digit characters of ``raw``."""
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def _group_cents(digits: str) -> str:
    """Render a digit string of cents with pt-BR separators.

    Works on the text itself, so any number of digits is accepted.
    """
    digits = digits.lstrip("0").rjust(3, "0")
    reais, centavos = digits[:-2], digits[-2:]
    head = len(reais) % 3 or 3
    groups = [reais[:head]] + [reais[i:i + 3] for i in range(head, len(reais), 3)]
    return ".".join(groups) + "," + centavos


def format_currency(raw: str | None) -> str:
    """Format typed input as a currency display string.

    All non-digits are stripped and the remaining digits are read as cents,
    so passing a previous display string back through this function yields
    the same value. No arithmetic is done, so input of any length formats.

    Parameters
    ----------
    raw : str | None
        Raw field content, e.g. ``"123456"`` or ``"1.234,56"``.

    Returns
    -------
    str
        Display string, e.g. ``"1.234,56"``. Empty input gives ``"0,00"``.
    """
    return _group_cents(digits_only(raw))


def parse_currency_display(display: str) -> Decimal:
    """Convert a currency display string back to a stored amount.

    Inverse of :func:`format_currency`: grouping dots are removed and the
    decimal comma becomes a decimal point.

    Raises
    ------
    ValueError
        If ``display`` is not a currency value.
    """
    cleaned = "".join(display.replace("R$", "").split())
    cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Not a currency value: {display!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a currency value: {display!r}")
    return amount


def _to_cents(amount: Decimal) -> Decimal:
    """Round ``amount`` to whole cents with enough precision to stay exact."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP).scaleb(2)


def cents_of(amount: Decimal) -> int:
    """Return the integer number of cents in ``amount``."""
    return int(_to_cents(amount))


def format_tax_id(raw: str | None) -> str:
    """Format a CPF (11 digits) or CNPJ (14 digits) for display.

    Up to 11 digits use ``XXX.XXX.XXX-XX``; longer input uses
    ``XX.XXX.XXX/XXXX-XX``. Input that is too short for its pattern is
    returned as bare digits. No check-digit validation is done.
    """
    digits = digits_only(raw)
    if len(digits) <= CPF_LENGTH:
        return _CPF_PATTERN.sub(r"\1.\2.\3-\4", digits, count=1)
    return _CNPJ_PATTERN.sub(r"\1.\2.\3/\4-\5", digits, count=1)


def strip_tax_id(raw: str | None) -> str:
    """Return the canonical (digits-only) storage form of a CPF/CNPJ."""
    return digits_only(raw)


def is_valid_tax_id_length(digits: str) -> bool:
    """Check that a digits-only tax ID is a CPF or CNPJ by length."""
    return len(digits) in (CPF_LENGTH, CNPJ_LENGTH)


def parse_flag(raw: str | None) -> bool:
    """Coerce spreadsheet text such as ``"Sim"`` or ``"1"`` to a boolean."""
    if raw is None:
        return False
    return raw.strip().lower() in TRUTHY_FLAGS


def format_brl(amount: Decimal) -> str:
    """Format a stored amount as ``R$ 1.234,56``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}R$ {_group_cents(format(_to_cents(abs(amount)), 'f'))}"


def format_date(value: date | datetime) -> str:
    """Format a date as ``dd/mm/yyyy``."""
    return value.strftime("%d/%m/%Y")
