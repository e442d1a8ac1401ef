from __future__ import annotations

import re


_AMOUNT_RE = re.compile(r"^(\d+)(?:\.(\d{1,2}))?$")


def format_cents(cents: int, symbol: str = "€") -> str:
    """Format integer cents in the European style, e.g. ``-1.234,56 €``."""
    sign = "-" if cents < 0 else ""
    euros, rest = divmod(abs(cents), 100)
    grouped = f"{euros:,}".replace(",", ".")
    return f"{sign}{grouped},{rest:02d} {symbol}"


def parse_euro_to_cents(text: str) -> int:
    """
    Parse a human euro amount into integer cents.

    Accepted formats:
    - 12
    - 12,3 / 12,30
    - 1.234,56 (dots are thousands separators when a comma is present)
    - 12.30 (a trailing dot with one or two digits is the decimal point)
    """
    compact = re.sub(r"\s", "", text)
    if not compact:
        raise ValueError("Empty amount")

    if "," in compact:
        normalized = compact.replace(".", "")
        if normalized.count(",") != 1:
            raise ValueError(f"Cannot parse amount: {text!r}")
        normalized = normalized.replace(",", ".")
    elif re.search(r"\.\d{1,2}$", compact):
        head, _, tail = compact.rpartition(".")
        normalized = f"{head.replace('.', '')}.{tail}"
    else:
        normalized = compact.replace(".", "")

    match = _AMOUNT_RE.match(normalized)
    if not match:
        raise ValueError(f"Cannot parse amount: {text!r}")

    euros = int(match.group(1))
    cents = int((match.group(2) or "").ljust(2, "0"))
    return euros * 100 + cents
