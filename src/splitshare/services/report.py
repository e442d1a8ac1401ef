from __future__ import annotations

from splitshare.models import Balance, Summary
from splitshare.utils.money import format_cents


def balance_status(balance: Balance) -> str:
    if balance.balance_cents > 0:
        return "receives"
    if balance.balance_cents < 0:
        return "pays"
    return "settled"


def format_summary(summary: Summary, symbol: str = "€", group_name: str = "") -> str:
    lines = [group_name] if group_name else []
    lines.append(f"Total expenses: {format_cents(summary.total_expenses_cents, symbol)}")

    lines.append("")
    lines.append("Balances:")
    # display order only; the summary keeps participant order
    ordered = sorted(summary.balances, key=lambda b: b.balance_cents, reverse=True)
    for balance in ordered:
        lines.append(
            f"  {balance.name}: {format_cents(balance.balance_cents, symbol)} ({balance_status(balance)})"
        )

    lines.append("")
    lines.append("Transfers:")
    if not summary.transfers:
        lines.append("  Nothing to settle")
    for transfer in summary.transfers:
        lines.append(f"  {transfer.from_name} → {transfer.to_name}: {format_cents(transfer.amount_cents, symbol)}")
    return "\n".join(lines)
