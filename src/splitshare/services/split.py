from __future__ import annotations

from typing import Iterable, Sequence

from splitshare.logging import get_logger
from splitshare.models import Expense, Participant

log = get_logger(__name__)


class InvalidAmountError(ValueError):
    def __init__(self, amount: object, expense_id: str | None = None) -> None:
        self.amount = amount
        self.expense_id = expense_id
        where = f" in expense {expense_id}" if expense_id is not None else ""
        super().__init__(f"Invalid amount_cents{where}: {amount!r}")


def assert_integer_cents(amount: object, expense_id: str | None = None) -> int:
    # bool is an int subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(amount, expense_id)
    return amount


def split_amount(amount_cents: int, consumers: Sequence[str]) -> dict[str, int]:
    """Split ``amount_cents`` across ``consumers`` without losing a cent.

    Everyone pays ``amount_cents // n``; the first ``amount_cents % n`` consumers,
    in the order given, pay one extra cent. The same ordered input always puts
    the remainder on the same people.
    """
    assert_integer_cents(amount_cents)
    if not consumers:
        raise ValueError("consumers must not be empty")

    n = len(consumers)
    base_share, remainder = divmod(amount_cents, n)

    shares: dict[str, int] = {}
    for idx, consumer in enumerate(consumers):
        share = base_share + (1 if idx < remainder else 0)
        shares[consumer] = shares.get(consumer, 0) + share
    return shares


def compute_balances(
    participants: Iterable[Participant],
    expenses: Iterable[Expense],
) -> dict[str, int]:
    balances: dict[str, int] = {participant.id: 0 for participant in participants}

    for expense in expenses:
        amount = assert_integer_cents(expense.amount_cents, expense.id)

        if expense.payer_id not in balances:
            log.warning(
                "balances.expense_skipped",
                expense_id=expense.id,
                reason="unknown_payer",
                payer_id=expense.payer_id,
            )
            continue

        consumers = [pid for pid in expense.participant_ids if pid in balances]
        if not consumers:
            log.warning(
                "balances.expense_skipped",
                expense_id=expense.id,
                reason="no_known_participants",
            )
            continue

        balances[expense.payer_id] += amount
        for participant_id, share in split_amount(amount, consumers).items():
            balances[participant_id] -= share

    return balances
