from __future__ import annotations

from typing import Mapping, Sequence

from splitshare.models import Balance, Expense, Participant, Summary, Transfer
from splitshare.services.split import compute_balances


def compute_transfers(
    participants: Sequence[Participant],
    balances: Mapping[str, int],
) -> list[Transfer]:
    # greedy, not guaranteed minimal; ties keep the order of ``balances``
    names = {participant.id: participant.name for participant in participants}

    creditors: list[list] = []
    debtors: list[list] = []

    for participant_id, balance in balances.items():
        if balance > 0:
            creditors.append([participant_id, balance])
        elif balance < 0:
            debtors.append([participant_id, -balance])

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transfers: list[Transfer] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(debtor[1], creditor[1])
        if amount > 0:
            transfers.append(
                Transfer(
                    from_id=debtor[0],
                    from_name=names.get(debtor[0], debtor[0]),
                    to_id=creditor[0],
                    to_name=names.get(creditor[0], creditor[0]),
                    amount_cents=amount,
                )
            )

        debtor[1] -= amount
        creditor[1] -= amount

        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1

    return transfers


def compute_summary(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
) -> Summary:
    balances_by_id = compute_balances(participants, expenses)

    balances = [
        Balance(
            participant_id=participant.id,
            name=participant.name,
            balance_cents=balances_by_id.get(participant.id, 0),
        )
        for participant in participants
    ]

    # includes expenses skipped while balancing
    total_expenses_cents = sum(expense.amount_cents for expense in expenses)

    return Summary(
        total_expenses_cents=total_expenses_cents,
        balances=balances,
        transfers=compute_transfers(participants, balances_by_id),
    )
