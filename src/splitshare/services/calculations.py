from __future__ import annotations

import re
import secrets
import string
from datetime import datetime, timezone
from typing import Iterable, Sequence

from splitshare.logging import get_logger
from splitshare.models import Admin, Calculation, Expense, Participant, Summary
from splitshare.schemas import CreateCalculationIn, ExpenseIn
from splitshare.services.authz import generate_admin_token, hash_admin_token
from splitshare.services.settlement import compute_summary

log = get_logger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits + "_-"
CALCULATION_TOKEN_SIZE = 12
PARTICIPANT_ID_SIZE = 8
ADMIN_ID_SIZE = 8
EXPENSE_ID_SIZE = 10
DEFAULT_ADMIN_NAME = "Admin"


class CalculationError(ValueError):
    pass


class NotFoundError(LookupError):
    pass


def new_id(size: int) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _touch(calculation: Calculation) -> None:
    calculation.updated_at = _now()


def normalize_name(name: str) -> str:
    return re.sub(r"\s+", " ", name.strip())


def ensure_unique_names(names: Iterable[str]) -> None:
    seen: set[str] = set()
    for name in names:
        key = name.strip().lower()
        if key in seen:
            raise CalculationError(f'Duplicate participant name: "{name}"')
        seen.add(key)


def _find_participant(calculation: Calculation, participant_id: str) -> Participant:
    for participant in calculation.participants:
        if participant.id == participant_id:
            return participant
    raise NotFoundError("Participant not found")


def _find_expense(calculation: Calculation, expense_id: str) -> Expense:
    for expense in calculation.expenses:
        if expense.id == expense_id:
            return expense
    raise NotFoundError("Expense not found")


def _validated_references(calculation: Calculation, payer_id: str, participant_ids: Sequence[str]) -> list[str]:
    """Check the payer and consumers exist; returns consumers de-duplicated in order."""
    known = {participant.id for participant in calculation.participants}
    if payer_id not in known:
        raise CalculationError("payerId is not a participant")

    unique_ids = list(dict.fromkeys(participant_ids))
    for participant_id in unique_ids:
        if participant_id not in known:
            raise CalculationError(f"Unknown participantId in expense: {participant_id}")
    if not unique_ids:
        raise CalculationError("participantIds cannot be empty")
    return unique_ids


def create_calculation(data: CreateCalculationIn) -> tuple[Calculation, str]:
    """Create a calculation with one admin; returns it with the admin's plain token."""
    names = [name for name in (normalize_name(raw) for raw in data.participants) if name]
    if not names:
        raise CalculationError("At least one participant is required")
    ensure_unique_names(names)

    admin_token = generate_admin_token()
    created_at = _now()
    admin = Admin(
        id=new_id(ADMIN_ID_SIZE),
        name=normalize_name(data.admin_name or DEFAULT_ADMIN_NAME),
        token_hash=hash_admin_token(admin_token),
        created_at=created_at,
    )
    calculation = Calculation(
        token=new_id(CALCULATION_TOKEN_SIZE),
        group_name=normalize_name(data.group_name),
        participants=[Participant(id=new_id(PARTICIPANT_ID_SIZE), name=name) for name in names],
        admins=[admin],
        created_at=created_at,
        updated_at=created_at,
    )
    log.info(
        "calculation.created",
        token=calculation.token,
        participants=len(calculation.participants),
    )
    return calculation, admin_token


def rename_calculation(calculation: Calculation, group_name: str) -> Calculation:
    calculation.group_name = normalize_name(group_name)
    _touch(calculation)
    log.info("calculation.renamed", token=calculation.token)
    return calculation


def add_participant(calculation: Calculation, name: str) -> Participant:
    clean = normalize_name(name)
    if any(p.name.strip().lower() == clean.lower() for p in calculation.participants):
        raise CalculationError(f'Participant "{clean}" already exists')

    participant = Participant(id=new_id(PARTICIPANT_ID_SIZE), name=clean)
    calculation.participants.append(participant)
    _touch(calculation)
    log.info("calculation.participant_added", token=calculation.token, participant_id=participant.id)
    return participant


def remove_participant(calculation: Calculation, participant_id: str) -> None:
    """Drop a participant and strip them from every expense they share.

    A payer cannot be removed. An expense left without consumers falls back
    to its payer alone.
    """
    participant = _find_participant(calculation, participant_id)
    if any(expense.payer_id == participant_id for expense in calculation.expenses):
        raise CalculationError(
            f'Cannot remove "{participant.name}" because they are payer in one or more expenses. '
            "Edit those expenses first."
        )

    calculation.participants = [p for p in calculation.participants if p.id != participant_id]
    for expense in calculation.expenses:
        remaining = [pid for pid in expense.participant_ids if pid != participant_id]
        expense.participant_ids = remaining or [expense.payer_id]

    _touch(calculation)
    log.info("calculation.participant_removed", token=calculation.token, participant_id=participant_id)


def add_expense(calculation: Calculation, data: ExpenseIn) -> Expense:
    participant_ids = _validated_references(calculation, data.payer_id, data.participant_ids)
    expense = Expense(
        id=new_id(EXPENSE_ID_SIZE),
        description=data.description.strip(),
        amount_cents=data.amount_cents,
        payer_id=data.payer_id,
        participant_ids=participant_ids,
        created_at=_now(),
    )
    calculation.expenses.append(expense)
    _touch(calculation)
    log.info(
        "calculation.expense_added",
        token=calculation.token,
        expense_id=expense.id,
        amount_cents=expense.amount_cents,
    )
    return expense


def update_expense(calculation: Calculation, expense_id: str, data: ExpenseIn) -> Expense:
    expense = _find_expense(calculation, expense_id)
    participant_ids = _validated_references(calculation, data.payer_id, data.participant_ids)

    expense.description = data.description.strip()
    expense.amount_cents = data.amount_cents
    expense.payer_id = data.payer_id
    expense.participant_ids = participant_ids

    _touch(calculation)
    log.info("calculation.expense_updated", token=calculation.token, expense_id=expense_id)
    return expense


def delete_expense(calculation: Calculation, expense_id: str) -> None:
    before = len(calculation.expenses)
    calculation.expenses = [e for e in calculation.expenses if e.id != expense_id]
    if len(calculation.expenses) == before:
        raise NotFoundError("Expense not found")

    _touch(calculation)
    log.info("calculation.expense_deleted", token=calculation.token, expense_id=expense_id)


def add_admin(calculation: Calculation, name: str) -> tuple[Admin, str]:
    clean = normalize_name(name)
    if any(a.name.strip().lower() == clean.lower() for a in calculation.admins):
        raise CalculationError(f'Admin "{clean}" already exists')

    admin_token = generate_admin_token()
    admin = Admin(
        id=new_id(ADMIN_ID_SIZE),
        name=clean,
        token_hash=hash_admin_token(admin_token),
        created_at=_now(),
    )
    calculation.admins.append(admin)
    _touch(calculation)
    log.info("calculation.admin_added", token=calculation.token, admin_id=admin.id)
    return admin, admin_token


def remove_admin(calculation: Calculation, admin_id: str) -> None:
    if not any(admin.id == admin_id for admin in calculation.admins):
        raise NotFoundError("Admin not found")
    if len(calculation.admins) <= 1:
        raise CalculationError("Cannot remove the last admin")

    calculation.admins = [a for a in calculation.admins if a.id != admin_id]
    _touch(calculation)
    log.info("calculation.admin_removed", token=calculation.token, admin_id=admin_id)


def summarize(calculation: Calculation) -> Summary:
    return compute_summary(calculation.participants, calculation.expenses)
