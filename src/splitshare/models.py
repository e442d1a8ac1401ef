from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence


@dataclass(slots=True)
class Participant:
    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(slots=True)
class Expense:
    id: str
    amount_cents: int
    payer_id: str
    participant_ids: Sequence[str]
    description: str = ""
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "amountCents": self.amount_cents,
            "payerId": self.payer_id,
            "participantIds": list(self.participant_ids),
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at.isoformat()
        return data


@dataclass(slots=True)
class Balance:
    participant_id: str
    name: str
    # positive: should receive, negative: should pay
    balance_cents: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "participantId": self.participant_id,
            "name": self.name,
            "balanceCents": self.balance_cents,
        }


@dataclass(slots=True)
class Transfer:
    from_id: str
    from_name: str
    to_id: str
    to_name: str
    amount_cents: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromId": self.from_id,
            "fromName": self.from_name,
            "toId": self.to_id,
            "toName": self.to_name,
            "amountCents": self.amount_cents,
        }


@dataclass(slots=True)
class Summary:
    total_expenses_cents: int
    balances: list[Balance]
    transfers: list[Transfer]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalExpensesCents": self.total_expenses_cents,
            "balances": [balance.to_dict() for balance in self.balances],
            "transfers": [transfer.to_dict() for transfer in self.transfers],
        }


@dataclass(slots=True)
class Admin:
    id: str
    name: str
    token_hash: str
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.created_at is not None:
            data["createdAt"] = self.created_at.isoformat()
        return data


@dataclass(slots=True)
class Calculation:
    token: str
    group_name: str
    participants: list[Participant] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    admins: list[Admin] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> dict[str, Any]:
        """Client-facing view; admin token hashes are never included."""
        data: dict[str, Any] = {
            "token": self.token,
            "groupName": self.group_name,
            "participants": [p.to_dict() for p in self.participants],
            "expenses": [e.to_dict() for e in self.expenses],
            "admins": [a.to_public_dict() for a in self.admins],
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at.isoformat()
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at.isoformat()
        return data
