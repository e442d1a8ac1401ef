from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator
from pydantic.alias_generators import to_camel

from splitshare.config import get_settings
from splitshare.models import Expense, Participant


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def check_name(value: str) -> str:
    limit = get_settings().max_name_length
    if not 1 <= len(value) <= limit:
        raise ValueError(f"name must be 1-{limit} characters")
    return value


def check_group_name(value: str) -> str:
    limit = get_settings().max_group_name_length
    if not 1 <= len(value) <= limit:
        raise ValueError(f"group name must be 1-{limit} characters")
    return value


class CreateCalculationIn(_Schema):
    group_name: str
    participants: list[str] = Field(..., min_length=1)
    admin_name: Optional[str] = None

    validate_group_name = field_validator("group_name")(check_group_name)

    @field_validator("participants")
    @classmethod
    def validate_participants(cls, value: list[str]) -> list[str]:
        limit = get_settings().max_participants
        if len(value) > limit:
            raise ValueError(f"at most {limit} participants are allowed")
        return [check_name(name) for name in value]

    @field_validator("admin_name")
    @classmethod
    def validate_admin_name(cls, value: Optional[str]) -> Optional[str]:
        return check_name(value) if value is not None else None


class RenameCalculationIn(_Schema):
    group_name: str

    validate_group_name = field_validator("group_name")(check_group_name)


class AddParticipantIn(_Schema):
    name: str

    validate_name = field_validator("name")(check_name)


class CreateAdminIn(_Schema):
    name: str

    validate_name = field_validator("name")(check_name)


class ExpenseIn(_Schema):
    description: str = ""
    # strict: 12.5 or "1250" are rejected, never coerced
    amount_cents: StrictInt = Field(..., gt=0)
    payer_id: str = Field(..., min_length=1)
    participant_ids: list[str] = Field(..., min_length=1)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        limit = get_settings().max_description_length
        if len(value) > limit:
            raise ValueError(f"description must be at most {limit} characters")
        return value

    @field_validator("amount_cents")
    @classmethod
    def validate_amount(cls, value: int) -> int:
        limit = get_settings().max_amount_cents
        if value > limit:
            raise ValueError(f"amount must be at most {limit} cents")
        return value

    @field_validator("participant_ids")
    @classmethod
    def validate_participant_ids(cls, value: list[str]) -> list[str]:
        if any(not participant_id for participant_id in value):
            raise ValueError("participant ids must not be empty")
        return value


class ParticipantIn(_Schema):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    def to_model(self) -> Participant:
        return Participant(id=self.id, name=self.name)


class StoredExpenseIn(ExpenseIn):
    id: str = Field(..., min_length=1)

    def to_model(self) -> Expense:
        return Expense(
            id=self.id,
            description=self.description,
            amount_cents=self.amount_cents,
            payer_id=self.payer_id,
            participant_ids=list(self.participant_ids),
        )


class CalculationDocument(_Schema):
    """A stored calculation as read from JSON: participants plus expenses."""

    group_name: str = ""
    participants: list[ParticipantIn] = Field(default_factory=list)
    expenses: list[StoredExpenseIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_participant_ids(self) -> "CalculationDocument":
        seen: set[str] = set()
        for participant in self.participants:
            if participant.id in seen:
                raise ValueError(f"Duplicate participant id: {participant.id}")
            seen.add(participant.id)
        return self

    def to_models(self) -> tuple[list[Participant], list[Expense]]:
        return (
            [participant.to_model() for participant in self.participants],
            [expense.to_model() for expense in self.expenses],
        )
