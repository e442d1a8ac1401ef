import math
from decimal import Decimal

import pytest

from splitshare.models import Expense, Participant
from splitshare.services.split import InvalidAmountError, compute_balances, split_amount


def make_group():
    return [Participant("a", "Anna"), Participant("b", "Boris"), Participant("c", "Clara")]


def test_split_amount_even():
    shares = split_amount(1000, ["a", "b", "c", "d"])
    assert shares == {"a": 250, "b": 250, "c": 250, "d": 250}


def test_split_amount_remainder_goes_to_leading_consumers():
    shares = split_amount(1001, ["c", "a", "b"])
    assert shares == {"c": 334, "a": 334, "b": 333}
    assert sum(shares.values()) == 1001


def test_split_amount_is_deterministic():
    consumers = ["b", "c", "a"]
    first = split_amount(100, consumers)
    assert all(split_amount(100, consumers) == first for _ in range(5))
    assert first["b"] == 34


def test_split_amount_exact_for_many_sizes():
    for amount in (1, 7, 99, 100, 12345, 99999):
        for n in range(1, 9):
            consumers = [f"p{i}" for i in range(n)]
            assert sum(split_amount(amount, consumers).values()) == amount


def test_split_amount_empty_consumers():
    with pytest.raises(ValueError):
        split_amount(100, [])


def test_compute_balances_everyone_shares():
    expenses = [Expense(id="e1", amount_cents=3000, payer_id="a", participant_ids=["a", "b", "c"])]

    balances = compute_balances(make_group(), expenses)

    assert balances == {"a": 2000, "b": -1000, "c": -1000}


def test_compute_balances_payer_excluded():
    expenses = [Expense(id="e1", amount_cents=3000, payer_id="a", participant_ids=["b", "c"])]

    balances = compute_balances(make_group(), expenses)

    assert balances == {"a": 3000, "b": -1500, "c": -1500}


def test_compute_balances_remainder_cent():
    expenses = [Expense(id="e1", amount_cents=100, payer_id="a", participant_ids=["a", "b", "c"])]

    balances = compute_balances(make_group(), expenses)

    assert balances == {"a": 66, "b": -33, "c": -33}
    assert sum(balances.values()) == 0


def test_compute_balances_zero_sum_mixed():
    expenses = [
        Expense(id="e1", amount_cents=1001, payer_id="a", participant_ids=["a", "b", "c"]),
        Expense(id="e2", amount_cents=257, payer_id="b", participant_ids=["c", "a"]),
        Expense(id="e3", amount_cents=13, payer_id="c", participant_ids=["b"]),
    ]

    balances = compute_balances(make_group(), expenses)

    assert sum(balances.values()) == 0


def test_compute_balances_skips_unknown_payer():
    expenses = [Expense(id="e1", amount_cents=500, payer_id="ghost", participant_ids=["a", "b"])]

    balances = compute_balances(make_group(), expenses)

    assert balances == {"a": 0, "b": 0, "c": 0}


def test_compute_balances_filters_unknown_participants():
    expenses = [Expense(id="e1", amount_cents=100, payer_id="a", participant_ids=["ghost", "b", "c"])]

    balances = compute_balances(make_group(), expenses)

    assert balances == {"a": 100, "b": -50, "c": -50}


def test_compute_balances_skips_expense_without_known_participants():
    expenses = [Expense(id="e1", amount_cents=100, payer_id="a", participant_ids=["ghost"])]

    balances = compute_balances(make_group(), expenses)

    assert balances == {"a": 0, "b": 0, "c": 0}


@pytest.mark.parametrize("amount", [10.5, 10.0, math.nan, math.inf, True, "100", None, Decimal("100")])
def test_compute_balances_rejects_non_integer_amount(amount):
    expenses = [Expense(id="e1", amount_cents=amount, payer_id="a", participant_ids=["a", "b"])]

    with pytest.raises(InvalidAmountError) as exc_info:
        compute_balances(make_group(), expenses)

    assert exc_info.value.expense_id == "e1"


def test_compute_balances_invalid_amount_on_skipped_expense_still_fails():
    expenses = [Expense(id="e1", amount_cents=1.5, payer_id="ghost", participant_ids=["a"])]

    with pytest.raises(InvalidAmountError):
        compute_balances(make_group(), expenses)
