from splitshare.models import Balance, Expense, Participant, Summary, Transfer
from splitshare.services.settlement import compute_summary, compute_transfers
from splitshare.services.split import InvalidAmountError, compute_balances, split_amount

__all__ = [
    "Balance",
    "Expense",
    "InvalidAmountError",
    "Participant",
    "Summary",
    "Transfer",
    "compute_balances",
    "compute_summary",
    "compute_transfers",
    "split_amount",
]
