# backend/ledger.py
"""
Records that make up an event's ledger.

An Expense is what the front end stores. Before it touches any balance it is
turned into one of two ledger entries:

    SharedExpense       a cost split equally among the sharers
    SettlementTransfer  money sent directly from one participant to another
                        (stored as an Expense in the "Payment" category)
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from errors import MalformedExpenseError

PAYMENT_CATEGORY = "Payment"
DEFAULT_CATEGORY = "Other"
CATEGORIES = ("Food", "Transport", "Lodging", "Entertainment", PAYMENT_CATEGORY, DEFAULT_CATEGORY)

UNKNOWN_PARTICIPANT = "Unknown"


@dataclass
class Participant:
    id: str
    name: str
    upi_id: Optional[str] = None
    avatar: Optional[str] = None


@dataclass(frozen=True)
class SharedExpense:
    amount: Decimal
    payer_id: str
    share_ids: Tuple[str, ...]


@dataclass(frozen=True)
class SettlementTransfer:
    amount: Decimal
    sender_id: str
    recipient_id: str


LedgerEntry = Union[SharedExpense, SettlementTransfer]


@dataclass
class Expense:
    id: str
    description: str
    amount: Decimal
    payer_id: str
    participant_ids: List[str] = field(default_factory=list)
    date: int = 0
    category: str = DEFAULT_CATEGORY

    @property
    def is_payment(self) -> bool:
        return self.category == PAYMENT_CATEGORY

    def to_entry(self) -> LedgerEntry:
        """Turn this record into the ledger entry its category stands for."""
        if self.amount < 0:
            raise MalformedExpenseError(f"Expense {self.id} has a negative amount")

        if self.is_payment:
            if len(self.participant_ids) != 1:
                raise MalformedExpenseError(
                    f"Payment {self.id} must have exactly one recipient, "
                    f"got {len(self.participant_ids)}"
                )
            return SettlementTransfer(self.amount, self.payer_id, self.participant_ids[0])

        if not self.participant_ids:
            raise MalformedExpenseError(f"Expense {self.id} is not shared with anyone")
        return SharedExpense(self.amount, self.payer_id, tuple(self.participant_ids))


@dataclass
class Balance:
    """Net position: positive is owed money, negative owes money."""
    participant_id: str
    amount: Decimal


@dataclass
class Settlement:
    """from_id owes to_id amount."""
    from_id: str
    to_id: str
    amount: Decimal


def find_participant(participants, participant_id) -> Optional[Participant]:
    for p in participants:
        if p.id == participant_id:
            return p
    return None


def participant_name(participants, participant_id) -> str:
    """Display name, or "Unknown" for ids that left the event."""
    p = find_participant(participants, participant_id)
    return p.name if p else UNKNOWN_PARTICIPANT
