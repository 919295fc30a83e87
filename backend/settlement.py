# backend/settlement.py
import time
import uuid

from config import SETTLEMENT_EPSILON
from errors import MalformedExpenseError
from ledger import (
    PAYMENT_CATEGORY, Balance, Expense, Settlement, SettlementTransfer, SharedExpense,
    participant_name,
)
from money import ZERO, round_money, to_decimal


def _entry(expense):
    return expense.to_entry() if isinstance(expense, Expense) else expense


def compute_balances(participants, expenses):
    """
    Net balance for every participant in the event.

    Participants come back in the order given, each exactly once, followed by
    any id the expenses reference that isn't in `participants` (someone who
    left the event). Amounts are rounded to 2 places.
    """
    balances = {p.id: ZERO for p in participants}

    for expense in expenses:
        entry = _entry(expense)

        if isinstance(entry, SettlementTransfer):
            amount = to_decimal(entry.amount)
            # The sender paid off debt, the recipient got paid back
            balances[entry.sender_id] = balances.get(entry.sender_id, ZERO) + amount
            balances[entry.recipient_id] = balances.get(entry.recipient_id, ZERO) - amount
        elif isinstance(entry, SharedExpense):
            amount = to_decimal(entry.amount)
            split_amount = amount / len(entry.share_ids)
            balances[entry.payer_id] = balances.get(entry.payer_id, ZERO) + amount
            for person in entry.share_ids:
                balances[person] = balances.get(person, ZERO) - split_amount
        else:
            raise TypeError(f"not a ledger entry: {entry!r}")

    return [Balance(person, round_money(amount)) for person, amount in balances.items()]


def compute_settlements(balances, epsilon=SETTLEMENT_EPSILON):
    """
    Transfers that bring every balance back to zero.

    Greedy: the largest debtor pays the largest creditor as much as either
    side allows, then whoever is done drops out.
    """
    # 1. Separate Debtors and Creditors
    debtors = []
    creditors = []

    for balance in balances:
        net = round_money(balance.amount)
        if net < -epsilon: debtors.append({'person': balance.participant_id, 'amount': net})
        if net > epsilon: creditors.append({'person': balance.participant_id, 'amount': net})

    debtors.sort(key=lambda x: x['amount'])
    creditors.sort(key=lambda x: x['amount'], reverse=True)

    # 2. Match them up
    settlements = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = round_money(min(abs(debtor['amount']), creditor['amount']))
        settlements.append(Settlement(debtor['person'], creditor['person'], amount))

        debtor['amount'] += amount
        creditor['amount'] -= amount

        if abs(debtor['amount']) < epsilon: i += 1
        if creditor['amount'] < epsilon: j += 1

    return settlements


def settle_event(participants, expenses):
    """Balances and the transfers that clear them, in one go."""
    balances = compute_balances(participants, expenses)
    return balances, compute_settlements(balances)


def record_settlement(settlement, participants=(), expense_id=None, date=None):
    """
    Payment record for a settlement that actually happened.

    Adding it to the event's expenses moves both sides' balances toward zero
    by the settled amount.
    """
    amount = round_money(settlement.amount)
    if amount <= 0:
        raise MalformedExpenseError("Settlement amount must be positive")
    if settlement.from_id == settlement.to_id:
        raise MalformedExpenseError("A participant can't settle with themselves")

    from_name = participant_name(participants, settlement.from_id)
    to_name = participant_name(participants, settlement.to_id)

    return Expense(
        id=expense_id or str(uuid.uuid4()),
        description=f"Settlement: {from_name} paid {to_name}",
        amount=amount,
        payer_id=settlement.from_id,
        participant_ids=[settlement.to_id],
        date=date if date is not None else int(time.time() * 1000),
        category=PAYMENT_CATEGORY,
    )
