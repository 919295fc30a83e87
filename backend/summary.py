# backend/summary.py
"""
Spending figures shown next to the balances.

Payment records are transfers between members, not spending, so they are left
out of every figure here.
"""

from urllib.parse import quote

from config import CURRENCY_DEFAULT
from ledger import UNKNOWN_PARTICIPANT, find_participant
from money import ZERO, round_money, to_decimal


def total_spent(expenses):
    return round_money(sum((to_decimal(e.amount) for e in expenses if not e.is_payment), ZERO))


def spending_by_member(participants, expenses):
    """How much each member paid for, by name. Members who paid nothing are dropped."""
    spending = {p.name: ZERO for p in participants}

    for expense in expenses:
        if expense.is_payment:
            continue
        payer = find_participant(participants, expense.payer_id)
        name = payer.name if payer else UNKNOWN_PARTICIPANT
        spending[name] = spending.get(name, ZERO) + to_decimal(expense.amount)

    return {name: round_money(amount) for name, amount in spending.items() if amount > 0}


def spending_by_category(expenses):
    spending = {}
    for expense in expenses:
        if not expense.is_payment:
            spending[expense.category] = spending.get(expense.category, ZERO) + to_decimal(expense.amount)
    return {category: round_money(amount) for category, amount in spending.items()}


def summarize(participants, expenses):
    return {
        'total_spent': total_spent(expenses),
        'by_member': spending_by_member(participants, expenses),
        'by_category': spending_by_category(expenses),
    }


def payment_link(settlement, payee, currency=CURRENCY_DEFAULT):
    """
    UPI deep link that opens the debtor's payment app with the transfer filled in.

    Returns None when the payee hasn't shared a payment address.
    """
    if payee is None or not payee.upi_id:
        return None

    amount = round_money(settlement.amount)
    return (
        f"upi://pay?pa={payee.upi_id}"
        f"&pn={quote(payee.name or 'User', safe='')}"
        f"&am={amount}"
        f"&cu={currency}"
    )
