# backend/payloads.py
"""
Conversion between the front end's JSON and ledger records.

Incoming keys follow the front end (camelCase: payerId, participantIds, upiId).
Everything is validated here so the calculators only ever see well-formed
records; problems raise InvalidPayloadError.
"""

import math

from errors import InvalidPayloadError, MalformedExpenseError
from ledger import CATEGORIES, DEFAULT_CATEGORY, Balance, Expense, Participant, Settlement
from money import money_to_json, to_decimal


def _require(data, *keys):
    if not isinstance(data, dict):
        raise InvalidPayloadError(f"Expected an object, got {type(data).__name__}")
    missing = [k for k in keys if data.get(k) in (None, '')]
    if missing:
        raise InvalidPayloadError(f"Missing required fields: {', '.join(missing)}")


def _id(value, field_name):
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidPayloadError(f"{field_name} must be a string")
    return str(value)


def _amount(value, field_name='amount'):
    try:
        amount = to_decimal(value)
    except ValueError:
        raise InvalidPayloadError(f"{field_name} must be a number, got {value!r}")
    if amount < 0:
        raise InvalidPayloadError(f"{field_name} can't be negative")
    return amount


def _list(data, key):
    value = data.get(key, [])
    if not isinstance(value, list):
        raise InvalidPayloadError(f"{key} must be a list")
    return value


def parse_optional_id(value):
    return None if value in (None, '') else _id(value, 'id')


def parse_timestamp(value):
    """Epoch milliseconds, or None when absent."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidPayloadError("date must be a timestamp in milliseconds")
    return int(value)


def parse_participant(data):
    _require(data, 'id', 'name')
    upi_id = data.get('upiId')
    return Participant(
        id=_id(data['id'], 'id'),
        name=str(data['name']).strip(),
        upi_id=str(upi_id).strip() or None if upi_id else None,
        avatar=data.get('avatar'),
    )


def parse_expense(data):
    _require(data, 'id', 'amount', 'payerId')

    category = data.get('category') or DEFAULT_CATEGORY
    if category not in CATEGORIES:
        raise InvalidPayloadError(f"Unknown category: {category}")

    participant_ids = [_id(pid, 'participantIds') for pid in _list(data, 'participantIds')]
    date = parse_timestamp(data.get('date'))

    expense = Expense(
        id=_id(data['id'], 'id'),
        description=str(data.get('description', '')),
        amount=_amount(data['amount']),
        payer_id=_id(data['payerId'], 'payerId'),
        participant_ids=participant_ids,
        date=date or 0,
        category=category,
    )

    # Reject here what the balance calculator would refuse later
    try:
        expense.to_entry()
    except MalformedExpenseError as e:
        raise InvalidPayloadError(str(e))

    return expense


def parse_event(data):
    """(participants, expenses) from an event object."""
    if not isinstance(data, dict):
        raise InvalidPayloadError("Request body must be a JSON object")

    participants = [parse_participant(p) for p in _list(data, 'participants')]
    expenses = [parse_expense(e) for e in _list(data, 'expenses')]

    ids = [p.id for p in participants]
    if len(ids) != len(set(ids)):
        raise InvalidPayloadError("Participant ids must be unique")

    return participants, expenses


def parse_balances(data):
    if not isinstance(data, dict):
        raise InvalidPayloadError("Request body must be a JSON object")

    balances = []
    for item in _list(data, 'balances'):
        _require(item, 'participantId')
        try:
            amount = to_decimal(item.get('amount', 0))
        except ValueError:
            raise InvalidPayloadError(f"amount must be a number, got {item.get('amount')!r}")
        balances.append(Balance(_id(item['participantId'], 'participantId'), amount))
    return balances


def parse_settlement(data):
    _require(data, 'from', 'to', 'amount')
    return Settlement(
        from_id=_id(data['from'], 'from'),
        to_id=_id(data['to'], 'to'),
        amount=_amount(data['amount']),
    )


def expense_to_json(expense):
    return {
        'id': expense.id,
        'description': expense.description,
        'amount': money_to_json(expense.amount),
        'payerId': expense.payer_id,
        'participantIds': list(expense.participant_ids),
        'date': expense.date,
        'category': expense.category,
    }


def balance_to_json(balance):
    return {'participantId': balance.participant_id, 'amount': money_to_json(balance.amount)}


def settlement_to_json(settlement):
    return {'from': settlement.from_id, 'to': settlement.to_id, 'amount': money_to_json(settlement.amount)}


def summary_to_json(summary):
    return {
        'totalSpent': money_to_json(summary['total_spent']),
        'byMember': {k: money_to_json(v) for k, v in summary['by_member'].items()},
        'byCategory': {k: money_to_json(v) for k, v in summary['by_category'].items()},
    }
