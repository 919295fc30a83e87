from decimal import Decimal

from ledger import Expense, Participant, Settlement
from summary import (
    payment_link, spending_by_category, spending_by_member, summarize, total_spent,
)


def test_plain_number_amounts(squad):
    expense = Expense(id='e1', description='Snacks', amount=7.25, payer_id='b', participant_ids=['a', 'b'], category='Food')

    assert total_spent([expense]) == Decimal('7.25')
    assert spending_by_member(squad, [expense]) == {'Bob': Decimal('7.25')}
    assert spending_by_category([expense]) == {'Food': Decimal('7.25')}


def test_payments_are_not_spending(squad, make_expense):
    expenses = [
        make_expense(90, 'a', ['a', 'b', 'c'], category='Food'),
        make_expense(30, 'b', ['a'], category='Payment'),
        make_expense(12.5, 'c', ['b', 'c'], category='Transport'),
    ]

    assert total_spent(expenses) == Decimal('102.50')
    assert spending_by_category(expenses) == {'Food': Decimal('90.00'), 'Transport': Decimal('12.50')}


def test_spending_by_member_drops_idle_members(squad, make_expense):
    expenses = [
        make_expense(90, 'a', ['a', 'b', 'c']),
        make_expense(10, 'a', ['a', 'b']),
        make_expense(30, 'b', ['a'], category='Payment'),
    ]

    assert spending_by_member(squad, expenses) == {'Alice': Decimal('100.00')}


def test_spending_by_member_groups_former_members_as_unknown(squad, make_expense):
    expenses = [
        make_expense(20, 'gone', ['a', 'b']),
        make_expense(5, 'left', ['a']),
    ]

    assert spending_by_member(squad, expenses) == {'Unknown': Decimal('25.00')}


def test_summarize(squad, make_expense):
    expenses = [make_expense(90, 'a', ['a', 'b', 'c'], category='Lodging')]

    assert summarize(squad, expenses) == {
        'total_spent': Decimal('90.00'),
        'by_member': {'Alice': Decimal('90.00')},
        'by_category': {'Lodging': Decimal('90.00')},
    }


def test_summarize_empty_event(squad):
    assert summarize(squad, []) == {'total_spent': Decimal('0.00'), 'by_member': {}, 'by_category': {}}


def test_payment_link(alice):
    link = payment_link(Settlement('b', 'a', Decimal('30')), alice, 'INR')
    assert link == 'upi://pay?pa=alice@okaxis&pn=Alice&am=30.00&cu=INR'


def test_payment_link_quotes_the_name():
    payee = Participant(id='p', name='Priya Shah', upi_id='priya@ybl')
    link = payment_link(Settlement('b', 'p', Decimal('12.5')), payee, 'INR')
    assert link == 'upi://pay?pa=priya@ybl&pn=Priya%20Shah&am=12.50&cu=INR'


def test_no_payment_link_without_address(bob):
    assert payment_link(Settlement('a', 'b', Decimal('30')), bob) is None
    assert payment_link(Settlement('a', 'gone', Decimal('30')), None) is None
