import pytest
from decimal import Decimal

from app import create_app
from config import TestConfig
from ledger import Expense, Participant


@pytest.fixture
def app():
    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def alice():
    return Participant(id='a', name='Alice', upi_id='alice@okaxis')


@pytest.fixture
def bob():
    return Participant(id='b', name='Bob')


@pytest.fixture
def carol():
    return Participant(id='c', name='Carol')


@pytest.fixture
def squad(alice, bob, carol):
    return [alice, bob, carol]


@pytest.fixture
def make_expense():
    """Build an Expense with sensible defaults."""
    counter = iter(range(1, 1000))

    def _make(amount, payer_id, participant_ids, category='Other', description='Dinner'):
        return Expense(
            id=f'e{next(counter)}',
            description=description,
            amount=Decimal(str(amount)),
            payer_id=payer_id,
            participant_ids=list(participant_ids),
            date=1700000000000,
            category=category,
        )

    return _make


@pytest.fixture
def event_json():
    """The three-person dinner as the front end posts it."""
    return {
        'participants': [
            {'id': 'a', 'name': 'Alice', 'upiId': 'alice@okaxis'},
            {'id': 'b', 'name': 'Bob'},
            {'id': 'c', 'name': 'Carol'},
        ],
        'expenses': [
            {
                'id': 'e1',
                'description': 'Dinner',
                'amount': 90,
                'payerId': 'a',
                'participantIds': ['a', 'b', 'c'],
                'date': 1700000000000,
                'category': 'Food',
            },
        ],
    }
