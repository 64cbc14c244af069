"""
Test suite for the HTTP client wrapper.
Tests cover local checks, request shaping and failure normalization.
"""

import pytest
from unittest.mock import MagicMock

import requests

from client import ApiResponse, FinanceClient


def make_response(status=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return FinanceClient(base_url='http://api.test/api/', session=session)


class TestLocalChecks:
    """Invalid transactions never leave the client."""

    @pytest.mark.parametrize('amount', [0, -1, '0', 'abc', None])
    def test_create_rejects_bad_amount(self, api, session, amount):
        result = api.transactions.create({'type': 'income', 'amount': amount})
        assert result.data is None
        assert result.error == {'error': 'Amount must be greater than zero'}
        session.request.assert_not_called()

    @pytest.mark.parametrize('amount,message', [
        (0.001, 'Amount must have at most two decimal places'),
        (1e12, 'Amount is too large'),
        (True, 'Amount must be greater than zero'),
    ])
    def test_create_rejects_unstorable_amount(self, api, session, amount, message):
        result = api.transactions.create({'type': 'income', 'amount': amount})
        assert result.error == {'error': message}
        session.request.assert_not_called()

    def test_update_rejects_bad_amount(self, api, session):
        result = api.transactions.update(3, {'type': 'income', 'amount': -5})
        assert not result.ok
        session.request.assert_not_called()

    def test_expense_needs_category(self, api, session):
        result = api.transactions.create({'type': 'expense', 'amount': 10})
        assert result.error == {'error': 'Expense transactions need a category'}
        session.request.assert_not_called()

    def test_valid_transaction_is_sent(self, api, session):
        session.request.return_value = make_response(201, {'id': 1})
        result = api.transactions.create({'type': 'expense', 'amount': 10, 'category_id': 2})

        assert result == ApiResponse(data={'id': 1}, error=None)
        method, url = session.request.call_args[0]
        assert method == 'POST'
        assert url == 'http://api.test/api/transactions'
        assert session.request.call_args[1]['json']['amount'] == 10


class TestRequests:
    """Calls map onto the REST endpoints."""

    def test_transaction_filters_become_params(self, api, session):
        session.request.return_value = make_response(200, [])
        api.transactions.get_all(limit=5, type='expense')

        kwargs = session.request.call_args[1]
        assert kwargs['params'] == {'limit': 5, 'type': 'expense'}

    def test_no_filters_no_params(self, api, session):
        session.request.return_value = make_response(200, [])
        api.budgets.get_all()
        assert session.request.call_args[1]['params'] is None

    def test_budget_create(self, api, session):
        session.request.return_value = make_response(200, {'id': 4, 'amount': 80.0})
        result = api.budgets.create(category_id=1, amount=80, month=3, year=2024)

        assert result.data['amount'] == 80.0
        assert session.request.call_args[1]['json'] == {'category_id': 1, 'amount': 80, 'month': 3, 'year': 2024}

    def test_delete_paths(self, api, session):
        session.request.return_value = make_response(200, {'message': 'ok'})
        api.transactions.delete(7)
        assert session.request.call_args[0] == ('DELETE', 'http://api.test/api/transactions/7')
        api.budgets.delete(8)
        assert session.request.call_args[0] == ('DELETE', 'http://api.test/api/budgets/8')

    def test_dashboard_stats(self, api, session):
        stats = {'income': 100.0, 'expenses': 50.0, 'balance': 50.0, 'budgets': []}
        session.request.return_value = make_response(200, stats)
        assert api.dashboard.get_stats().data == stats

    def test_category_create_omits_unset_fields(self, api, session):
        session.request.return_value = make_response(201, {'id': 1})
        api.categories.create('Pets')
        assert session.request.call_args[1]['json'] == {'name': 'Pets'}

    def test_base_url_from_environment(self, monkeypatch, session):
        monkeypatch.setenv('API_URL', 'http://env.test/api')
        assert FinanceClient(session=session).base_url == 'http://env.test/api'


class TestFailureNormalization:
    """Every failure comes back as data=None with an error dict."""

    def test_error_body_passed_through(self, api, session):
        session.request.return_value = make_response(404, {'error': 'Transaction not found'})
        result = api.transactions.delete(999)
        assert result == ApiResponse(data=None, error={'error': 'Transaction not found'})

    def test_non_json_error_body(self, api, session):
        session.request.return_value = make_response(502, json_error=True)
        result = api.categories.get_all()
        assert result.error == {'error': 'Unknown error'}

    def test_network_failure(self, api, session):
        session.request.side_effect = requests.ConnectionError('Connection refused')
        result = api.categories.get_all()
        assert result.data is None
        assert result.error == {'error': 'Connection refused'}

    def test_unparseable_success_body(self, api, session):
        session.request.return_value = make_response(200, json_error=True)
        result = api.dashboard.get_stats()
        assert result.data is None
        assert result.error == {'error': 'Invalid JSON in response'}

    def test_no_retry(self, api, session):
        session.request.side_effect = requests.Timeout('timed out')
        api.budgets.get_all(month=5, year=2024)
        assert session.request.call_count == 1
