"""
Pytest configuration and fixtures for testing.
"""
from unittest.mock import MagicMock

import pytest
from comercial import create_app
from comercial.services.data_api_service import DataApiClient


@pytest.fixture(scope='function')
def data_api():
    """
    Stand-in for the external data service client.

    ``fetch_many`` runs the batched calls in order, so tests only need to set
    return values on ``list_records``/``create_record``/etc.
    """
    api = MagicMock(spec=DataApiClient)
    api.fetch_many.side_effect = lambda calls: {name: call() for name, call in calls.items()}
    api.list_records.return_value = []
    api.list_pending_invoices.return_value = []
    return api


@pytest.fixture(scope='function')
def app(data_api):
    """
    Create and configure a Flask app instance for testing.
    Function-scoped for complete test isolation.
    """
    app = create_app('testing')
    app.extensions['data_api'] = data_api

    # Establish application context
    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture(scope='function')
def client(app):
    """
    Create a test client for the Flask app.
    Function-scoped for test isolation.
    """
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """
    Create a test CLI runner for the Flask app.
    """
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def operator_client(client):
    """Test client with an open operator session."""
    response = client.post('/login', json={'password': 'senha-teste'})
    assert response.status_code == 200
    return client


def records_by_resource(mapping):
    """
    ``side_effect`` for ``list_records`` that answers per collection path.

    Usage:
        data_api.list_records.side_effect = records_by_resource({
            CONTRACTS: [contract], INVOICES: [invoice]
        })
    """
    def list_records(resource, model, tenant_key):
        return list(mapping.get(resource, []))
    return list_records


@pytest.fixture
def by_resource():
    return records_by_resource
