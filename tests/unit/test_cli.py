"""Unit tests for Flask CLI commands."""
from datetime import date
from decimal import Decimal

from comercial import bcrypt
from comercial.models.client import Client
from comercial.models.invoice import Invoice
from comercial.services.data_api_service import CLIENTS, INVOICES
from comercial.utils.exceptions import DataServiceError


def test_hash_password(runner):
    result = runner.invoke(args=['hash-password'], input='nova-senha\nnova-senha\n')

    assert result.exit_code == 0
    password_hash = result.output.strip().splitlines()[-1]
    assert bcrypt.check_password_hash(password_hash, 'nova-senha')


def test_check_data_api_ok(runner, data_api):
    data_api.list_records.return_value = [Client(id=1), Client(id=2)]

    result = runner.invoke(args=['check-data-api'])

    assert result.exit_code == 0
    assert '2 clientes' in result.output
    assert data_api.list_records.call_args.args[0] == CLIENTS
    assert data_api.list_records.call_args.args[2] == 'test-tenant'


def test_check_data_api_failure(runner, data_api):
    data_api.list_records.side_effect = DataServiceError('Não foi possível conectar ao serviço de dados.')

    result = runner.invoke(args=['check-data-api'])

    assert result.exit_code == 1
    assert '[ERROR]' in result.output


def test_dashboard_metrics(runner, data_api, by_resource):
    data_api.list_records.side_effect = by_resource({
        INVOICES: [Invoice(id=1, client_id=1, value=Decimal('1000'), payment_date=date(2024, 3, 5))],
    })

    result = runner.invoke(args=['dashboard-metrics', '--month', '3', '--year', '2024'])

    assert result.exit_code == 0
    assert 'Março de 2024' in result.output
    assert 'R$ 1.000,00' in result.output


def test_dashboard_metrics_rejects_bad_month(runner):
    result = runner.invoke(args=['dashboard-metrics', '--month', '13'])
    assert result.exit_code != 0
