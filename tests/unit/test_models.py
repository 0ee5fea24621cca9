"""Unit tests for records mirrored from the data service."""
from datetime import date, datetime
from decimal import Decimal

from comercial.models.agent import Agent
from comercial.models.client import Client
from comercial.models.common import to_decimal, to_int
from comercial.models.contract import Contract, STATUS_ACTIVE, STATUS_CANCELLED
from comercial.models.invoice import Invoice


class TestConversions:

    def test_to_decimal(self):
        assert to_decimal('1500.50') == Decimal('1500.50')
        assert to_decimal('1500,50') == Decimal('1500.50')
        assert to_decimal(10) == Decimal('10')
        assert to_decimal('') is None
        assert to_decimal('abc') is None

    def test_to_int(self):
        assert to_int('7') == 7
        assert to_int(None) is None
        assert to_int('x') is None


class TestContract:

    def test_from_api_with_embedded_names(self, app):
        contract = Contract.from_api({
            'id': 7,
            'clienteId': 1,
            'programaId': 2,
            'corretorId': None,
            'dataEmissao': '2024-01-15T03:00:00.000Z',
            'dataVencimento': '2024-12-31T03:00:00.000Z',
            'diaVencimento': 10,
            'valor': '12000.00',
            'comissao': 15,
            'status': 'ativo',
            'createdAt': '2024-01-15T13:00:00.000Z',
            'cliente': {'nomeFantasia': 'Padaria Central'},
            'programacao': {'programa': 'Manhã Total'},
        })

        assert contract.issue_date == date(2024, 1, 15)
        assert contract.due_date == date(2024, 12, 31)
        assert contract.value == Decimal('12000.00')
        assert contract.agent_id is None
        assert contract.client_name == 'Padaria Central'
        assert contract.program_name == 'Manhã Total'
        assert contract.created_at == datetime(2024, 1, 15, 10, 0)

    def test_active_until_due_day_starts(self):
        contract = Contract(due_date=date(2024, 3, 20))
        assert contract.is_active_at(datetime(2024, 3, 19, 23, 59))
        assert contract.is_active_at(datetime(2024, 3, 20))
        assert not contract.is_active_at(datetime(2024, 3, 20, 10, 0))
        assert not Contract().is_active_at(datetime(2024, 1, 1))

    def test_with_status_returns_copy(self):
        contract = Contract(id=1)
        cancelled = contract.with_status(STATUS_CANCELLED)
        assert cancelled.status == STATUS_CANCELLED
        assert contract.status == STATUS_ACTIVE


class TestInvoice:

    def test_paid_and_overdue(self):
        now = datetime(2024, 3, 20, 10, 0)
        assert Invoice(due_date=date(2024, 3, 19)).is_overdue_at(now)
        assert Invoice(due_date=date(2024, 3, 20)).is_overdue_at(now)
        assert not Invoice(due_date=date(2024, 3, 21)).is_overdue_at(now)
        paid = Invoice(due_date=date(2024, 3, 1), payment_date=date(2024, 3, 25))
        assert paid.is_paid
        assert not paid.is_overdue_at(now)

    def test_to_api_sends_null_payment(self, app):
        payload = Invoice(due_date=date(2024, 2, 10), value=Decimal('99.90')).to_api()
        assert payload['dataPagamento'] is None
        assert payload['valor'] == 99.9
        assert 'comissao' not in payload


def test_client_document_prefers_cnpj():
    assert Client(cpf='12345678909', cnpj='12345678000195').document == '12345678000195'
    assert Client(cpf='12345678909').document == '12345678909'


def test_agent_round_trip(app):
    agent = Agent.from_api({'id': 3, 'nome': 'Carla', 'dataAdmissao': '2023-03-01T03:00:00.000Z'})
    assert agent.admission_date == date(2023, 3, 1)
    assert agent.to_dict()['dataAdmissao'] == '01/03/2023'
