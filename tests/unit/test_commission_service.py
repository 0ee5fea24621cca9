"""Unit tests for commission calculation and the commission report."""
from datetime import date, datetime
from decimal import Decimal

from comercial.models.agent import Agent
from comercial.models.contract import Contract
from comercial.models.invoice import Invoice
from comercial.services import commission_service
from comercial.services.commission_service import (
    UNASSIGNED_AGENT, build_commission_report, commission_amount, filter_commissions,
    sort_commissions, summarize_commissions
)
from comercial.services.data_api_service import AGENTS, CONTRACTS, INVOICES


def _invoice(**kwargs):
    defaults = dict(
        id=1, client_id=1, contract_id=7, agent_id=3, value=Decimal('1000'),
        issue_date=date(2024, 1, 1), due_date=date(2024, 2, 10), payment_date=date(2024, 2, 8),
        client_name='Padaria Central', program_name='Manhã Total',
    )
    defaults.update(kwargs)
    return Invoice(**defaults)


CONTRACT = Contract(id=7, commission_percent=Decimal('15'))
AGENT = Agent(id=3, name='Carla Souza')


class TestCommissionAmount:

    def test_value_times_percent(self):
        assert commission_amount(_invoice(), CONTRACT) == Decimal('150')

    def test_missing_contract_is_zero(self):
        assert commission_amount(_invoice(), None) == Decimal('0')

    def test_missing_numbers_are_zero(self):
        assert commission_amount(_invoice(value=None), CONTRACT) == Decimal('0')
        assert commission_amount(_invoice(), Contract(id=7)) == Decimal('0')

    def test_decimal_precision(self):
        contract = Contract(id=7, commission_percent=Decimal('12.5'))
        assert commission_amount(_invoice(value=Decimal('999.99')), contract) == Decimal('124.99875')


class TestBuildReport:

    def test_only_paid_invoices(self):
        invoices = [_invoice(id=1), _invoice(id=2, payment_date=None)]
        records = build_commission_report(invoices, [CONTRACT], [AGENT])
        assert [r.invoice_id for r in records] == [1]

    def test_record_fields(self):
        record = build_commission_report([_invoice()], [CONTRACT], [AGENT])[0]
        assert record.agent == 'Carla Souza'
        assert record.commission_percent == Decimal('15')
        assert record.commission_value == Decimal('150')
        assert record.to_dict()['dataPagamento'] == '08/02/2024'

    def test_missing_contract_unassigned_zero(self):
        record = build_commission_report([_invoice(contract_id=99)], [CONTRACT], [AGENT])[0]
        assert record.agent == UNASSIGNED_AGENT
        assert record.commission_value == Decimal('0')
        assert record.commission_percent == Decimal('0')

    def test_missing_agent_unassigned(self):
        record = build_commission_report([_invoice(agent_id=None)], [CONTRACT], [AGENT])[0]
        assert record.agent == UNASSIGNED_AGENT
        assert record.commission_value == Decimal('150')

    def test_empty_dates_render_dash(self):
        record = build_commission_report([_invoice(issue_date=None)], [CONTRACT], [AGENT])[0]
        assert record.to_dict()['dataEmissao'] == '-'


class TestFilterSortSummarize:

    def _records(self):
        return build_commission_report([
            _invoice(id=1, payment_date=date(2024, 2, 1), value=Decimal('500')),
            _invoice(id=2, payment_date=date(2024, 2, 20), value=Decimal('2000'), agent_id=None),
            _invoice(id=3, payment_date=date(2024, 3, 1), value=Decimal('1000')),
        ], [CONTRACT], [AGENT])

    def test_payment_date_range(self):
        records = filter_commissions(self._records(), '01/02/2024', '29/02/2024')
        assert [r.invoice_id for r in records] == [1, 2]

    def test_unparseable_bound_skips_range(self):
        assert len(filter_commissions(self._records(), '31/02/2024', '01/03/2024')) == 3

    def test_agent_filter(self):
        records = filter_commissions(self._records(), agent='Carla Souza')
        assert [r.invoice_id for r in records] == [1, 3]
        assert len(filter_commissions(self._records(), agent='todos')) == 3

    def test_sort_by_commission_value(self):
        records = sort_commissions(self._records(), 'valorComissao', 'desc')
        assert [r.invoice_id for r in records] == [2, 3, 1]

    def test_unknown_sort_key_keeps_order(self):
        assert [r.invoice_id for r in sort_commissions(self._records(), 'x', 'asc')] == [1, 2, 3]

    def test_summary(self):
        summary = summarize_commissions(self._records())
        assert summary == {
            'quantidade': 3,
            'totalValor': Decimal('3500'),
            'totalComissao': Decimal('525'),
        }


def test_load_report_batches_reads(app, data_api, by_resource):
    data_api.list_records.side_effect = by_resource({
        INVOICES: [_invoice()],
        CONTRACTS: [CONTRACT],
        AGENTS: [AGENT, Agent(id=4, name='Bruno Lima')],
    })

    report = commission_service.load_commission_report('test-tenant', start='01/02/2024', end='29/02/2024')

    data_api.fetch_many.assert_called_once()
    assert report['pagination'].total == 1
    assert report['summary']['totalComissao'] == Decimal('150')
    assert report['agents'] == ['Bruno Lima', 'Carla Souza']


def test_load_report_default_range(app, data_api, mocker):
    mocker.patch('comercial.services.commission_service.local_now', return_value=datetime(2024, 2, 15))

    report = commission_service.load_commission_report('test-tenant')

    assert report['start'] == '01/02/2024'
    assert report['end'] == '15/02/2024'
