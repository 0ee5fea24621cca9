"""Unit tests for invoice listing, payment and the invoice report."""
from datetime import date, datetime
from decimal import Decimal

import pytest

from comercial.models.invoice import Invoice
from comercial.services import invoice_service
from comercial.services.invoice_service import STATUS_ALL, STATUS_PAID, STATUS_PENDING
from comercial.utils.exceptions import BusinessLogicError, NotFoundError, ValidationError


def _invoices():
    return [
        Invoice(id=1, client_name='Padaria Central', contract_description='Manhã',
                due_date=date(2024, 2, 10), value=Decimal('1000')),
        Invoice(id=2, client_name='Mercado Sol', contract_description='Tarde',
                due_date=date(2024, 2, 20), payment_date=date(2024, 2, 18), value=Decimal('500')),
        Invoice(id=3, client_name='Padaria Lua', contract_description='Noite',
                due_date=date(2024, 3, 10), value=Decimal('250.50')),
    ]


class TestFilterInvoices:

    def test_status(self):
        assert [i.id for i in invoice_service.filter_invoices(_invoices(), status=STATUS_PENDING)] == [1, 3]
        assert [i.id for i in invoice_service.filter_invoices(_invoices(), status=STATUS_PAID)] == [2]
        assert len(invoice_service.filter_invoices(_invoices(), status=STATUS_ALL)) == 3

    def test_search_client_or_contract(self):
        assert [i.id for i in invoice_service.filter_invoices(_invoices(), search='padaria')] == [1, 3]
        assert [i.id for i in invoice_service.filter_invoices(_invoices(), search='tarde')] == [2]

    def test_due_date_range(self):
        result = invoice_service.filter_invoices(_invoices(), start='01/02/2024', end='29/02/2024')
        assert [i.id for i in result] == [1, 2]

    def test_default_due_range(self):
        assert invoice_service.default_due_range(datetime(2024, 2, 15)) == ('01/02/2024', '15/02/2024')


class TestRegisterPayment:

    def test_marks_invoice_paid(self, app, data_api):
        invoice = Invoice(id=1, due_date=date(2024, 2, 10))

        paid = invoice_service.register_payment(invoice, '08/02/2024', 2)

        data_api.register_payment.assert_called_once_with(1, '2024-02-08T03:00:00.000Z', 2)
        assert paid.payment_date == date(2024, 2, 8)
        assert paid.payment_method_id == 2
        assert paid.is_paid

    def test_invalid_date(self, app, data_api):
        with pytest.raises(ValidationError) as exc_info:
            invoice_service.register_payment(Invoice(id=1), '31/02/2024', 2)

        assert exc_info.value.message == 'Data de pagamento inválida!'
        data_api.register_payment.assert_not_called()

    def test_already_paid(self, app, data_api):
        with pytest.raises(BusinessLogicError):
            invoice_service.register_payment(Invoice(id=1, payment_date=date(2024, 2, 1)), '08/02/2024', 2)

        data_api.register_payment.assert_not_called()


def test_get_invoice_not_found(app, data_api):
    data_api.list_records.return_value = _invoices()

    assert invoice_service.get_invoice(2, 'test-tenant').id == 2
    with pytest.raises(NotFoundError):
        invoice_service.get_invoice(99, 'test-tenant')


def test_invoice_report_totals():
    report = invoice_service.invoice_report(_invoices())

    assert report['quantidade'] == 3
    assert report['total'] == Decimal('1750.50')
    assert [row['situacao'] for row in report['rows']] == ['Pendente', 'Paga', 'Pendente']
    assert report['rows'][1]['dataPagamento'] == '18/02/2024'
