"""Integration tests for invoice routes (list, payment, report)."""
from datetime import date
from decimal import Decimal

from comercial.models.invoice import Invoice
from comercial.services.data_api_service import INVOICES


def _invoices():
    return [
        Invoice(id=1, client_name='Padaria Central', due_date=date(2024, 2, 10), value=Decimal('1000')),
        Invoice(id=2, client_name='Mercado Sol', due_date=date(2024, 2, 20),
                payment_date=date(2024, 2, 18), value=Decimal('500')),
    ]


class TestInvoiceList:

    def test_filtered_by_status_and_range(self, operator_client, data_api):
        data_api.list_records.return_value = _invoices()

        response = operator_client.get('/faturas?status=pendentes&inicio=01/02/2024&fim=29/02/2024')

        assert response.status_code == 200
        data = response.get_json()
        assert [i['id'] for i in data['items']] == [1]
        assert data['items'][0]['valor'] == '1000'
        assert data['inicio'] == '01/02/2024'

    def test_default_range_is_current_month(self, operator_client, data_api, mocker):
        from datetime import datetime
        mocker.patch('comercial.services.invoice_service.local_now', return_value=datetime(2024, 2, 15))

        data = operator_client.get('/faturas').get_json()

        assert (data['inicio'], data['fim']) == ('01/02/2024', '15/02/2024')


class TestPayment:

    def test_register_payment(self, operator_client, data_api):
        data_api.list_records.return_value = _invoices()

        response = operator_client.post('/faturas/1/pagamento', json={
            'data_pagamento': '08/02/2024',
            'forma_pagamento_id': 2,
        })

        assert response.status_code == 200
        assert response.get_json()['fatura']['dataPagamento'] == '08/02/2024'
        data_api.register_payment.assert_called_once_with(1, '2024-02-08T03:00:00.000Z', 2)

    def test_invalid_payment_date(self, operator_client, data_api):
        data_api.list_records.return_value = _invoices()

        response = operator_client.post('/faturas/1/pagamento', json={
            'data_pagamento': '32/01/2024',
            'forma_pagamento_id': 2,
        })

        assert response.status_code == 400
        data_api.register_payment.assert_not_called()

    def test_already_paid(self, operator_client, data_api):
        data_api.list_records.return_value = _invoices()

        response = operator_client.post('/faturas/2/pagamento', json={
            'data_pagamento': '08/02/2024',
            'forma_pagamento_id': 2,
        })

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Fatura já está paga.'

    def test_unknown_invoice(self, operator_client, data_api):
        response = operator_client.post('/faturas/99/pagamento', json={
            'data_pagamento': '08/02/2024',
            'forma_pagamento_id': 2,
        })
        assert response.status_code == 404


def test_delete_invoice(operator_client, data_api):
    response = operator_client.delete('/faturas/1')

    assert response.status_code == 200
    data_api.delete_record.assert_called_once_with(INVOICES, 1)


def test_report(operator_client, data_api):
    data_api.list_records.return_value = _invoices()

    data = operator_client.get('/faturas/relatorio?inicio=01/02/2024&fim=29/02/2024').get_json()

    assert data['quantidade'] == 2
    assert data['total'] == '1500'
    assert [row['situacao'] for row in data['rows']] == ['Pendente', 'Paga']


def test_unknown_status_rejected(operator_client, data_api):
    response = operator_client.get('/faturas?status=canceladas')

    assert response.status_code == 400
    data_api.list_records.assert_not_called()
