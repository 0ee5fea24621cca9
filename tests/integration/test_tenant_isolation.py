"""Integration tests: every data service call carries the session's tenant key."""
from comercial.models.contract import Contract
from comercial.services.data_api_service import CLIENTS, CONTRACTS


def test_reads_are_scoped_by_session_tenant(operator_client, data_api):
    operator_client.get('/clientes')

    resource, _model, tenant_key = data_api.list_records.call_args.args
    assert resource == CLIENTS
    assert tenant_key == 'test-tenant'


def test_writes_are_scoped_by_session_tenant(operator_client, data_api):
    data_api.create_record.return_value = Contract(id=1)

    operator_client.post('/contratos', json={
        'cliente_id': 1, 'programa_id': 2, 'forma_pagamento_id': 4,
        'data_emissao': '15/01/2024', 'data_vencimento': '05/03/2024',
        'dia_vencimento': 0, 'num_insercoes': 10, 'valor': '100', 'comissao': '10',
    })

    resource, _model, _payload, tenant_key = data_api.create_record.call_args.args
    assert resource == CONTRACTS
    assert tenant_key == 'test-tenant'


def test_session_without_tenant_key_is_rejected(client, data_api):
    client.post('/login', json={'password': 'senha-teste'})
    with client.session_transaction() as session:
        session.pop('tenant_key')

    response = client.get('/clientes')

    assert response.status_code == 401
    data_api.list_records.assert_not_called()
