"""Unit tests for registry CRUD (clients, agents, programs, payment methods, logs)."""
from datetime import datetime

import pytest

from comercial.models.agent import Agent
from comercial.models.client import Client
from comercial.models.log_entry import LogEntry
from comercial.services import registry_service
from comercial.services.data_api_service import AGENTS, CLIENTS, LOGS, PROGRAMS
from comercial.utils.exceptions import DuplicateError

TENANT = 'test-tenant'


class TestDuplicateTaxId:

    def test_duplicate_cnpj(self):
        existing = [Client(id=1, cnpj='12345678000195')]
        assert registry_service.find_duplicate_tax_id(Client(cnpj='12345678000195'), existing) == 'CNPJ'

    def test_duplicate_cpf(self):
        existing = [Client(id=1, cpf='12345678909')]
        assert registry_service.find_duplicate_tax_id(Client(cpf='12345678909'), existing) == 'CPF'

    def test_blank_ids_never_duplicate(self):
        existing = [Client(id=1, cpf='', cnpj='-')]
        assert registry_service.find_duplicate_tax_id(Client(cpf='', cnpj='-'), existing) is None

    def test_same_record_is_not_a_duplicate(self):
        existing = [Client(id=1, cnpj='12345678000195')]
        assert registry_service.find_duplicate_tax_id(Client(id=1, cnpj='12345678000195'), existing) is None


class TestClients:

    def test_create_client_rejects_duplicate(self, app, data_api):
        data_api.list_records.return_value = [Client(id=1, cnpj='12345678000195')]

        with pytest.raises(DuplicateError) as exc_info:
            registry_service.create_client(Client(trade_name='Nova', cnpj='12345678000195'), TENANT)

        assert exc_info.value.message == 'CNPJ já cadastrado!'
        data_api.create_record.assert_not_called()

    def test_create_client_formats_phone(self, app, data_api):
        data_api.create_record.return_value = Client(id=5, trade_name='Nova')

        created = registry_service.create_client(Client(trade_name='Nova', phone='11912345678'), TENANT)

        resource, _model, payload, tenant = data_api.create_record.call_args.args
        assert resource == CLIENTS
        assert payload['fone'] == '(11) 91234-5678'
        assert tenant == TENANT
        assert created.id == 5

    def test_list_clients_search_and_sort(self, app, data_api):
        data_api.list_records.return_value = [
            Client(id=1, trade_name='Padaria Central', activity='Alimentação'),
            Client(id=2, trade_name='Auto Peças Sol', activity='Automotivo'),
            Client(id=3, trade_name='Açougue Bom', activity='Alimentação'),
        ]

        page = registry_service.list_clients(TENANT, search='alimentação', sort='nomeFantasia', direction='asc')

        assert [c.id for c in page.items] == [3, 1]

    def test_update_client(self, app, data_api):
        updated = registry_service.update_client(4, Client(trade_name='X', phone='12345678'), TENANT)

        assert updated.id == 4
        resource, record_id, payload, _tenant = data_api.update_record.call_args.args
        assert (resource, record_id) == (CLIENTS, 4)
        assert payload['fone'] == '1234-5678'


class TestOtherRegistries:

    def test_save_agent_creates_or_updates(self, app, data_api):
        data_api.create_record.return_value = Agent(id=9, name='Carla')

        assert registry_service.save_agent(Agent(name='Carla'), TENANT).id == 9
        registry_service.save_agent(Agent(name='Carla'), TENANT, agent_id=9)

        assert data_api.create_record.call_args.args[0] == AGENTS
        assert data_api.update_record.call_args.args[:2] == (AGENTS, 9)

    def test_delete_record(self, app, data_api):
        registry_service.delete_record('programs', 3)
        data_api.delete_record.assert_called_once_with(PROGRAMS, 3)

    def test_list_agents_search(self, app, data_api):
        data_api.list_records.return_value = [Agent(id=1, name='Carla'), Agent(id=2, name='Bruno')]
        page = registry_service.list_agents(TENANT, search='bru')
        assert [a.id for a in page.items] == [2]


class TestLogs:

    def _logs(self):
        return [
            LogEntry(id=1, category='create', table='clientes', message='Cliente criado',
                     created_at=datetime(2024, 1, 1, 10)),
            LogEntry(id=2, category='delete', table='faturamento', message='Fatura excluída',
                     created_at=datetime(2024, 1, 3, 10)),
            LogEntry(id=3, category='update', table='clientes', message='Cliente alterado',
                     created_at=datetime(2024, 1, 2, 10)),
        ]

    def test_filter_by_table_and_type(self):
        logs = self._logs()
        assert [l.id for l in registry_service.filter_logs(logs, table='clientes')] == [1, 3]
        assert [l.id for l in registry_service.filter_logs(logs, category='delete')] == [2]
        assert [l.id for l in registry_service.filter_logs(logs, search='alterado')] == [3]
        assert len(registry_service.filter_logs(logs, table='all', category='all')) == 3

    def test_filter_options(self):
        options = registry_service.log_filter_options(self._logs())
        assert options['tabelas'] == ['all', 'clientes', 'faturamento']
        assert options['tipos'] == ['all', 'create', 'delete', 'update']

    def test_list_logs_newest_first(self, app, data_api):
        data_api.list_records.return_value = self._logs()

        result = registry_service.list_logs(TENANT)

        assert data_api.list_records.call_args.args[0] == LOGS
        assert [l.id for l in result['pagination'].items] == [2, 3, 1]
