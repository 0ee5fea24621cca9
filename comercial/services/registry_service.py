"""Registry CRUD: clients, agents, programs, payment methods and the audit log."""
from typing import List, Optional

from flask import current_app

from comercial.models.agent import Agent
from comercial.models.client import Client
from comercial.models.log_entry import LogEntry
from comercial.models.payment_method import PaymentMethod
from comercial.models.program import Program
from comercial.services.data_api_service import (
    AGENTS, CLIENTS, LOGS, PAYMENT_METHODS, PROGRAMS, get_data_api
)
from comercial.utils.exceptions import DuplicateError
from comercial.utils.formatting import format_phone
from comercial.utils.listing import matches_search, paginate, sort_records

ALL = 'all'

# Registry name -> (collection path, record class)
REGISTRIES = {
    'clients': (CLIENTS, Client),
    'agents': (AGENTS, Agent),
    'programs': (PROGRAMS, Program),
    'payment_methods': (PAYMENT_METHODS, PaymentMethod),
}

CLIENT_SORT_KEYS = {
    'nomeFantasia': lambda client: client.trade_name,
    'atividade': lambda client: client.activity,
    'documento': lambda client: client.document,
    'email': lambda client: client.email,
    'fone': lambda client: client.phone,
}


def _per_page(per_page):
    return per_page or current_app.config.get('ITEMS_PER_PAGE', 8)


def list_records(registry: str, tenant_key: str) -> list:
    resource, model = REGISTRIES[registry]
    return get_data_api().list_records(resource, model, tenant_key)


def create_record(registry: str, record, tenant_key: str):
    """POST a new record; returns it with the id assigned by the service."""
    resource, model = REGISTRIES[registry]
    created = get_data_api().create_record(resource, model, record.to_api(), tenant_key)
    current_app.logger.info(f'{model.__name__} created: id={created.id}')
    return created


def update_record(registry: str, record_id: int, record, tenant_key: str):
    resource, model = REGISTRIES[registry]
    record.id = record_id
    get_data_api().update_record(resource, record_id, record.to_api(), tenant_key)
    current_app.logger.info(f'{model.__name__} updated: id={record_id}')
    return record


def delete_record(registry: str, record_id: int):
    resource, model = REGISTRIES[registry]
    get_data_api().delete_record(resource, record_id)
    current_app.logger.info(f'{model.__name__} deleted: id={record_id}')


# ---------------- Clients ---------------- #

def find_duplicate_tax_id(client: Client, existing: List[Client]) -> Optional[str]:
    """
    Name of the tax id (``CNPJ``/``CPF``) that another client already uses.

    Blank (or single character) ids never count as duplicates.
    """
    for other in existing:
        if other.id is not None and other.id == client.id:
            continue
        if len(client.cnpj) > 1 and other.cnpj == client.cnpj:
            return 'CNPJ'
        if len(client.cpf) > 1 and other.cpf == client.cpf:
            return 'CPF'
    return None


def create_client(client: Client, tenant_key: str) -> Client:
    """
    Register a client, rejecting a CNPJ or CPF that is already in use.

    Raises:
        DuplicateError: Tax id already registered for this tenant
    """
    duplicate = find_duplicate_tax_id(client, list_records('clients', tenant_key))
    if duplicate:
        raise DuplicateError(f'{duplicate} já cadastrado!')

    client.phone = format_phone(client.phone)
    return create_record('clients', client, tenant_key)


def update_client(client_id: int, client: Client, tenant_key: str) -> Client:
    client.phone = format_phone(client.phone)
    return update_record('clients', client_id, client, tenant_key)


def list_clients(tenant_key: str, search: str = '', sort: Optional[str] = None,
                 direction: Optional[str] = None, page: int = 1, per_page: Optional[int] = None):
    """Clients matching ``search`` (trade name, activity, e-mail), sorted and paginated."""
    clients = [
        client for client in list_records('clients', tenant_key)
        if matches_search(search, client.trade_name, client.activity, client.email)
    ]
    key = CLIENT_SORT_KEYS.get(sort)
    if key is not None:
        clients = sort_records(clients, key, direction)
    return paginate(clients, page=page, per_page=_per_page(per_page))


# ---------------- Agents, programs, payment methods ---------------- #

def save_agent(agent: Agent, tenant_key: str, agent_id: Optional[int] = None) -> Agent:
    agent.phone = format_phone(agent.phone)
    if agent_id is None:
        return create_record('agents', agent, tenant_key)
    return update_record('agents', agent_id, agent, tenant_key)


def list_agents(tenant_key: str, search: str = '', page: int = 1, per_page: Optional[int] = None):
    agents = [a for a in list_records('agents', tenant_key) if matches_search(search, a.name)]
    return paginate(agents, page=page, per_page=_per_page(per_page))


def list_programs(tenant_key: str, search: str = '', page: int = 1, per_page: Optional[int] = None):
    programs = [p for p in list_records('programs', tenant_key) if matches_search(search, p.name)]
    return paginate(programs, page=page, per_page=_per_page(per_page))


def list_payment_methods(tenant_key: str) -> List[PaymentMethod]:
    return list_records('payment_methods', tenant_key)


# ---------------- Audit log ---------------- #

def filter_logs(logs: List[LogEntry], search: str = '', table: str = ALL, category: str = ALL) -> List[LogEntry]:
    """Text search over message and table, plus exact table/type filters."""
    return [
        log for log in logs
        if matches_search(search, log.message, log.table)
        and (not table or table == ALL or log.table == table)
        and (not category or category == ALL or log.category == category)
    ]


def log_filter_options(logs: List[LogEntry]) -> dict:
    """Distinct tables and types, in first-seen order, for the filter dropdowns."""
    tables = list(dict.fromkeys(log.table for log in logs))
    categories = list(dict.fromkeys(log.category for log in logs))
    return {'tabelas': [ALL] + tables, 'tipos': [ALL] + categories}


def list_logs(tenant_key: str, search: str = '', table: str = ALL, category: str = ALL,
              page: int = 1, per_page: Optional[int] = None) -> dict:
    """
    Audit log, newest first.

    Returns:
        dict: {'pagination': Pagination, 'options': log_filter_options(...)}
    """
    logs = get_data_api().list_records(LOGS, LogEntry, tenant_key)
    logs = sort_records(logs, lambda log: log.created_at, 'desc')
    return {
        'pagination': paginate(filter_logs(logs, search, table, category), page=page,
                               per_page=_per_page(per_page)),
        'options': log_filter_options(logs),
    }
