"""Commission calculator and the agent commission report."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from comercial.models.agent import Agent
from comercial.models.contract import Contract
from comercial.models.invoice import Invoice
from comercial.services.data_api_service import AGENTS, CONTRACTS, INVOICES, get_data_api
from comercial.utils.dates import format_local_date, local_now, parse_local_date
from comercial.utils.listing import filter_by_date_range, paginate, sort_records
from comercial.utils.lookup import index_by_id

UNASSIGNED_AGENT = 'Não atribuído'
UNKNOWN_LABEL = 'Desconhecido'
ALL_AGENTS = 'todos'

ZERO = Decimal('0')
HUNDRED = Decimal('100')


def commission_amount(invoice: Invoice, contract: Optional[Contract]) -> Decimal:
    """
    Commission owed on one invoice: ``value * percent / 100``.

    Zero when the contract is missing or either number is absent.

    Examples:
        >>> commission_amount(Invoice(value=Decimal('1000')), Contract(commission_percent=Decimal('15')))
        Decimal('150')
    """
    if contract is None or invoice.value is None or contract.commission_percent is None:
        return ZERO
    return invoice.value * contract.commission_percent / HUNDRED


@dataclass
class CommissionRecord:
    """One paid invoice seen from the agent's side. Derived, never stored."""
    invoice_id: Optional[int]
    agent: str
    client: str
    program: str
    issue_date: Optional[date]
    due_date: Optional[date]
    payment_date: Optional[date]
    value: Decimal
    commission_percent: Decimal
    commission_value: Decimal

    def to_dict(self) -> dict:
        return {
            'id': self.invoice_id,
            'corretor': self.agent,
            'cliente': self.client,
            'programa': self.program,
            'dataEmissao': format_local_date(self.issue_date) or '-',
            'dataVencimento': format_local_date(self.due_date) or '-',
            'dataPagamento': format_local_date(self.payment_date) or '-',
            'valor': self.value,
            'comissao': self.commission_percent,
            'valorComissao': self.commission_value,
        }


def build_commission_report(invoices: Iterable[Invoice], contracts: Iterable[Contract],
                            agents: Iterable[Agent]) -> List[CommissionRecord]:
    """
    One CommissionRecord per paid invoice.

    Contracts and agents are indexed once by id. An invoice whose contract
    is not loaded earns 0% and is reported as unassigned.
    """
    contracts_by_id = index_by_id(contracts)
    agents_by_id = index_by_id(agents)

    records = []
    for invoice in invoices:
        if not invoice.is_paid:
            continue

        contract = contracts_by_id.get(invoice.contract_id)
        agent = agents_by_id.get(invoice.agent_id)
        if contract is None or agent is None:
            agent_name = UNASSIGNED_AGENT
        else:
            agent_name = agent.name or UNASSIGNED_AGENT

        records.append(CommissionRecord(
            invoice_id=invoice.id,
            agent=agent_name,
            client=invoice.client_name or UNKNOWN_LABEL,
            program=invoice.program_name or UNKNOWN_LABEL,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            payment_date=invoice.payment_date,
            value=invoice.value or ZERO,
            commission_percent=(contract.commission_percent if contract else None) or ZERO,
            commission_value=commission_amount(invoice, contract),
        ))
    return records


def default_commission_range(now=None):
    """First day of the current month through today, as ``DD/MM/YYYY`` text."""
    today = (now or local_now()).date()
    return format_local_date(today.replace(day=1)), format_local_date(today)


def filter_commissions(records: Iterable[CommissionRecord], start: Optional[str] = None,
                       end: Optional[str] = None, agent: str = ALL_AGENTS) -> List[CommissionRecord]:
    """
    Filter by payment date range and agent name.

    Both bounds are ``DD/MM/YYYY`` text; if either one does not parse, the
    date filter is skipped.
    """
    records = filter_by_date_range(
        records, lambda record: record.payment_date,
        parse_local_date(start), parse_local_date(end)
    )
    if agent and agent != ALL_AGENTS:
        records = [record for record in records if record.agent == agent]
    return records


SORT_KEYS = {
    'corretor': lambda record: record.agent,
    'cliente': lambda record: record.client,
    'programa': lambda record: record.program,
    'dataPagamento': lambda record: record.payment_date,
    'valor': lambda record: record.value,
    'comissao': lambda record: record.commission_percent,
    'valorComissao': lambda record: record.commission_value,
}


def sort_commissions(records: Iterable[CommissionRecord], column: Optional[str],
                     direction: Optional[str]) -> List[CommissionRecord]:
    """Sort by a report column; unknown columns keep the original order."""
    key = SORT_KEYS.get(column)
    if key is None:
        return list(records)
    return sort_records(records, key, direction)


def summarize_commissions(records: Iterable[CommissionRecord]) -> Dict[str, Decimal]:
    total_value = ZERO
    total_commission = ZERO
    count = 0
    for record in records:
        total_value += record.value
        total_commission += record.commission_value
        count += 1
    return {
        'quantidade': count,
        'totalValor': total_value,
        'totalComissao': total_commission,
    }


def load_commission_report(tenant_key: str, start: Optional[str] = None, end: Optional[str] = None,
                           agent: str = ALL_AGENTS, sort: Optional[str] = None,
                           direction: Optional[str] = None, page: int = 1, per_page: int = 8) -> dict:
    """
    Fetch invoices, contracts and agents as one batch and build the report.

    Returns:
        dict: {'pagination', 'summary', 'agents', 'start', 'end'}
    """
    api = get_data_api()
    data = api.fetch_many({
        'invoices': lambda: api.list_records(INVOICES, Invoice, tenant_key),
        'contracts': lambda: api.list_records(CONTRACTS, Contract, tenant_key),
        'agents': lambda: api.list_records(AGENTS, Agent, tenant_key),
    })

    if start is None and end is None:
        start, end = default_commission_range()

    records = build_commission_report(data['invoices'], data['contracts'], data['agents'])
    records = filter_commissions(records, start, end, agent)
    records = sort_commissions(records, sort, direction)

    return {
        'pagination': paginate(records, page=page, per_page=per_page),
        'summary': summarize_commissions(records),
        'agents': sorted(a.name for a in data['agents'] if a.name),
        'start': start,
        'end': end,
    }
