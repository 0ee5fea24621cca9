"""Financial dashboard: monthly KPIs, receivables aging and six-month series."""
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from comercial.models.client import Client
from comercial.models.contract import Contract
from comercial.models.invoice import Invoice
from comercial.services.commission_service import commission_amount
from comercial.services.data_api_service import CLIENTS, CONTRACTS, INVOICES, get_data_api
from comercial.utils.dates import (
    add_months, is_in_month, local_now, month_label, next_period, period_name, previous_period
)
from comercial.utils.lookup import group_by, index_by_id

ZERO = Decimal('0')
HUNDRED = Decimal('100')
TWELVE = Decimal('12')
CENTS = Decimal('0.01')

# Receivables aging buckets (upper edge inclusive, in days past due)
AGING_BUCKETS = [
    ('0-30', 30),
    ('31-60', 60),
    ('60+', None),
]

SERIES_MONTHS = 6


@dataclass
class DashboardMetrics:
    """KPIs of one reporting period. Amounts in the invoice currency."""
    month: int
    year: int
    rbm: Decimal = ZERO
    total_commission: Decimal = ZERO
    rlm: Decimal = ZERO
    average_ticket: Decimal = ZERO
    growth_mom: Decimal = ZERO
    mrr: Decimal = ZERO
    new_clients: int = 0
    active_clients: int = 0
    acv: Decimal = ZERO
    paid_on_time_percent: Decimal = ZERO
    clients_with_overdue: int = 0
    aging: Dict[str, Decimal] = field(default_factory=dict)
    monthly_revenue: List[dict] = field(default_factory=list)
    monthly_growth: List[dict] = field(default_factory=list)
    aging_distribution: List[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Decimal):
                data[key] = _round(value)
        data['aging'] = {name: _round(value) for name, value in self.aging.items()}
        for series in ('monthly_revenue', 'monthly_growth', 'aging_distribution'):
            data[series] = [{'name': p['name'], 'value': _round(p['value'])} for p in data[series]]
        data['period'] = period_name(self.month, self.year)
        return data


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _value(record) -> Decimal:
    return record.value if record.value is not None else ZERO


def paid_in_month(invoices: Iterable[Invoice], month: int, year: int) -> List[Invoice]:
    return [invoice for invoice in invoices if is_in_month(invoice.payment_date, month, year)]


def net_revenue(invoices: List[Invoice], contracts_by_id: Dict) -> Decimal:
    """Paid value minus the commission owed on it."""
    gross = sum((_value(invoice) for invoice in invoices), ZERO)
    commission = sum(
        (commission_amount(invoice, contracts_by_id.get(invoice.contract_id)) for invoice in invoices),
        ZERO
    )
    return gross - commission


def growth_percent(current: Decimal, previous: Decimal) -> Decimal:
    """Relative change in percent; 0 when the base is zero or negative."""
    if previous <= 0:
        return ZERO
    return (current - previous) / previous * HUNDRED


def aging_bucket(days_past_due: int) -> str:
    for name, upper in AGING_BUCKETS:
        if upper is None or days_past_due <= upper:
            return name
    return AGING_BUCKETS[-1][0]


def compute_dashboard_metrics(invoices: List[Invoice], contracts: List[Contract], clients: List[Client],
                              month: int, year: int, now: Optional[datetime] = None) -> DashboardMetrics:
    """
    Compute every dashboard KPI for ``(month, year)``.

    Pure: same inputs and the same ``now`` give identical output.

    Args:
        invoices: All invoices of the tenant
        contracts: All contracts of the tenant
        clients: All clients of the tenant
        month: Reporting month (1-12)
        year: Reporting year
        now: Reference time for "active" and "overdue" (default: local now)

    Returns:
        DashboardMetrics
    """
    now = now or local_now()
    today = now.date()
    contracts_by_id = index_by_id(contracts)

    # Revenue
    paid_now = paid_in_month(invoices, month, year)
    rbm = sum((_value(invoice) for invoice in paid_now), ZERO)
    total_commission = sum(
        (commission_amount(invoice, contracts_by_id.get(invoice.contract_id)) for invoice in paid_now),
        ZERO
    )
    rlm = rbm - total_commission

    paying_clients = {invoice.client_id for invoice in paid_now}
    average_ticket = rlm / len(paying_clients) if paying_clients else ZERO

    prev_month, prev_year = previous_period(month, year)
    rlm_prev = net_revenue(paid_in_month(invoices, prev_month, prev_year), contracts_by_id)
    growth_mom = growth_percent(rlm, rlm_prev)

    # Contracts
    active_contracts = [contract for contract in contracts if contract.is_active_at(now)]
    # Every active contract is treated as annual
    mrr = sum((_value(contract) / TWELVE for contract in active_contracts), ZERO)
    active_clients = len({contract.client_id for contract in active_contracts})
    acv = (
        sum((_value(contract) for contract in active_contracts), ZERO) / len(active_contracts)
        if active_contracts else ZERO
    )

    contracts_by_client = group_by(contracts, 'client_id')
    new_clients = 0
    for client in clients:
        dated = [c for c in contracts_by_client.get(client.id, []) if c.created_at is not None]
        if not dated:
            continue
        first_contract = min(dated, key=lambda c: c.created_at)
        if is_in_month(first_contract.created_at.date(), month, year):
            new_clients += 1

    # Collections
    issued_now = [invoice for invoice in invoices if is_in_month(invoice.issue_date, month, year)]
    paid_on_time = [
        invoice for invoice in issued_now
        if invoice.payment_date is not None and invoice.due_date is not None
        and is_in_month(invoice.payment_date, month, year)
        and invoice.payment_date <= invoice.due_date
    ]
    paid_on_time_percent = (
        Decimal(len(paid_on_time)) / Decimal(len(issued_now)) * HUNDRED if issued_now else ZERO
    )

    overdue = [invoice for invoice in invoices if invoice.is_overdue_at(now)]
    clients_with_overdue = len({invoice.client_id for invoice in overdue})

    aging = {name: ZERO for name, _ in AGING_BUCKETS}
    for invoice in overdue:
        if invoice.value is None:
            continue
        aging[aging_bucket((today - invoice.due_date).days)] += invoice.value

    # Six-month series ending at the reporting month, oldest first
    start = add_months(date(year, month, 1), -(SERIES_MONTHS - 1))
    monthly_revenue = []
    for offset in range(SERIES_MONTHS):
        point = add_months(start, offset)
        total = sum((_value(i) for i in paid_in_month(invoices, point.month, point.year)), ZERO)
        monthly_revenue.append({'name': month_label(point.month, point.year), 'value': total})

    monthly_growth = []
    for index, point in enumerate(monthly_revenue):
        if index == 0 or monthly_revenue[index - 1]['value'] == 0:
            monthly_growth.append({'name': point['name'], 'value': ZERO})
            continue
        previous = monthly_revenue[index - 1]['value']
        monthly_growth.append({'name': point['name'], 'value': (point['value'] - previous) / previous * HUNDRED})

    aging_distribution = [{'name': f'{name} dias', 'value': aging[name]} for name, _ in AGING_BUCKETS]

    return DashboardMetrics(
        month=month,
        year=year,
        rbm=rbm,
        total_commission=total_commission,
        rlm=rlm,
        average_ticket=average_ticket,
        growth_mom=growth_mom,
        mrr=mrr,
        new_clients=new_clients,
        active_clients=active_clients,
        acv=acv,
        paid_on_time_percent=paid_on_time_percent,
        clients_with_overdue=clients_with_overdue,
        aging=aging,
        monthly_revenue=monthly_revenue,
        monthly_growth=monthly_growth,
        aging_distribution=aging_distribution,
    )


def load_dashboard(tenant_key: str, month: Optional[int] = None, year: Optional[int] = None,
                   now: Optional[datetime] = None) -> dict:
    """
    Fetch invoices, contracts and clients as one batch and compute the KPIs.

    Defaults to the current month. The result also carries the neighbouring
    periods for previous/next navigation.
    """
    now = now or local_now()
    month = month or now.month
    year = year or now.year

    api = get_data_api()
    data = api.fetch_many({
        'invoices': lambda: api.list_records(INVOICES, Invoice, tenant_key),
        'contracts': lambda: api.list_records(CONTRACTS, Contract, tenant_key),
        'clients': lambda: api.list_records(CLIENTS, Client, tenant_key),
    })

    metrics = compute_dashboard_metrics(
        data['invoices'], data['contracts'], data['clients'], month, year, now=now
    )
    prev_month, prev_year = previous_period(month, year)
    next_month, next_year = next_period(month, year)

    return {
        'metrics': metrics.to_dict(),
        'previous': {'month': prev_month, 'year': prev_year},
        'next': {'month': next_month, 'year': next_year},
    }
