"""Contract lifecycle and the recurring invoice scheduler."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from flask import current_app

from comercial.models.contract import (
    Contract, STATUS_ACTIVE, STATUS_CANCELLED, STATUS_INACTIVE
)
from comercial.models.invoice import Invoice
from comercial.models.common import decimal_to_api
from comercial.services.data_api_service import CONTRACTS, INVOICES, get_data_api
from comercial.utils.dates import add_months, day_in_month, first_day_of_month, local_now
from comercial.utils.exceptions import BusinessLogicError, DataServiceError, NotFoundError
from comercial.utils.listing import matches_search, paginate
from comercial.utils.lookup import index_by_id

# Status filter values accepted by the contract list
STATUS_FILTERS = {
    'todos': None,
    'ativos': STATUS_ACTIVE,
    'inativos': STATUS_INACTIVE,
    'cancelados': STATUS_CANCELLED,
}
DEFAULT_STATUS_FILTER = 'ativos'


@dataclass
class BatchResult:
    """Outcome of a best-effort loop of independent writes."""
    succeeded: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.failed == 0

    def record_failure(self, message: str):
        self.failed += 1
        self.errors.append(message)

    def to_dict(self) -> dict:
        return {
            'sucesso': self.succeeded,
            'falhas': self.failed,
            'erros': list(self.errors),
        }


@dataclass
class CancellationResult:
    """
    Outcome of a cancellation.

    Pending invoices are deleted one by one before the status update, with no
    rollback: ``failed`` > 0 means some unpaid invoices survived.
    """
    deleted: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'excluidas': self.deleted,
            'falhas': self.failed,
            'erros': list(self.errors),
        }


# ---------------- Scheduler ---------------- #

def compute_due_dates(issue_date: date, end_date: date, day_of_month: Optional[int]) -> List[date]:
    """
    Monthly due dates of a contract, ascending.

    Walks month by month from the month of ``issue_date`` through the month of
    ``end_date``. The first month is only billed when the contract started on
    or before the due day; every later month is always billed. A due day past
    the end of a short month is clamped to that month's last day (30 in
    February gives 28/29 February). It never rolls over into the next
    month, so February is not skipped in favour of 1 or 2 March.

    Args:
        issue_date: Contract start
        end_date: Contract due date (only its month matters)
        day_of_month: Recurring due day (1-30); 0/None yields no dates

    Returns:
        list of date

    Examples:
        >>> compute_due_dates(date(2024, 1, 15), date(2024, 3, 5), 10)
        [datetime.date(2024, 2, 10), datetime.date(2024, 3, 10)]
    """
    if not day_of_month or issue_date is None or end_date is None:
        return []

    window_end = first_day_of_month(end_date)
    current = first_day_of_month(issue_date)
    due_dates = []
    is_first_month = True

    while current <= window_end:
        if not is_first_month or issue_date.day <= day_of_month:
            due_dates.append(day_in_month(current.year, current.month, day_of_month))
        current = add_months(current, 1)
        is_first_month = False

    return due_dates


def build_invoice(contract: Contract, due_date: date, issued_on: date) -> Invoice:
    """Unpaid invoice for one billing period of ``contract``."""
    return Invoice(
        client_id=contract.client_id,
        contract_id=contract.id,
        program_id=contract.program_id,
        agent_id=contract.agent_id,
        payment_method_id=contract.payment_method_id,
        issue_date=issued_on,
        due_date=due_date,
        payment_date=None,
        value=contract.value,
        description=contract.description,
    )


def generate_contract_invoices(contract: Contract, tenant_key: str, now=None) -> BatchResult:
    """
    Create one invoice per due date of the contract window.

    Calls are sequential and best-effort: a failed create is logged and
    counted, and the remaining periods are still generated. Nothing already
    created is rolled back.
    """
    api = get_data_api()
    today = (now or local_now()).date()
    result = BatchResult()

    due_dates = compute_due_dates(contract.issue_date, contract.due_date, contract.day_of_month)
    for due_date in due_dates:
        invoice = build_invoice(contract, due_date, today)
        try:
            api.create_record(INVOICES, Invoice, invoice.to_api(), tenant_key)
            result.succeeded += 1
        except DataServiceError as e:
            current_app.logger.warning(
                f'Invoice generation failed: contract={contract.id} due={due_date}: {e.message}'
            )
            result.record_failure(f'Erro ao gerar fatura com vencimento em {due_date:%d/%m/%Y}.')

    current_app.logger.info(
        f'Generated invoices for contract {contract.id}: '
        f'{result.succeeded} created, {result.failed} failed'
    )
    return result


# ---------------- Lifecycle ---------------- #

def list_all_contracts(tenant_key: str) -> List[Contract]:
    return get_data_api().list_records(CONTRACTS, Contract, tenant_key)


def get_contract(contract_id: int, tenant_key: str) -> Contract:
    """
    Contract by id.

    Raises:
        NotFoundError: If the tenant has no such contract
    """
    contract = index_by_id(list_all_contracts(tenant_key)).get(contract_id)
    if contract is None:
        raise NotFoundError(f'Contrato {contract_id} não encontrado.')
    return contract


def create_contract(contract: Contract, tenant_key: str, now=None) -> Tuple[Contract, BatchResult]:
    """
    Persist a new contract, then generate its recurring invoices.

    Returns:
        tuple: (created contract with its id, BatchResult of the generation)

    Raises:
        DataServiceError: If the contract itself could not be created
    """
    created = get_data_api().create_record(CONTRACTS, Contract, contract.to_api(), tenant_key)
    current_app.logger.info(f'Contract created: id={created.id} client={created.client_id}')

    # The service may echo only part of the record; the window comes from the form
    if created.issue_date is None:
        created.issue_date = contract.issue_date
    if created.due_date is None:
        created.due_date = contract.due_date
    if created.day_of_month is None:
        created.day_of_month = contract.day_of_month
    if created.value is None:
        created.value = contract.value

    if not created.day_of_month:
        return created, BatchResult()

    return created, generate_contract_invoices(created, tenant_key, now=now)


def propagate_to_pending_invoices(contract: Contract, tenant_key: str) -> BatchResult:
    """
    Copy the editable contract terms onto every unpaid invoice.

    Value, payment method, description, agent and commission are overwritten
    with a full-record PUT. Paid invoices are never touched.
    """
    api = get_data_api()
    pending = api.list_pending_invoices(contract.id, tenant_key)
    result = BatchResult()

    for raw in pending:
        if raw.get('dataPagamento'):
            current_app.logger.warning(
                f'Pending list returned paid invoice {raw.get("id")} for contract {contract.id}; skipped'
            )
            continue

        payload = {
            **raw,
            'valor': decimal_to_api(contract.value),
            'formaPagamentoId': contract.payment_method_id,
            'descritivo': contract.description,
            'corretoresId': contract.agent_id,
            'comissao': decimal_to_api(contract.commission_percent),
        }
        try:
            api.update_record(INVOICES, raw.get('id'), payload, tenant_key)
            result.succeeded += 1
        except DataServiceError as e:
            current_app.logger.warning(f'Invoice {raw.get("id")} update failed: {e.message}')
            result.record_failure(f'Erro ao atualizar a fatura {raw.get("id")}.')

    return result


def update_contract(contract_id: int, contract: Contract, tenant_key: str) -> BatchResult:
    """
    Persist contract edits and propagate them to its unpaid invoices.

    Raises:
        DataServiceError: If the contract update or the pending invoice fetch
            fails (nothing is propagated then)
    """
    contract.id = contract_id
    get_data_api().update_record(CONTRACTS, contract_id, contract.to_api(), tenant_key)
    current_app.logger.info(f'Contract updated: id={contract_id}')
    return propagate_to_pending_invoices(contract, tenant_key)


def _delete_pending_invoices(contract_id: int, tenant_key: str, action: str) -> CancellationResult:
    """Delete each unpaid invoice of a contract once; failures are counted."""
    api = get_data_api()
    result = CancellationResult()

    for raw in api.list_pending_invoices(contract_id, tenant_key):
        invoice_id = raw.get('id')
        try:
            api.delete_record(INVOICES, invoice_id)
            result.deleted += 1
        except DataServiceError as e:
            current_app.logger.warning(
                f'{action} of contract {contract_id}: invoice {invoice_id} delete failed: {e.message}'
            )
            result.failed += 1
            result.errors.append(f'Erro ao excluir a fatura {invoice_id}.')
    return result


def cancel_contract(contract: Contract, tenant_key: str) -> CancellationResult:
    """
    Delete the contract's unpaid invoices, then mark it ``cancelado``.

    Not transactional. Each delete is attempted once; failures are counted
    and the loop continues. The status update runs afterwards either way.

    Raises:
        DataServiceError: If the pending fetch or the final status update
            fails; already deleted invoices stay deleted
    """
    result = _delete_pending_invoices(contract.id, tenant_key, 'Cancellation')

    try:
        get_data_api().update_record(
            CONTRACTS, contract.id, contract.with_status(STATUS_CANCELLED).to_api(), tenant_key
        )
    except DataServiceError:
        current_app.logger.error(
            f'Contract {contract.id} status update failed after deleting '
            f'{result.deleted} pending invoices'
        )
        raise

    current_app.logger.info(
        f'Contract cancelled: id={contract.id} deleted={result.deleted} failed={result.failed}'
    )
    return result


def delete_contract(contract_id: int, tenant_key: str) -> CancellationResult:
    """
    Delete the contract's unpaid invoices, then the contract itself.

    Paid invoices are left to the data service. The contract delete runs
    even when some invoice deletes failed; those are reported in the result.
    """
    result = _delete_pending_invoices(contract_id, tenant_key, 'Deletion')
    get_data_api().delete_record(CONTRACTS, contract_id)
    current_app.logger.info(
        f'Contract deleted: id={contract_id} invoices_deleted={result.deleted} failed={result.failed}'
    )
    return result


def generate_single_invoice(contract: Contract, month: int, year: int, tenant_key: str, now=None) -> Invoice:
    """
    Create exactly one invoice for ``month``/``year``.

    The due date is built from the contract's due day (clamped to the month
    length); the contract window is not consulted.

    Raises:
        BusinessLogicError: Contract without a due day, or a past year
    """
    if not contract.day_of_month:
        raise BusinessLogicError('Contrato sem dia de vencimento configurado.')

    now = now or local_now()
    if year < now.year:
        raise BusinessLogicError('O ano não pode ser anterior ao ano atual.')

    due_date = day_in_month(year, month, contract.day_of_month)
    invoice = build_invoice(contract, due_date, now.date())
    created = get_data_api().create_record(INVOICES, Invoice, invoice.to_api(), tenant_key)
    current_app.logger.info(f'Single invoice generated: contract={contract.id} due={due_date}')
    return created


# ---------------- Listing ---------------- #

def filter_contracts(contracts: List[Contract], search: str = '', status: str = DEFAULT_STATUS_FILTER) -> List[Contract]:
    """
    Search by client trade name or program name and filter by status.

    Unknown status filters match nothing.
    """
    if status not in STATUS_FILTERS:
        return []
    wanted = STATUS_FILTERS[status]
    return [
        contract for contract in contracts
        if matches_search(search, contract.client_name, contract.program_name)
        and (wanted is None or contract.status == wanted)
    ]


def list_contracts(tenant_key: str, search: str = '', status: str = DEFAULT_STATUS_FILTER,
                   page: int = 1, per_page: Optional[int] = None):
    """Filtered, paginated contract list (Pagination)."""
    per_page = per_page or current_app.config.get('ITEMS_PER_PAGE', 8)
    contracts = filter_contracts(list_all_contracts(tenant_key), search, status)
    return paginate(contracts, page=page, per_page=per_page)
