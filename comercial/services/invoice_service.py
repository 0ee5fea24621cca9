"""Invoice listing, payment registration and the invoice report."""
from decimal import Decimal
from typing import Iterable, List, Optional

from flask import current_app

from comercial.models.invoice import Invoice
from comercial.services.data_api_service import INVOICES, get_data_api
from comercial.utils.dates import format_local_date, local_now, parse_local_date, to_api_instant
from comercial.utils.exceptions import BusinessLogicError, NotFoundError, ValidationError
from comercial.utils.listing import filter_by_date_range, matches_search, paginate
from comercial.utils.lookup import index_by_id

STATUS_ALL = 'todas'
STATUS_PENDING = 'pendentes'
STATUS_PAID = 'pagas'
INVOICE_STATUSES = (STATUS_ALL, STATUS_PENDING, STATUS_PAID)


def list_all_invoices(tenant_key: str) -> List[Invoice]:
    return get_data_api().list_records(INVOICES, Invoice, tenant_key)


def get_invoice(invoice_id: int, tenant_key: str) -> Invoice:
    """
    Invoice by id.

    Raises:
        NotFoundError: If the tenant has no such invoice
    """
    invoice = index_by_id(list_all_invoices(tenant_key)).get(invoice_id)
    if invoice is None:
        raise NotFoundError(f'Fatura {invoice_id} não encontrada.')
    return invoice


def default_due_range(now=None):
    """First day of the current month through today, as ``DD/MM/YYYY`` text."""
    today = (now or local_now()).date()
    return format_local_date(today.replace(day=1)), format_local_date(today)


def filter_invoices(invoices: Iterable[Invoice], search: str = '', status: str = STATUS_ALL,
                    start: Optional[str] = None, end: Optional[str] = None) -> List[Invoice]:
    """
    Search by client trade name or contract description, filter by payment
    status and by due date range.

    The range bounds are ``DD/MM/YYYY`` text and apply only when both parse;
    invoices without a due date always pass the range filter.
    """
    kept = []
    for invoice in invoices:
        if not matches_search(search, invoice.client_name, invoice.contract_description):
            continue
        if status == STATUS_PENDING and invoice.is_paid:
            continue
        if status == STATUS_PAID and not invoice.is_paid:
            continue
        kept.append(invoice)

    return filter_by_date_range(kept, lambda invoice: invoice.due_date,
                                parse_local_date(start), parse_local_date(end))


def list_invoices(tenant_key: str, search: str = '', status: str = STATUS_ALL,
                  start: Optional[str] = None, end: Optional[str] = None,
                  page: int = 1, per_page: Optional[int] = None):
    """Filtered, paginated invoice list (Pagination)."""
    per_page = per_page or current_app.config.get('ITEMS_PER_PAGE', 8)
    invoices = filter_invoices(list_all_invoices(tenant_key), search, status, start, end)
    return paginate(invoices, page=page, per_page=per_page)


def register_payment(invoice: Invoice, payment_date_text: str, payment_method_id: int) -> Invoice:
    """
    Mark an unpaid invoice as paid.

    The payment date and method are sent together in one call.

    Raises:
        ValidationError: Unparseable payment date
        BusinessLogicError: Invoice already paid
        DataServiceError: The service rejected the payment
    """
    payment_date = parse_local_date(payment_date_text)
    if payment_date is None:
        raise ValidationError('Data de pagamento inválida!')
    if invoice.is_paid:
        raise BusinessLogicError('Fatura já está paga.')

    get_data_api().register_payment(invoice.id, to_api_instant(payment_date), payment_method_id)
    current_app.logger.info(
        f'Payment registered: invoice={invoice.id} date={payment_date} method={payment_method_id}'
    )

    invoice.payment_date = payment_date
    invoice.payment_method_id = payment_method_id
    return invoice


def delete_invoice(invoice_id: int):
    get_data_api().delete_record(INVOICES, invoice_id)
    current_app.logger.info(f'Invoice deleted: id={invoice_id}')


def invoice_report(invoices: Iterable[Invoice]) -> dict:
    """
    Report rows and the total value of a (filtered) invoice list.

    Returns:
        dict: {'rows': [...], 'quantidade': int, 'total': Decimal}
    """
    rows = []
    total = Decimal('0')
    for invoice in invoices:
        rows.append({
            'id': invoice.id,
            'cliente': invoice.client_name,
            'contrato': invoice.contract_description,
            'programa': invoice.program_name,
            'dataVencimento': format_local_date(invoice.due_date),
            'dataPagamento': format_local_date(invoice.payment_date),
            'valor': invoice.value,
            'situacao': 'Paga' if invoice.is_paid else 'Pendente',
        })
        if invoice.value is not None:
            total += invoice.value
    return {'rows': rows, 'quantidade': len(rows), 'total': total}
