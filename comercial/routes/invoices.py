"""Invoice (fatura) routes: listing, payment, deletion and the report."""
from flask import Blueprint, jsonify, request
from comercial.forms.fields import validate_or_raise
from comercial.forms.invoice import PaymentForm
from comercial.services import invoice_service
from comercial.utils.exceptions import ValidationError
from comercial.utils.tenant import get_tenant_key, operator_required

invoices_bp = Blueprint('invoices', __name__, url_prefix='/faturas')


def _filters():
    """Search/status/due-date filters from the query string."""
    status = request.args.get('status', invoice_service.STATUS_ALL)
    if status not in invoice_service.INVOICE_STATUSES:
        raise ValidationError('Situação inválida.')

    start, end = request.args.get('inicio'), request.args.get('fim')
    if start is None and end is None:
        start, end = invoice_service.default_due_range()
    return {
        'search': request.args.get('busca', ''),
        'status': status,
        'start': start,
        'end': end,
    }


@invoices_bp.route('', methods=['GET'])
@operator_required
def list_invoices():
    """
    Invoice list.

    Query Parameters:
        busca: Text search (client trade name, contract description)
        status: todas | pendentes | pagas
        inicio, fim: Due date range, DD/MM/YYYY (default: current month to today)
        page: Page number
    """
    filters = _filters()
    pagination = invoice_service.list_invoices(
        get_tenant_key(), page=request.args.get('page', 1, type=int), **filters
    )
    return jsonify({**pagination.to_dict(), 'inicio': filters['start'], 'fim': filters['end']}), 200


@invoices_bp.route('/<int:invoice_id>/pagamento', methods=['POST'])
@operator_required
def register_payment(invoice_id):
    """Record payment date and method of an unpaid invoice."""
    form = PaymentForm()
    validate_or_raise(form)

    tenant_key = get_tenant_key()
    invoice = invoice_service.get_invoice(invoice_id, tenant_key)
    invoice = invoice_service.register_payment(
        invoice, form.data_pagamento.data, form.forma_pagamento_id.data
    )
    return jsonify({
        'success': True,
        'message': 'Fatura paga com sucesso!',
        'fatura': invoice.to_dict()
    }), 200


@invoices_bp.route('/<int:invoice_id>', methods=['DELETE'])
@operator_required
def delete_invoice(invoice_id):
    invoice_service.delete_invoice(invoice_id)
    return jsonify({'success': True, 'message': 'Fatura excluída com sucesso!'}), 200


@invoices_bp.route('/relatorio', methods=['GET'])
@operator_required
def invoice_report():
    """Report rows and total of the filtered invoices (same filters as the list)."""
    filters = _filters()
    invoices = invoice_service.filter_invoices(
        invoice_service.list_all_invoices(get_tenant_key()), **filters
    )
    return jsonify(invoice_service.invoice_report(invoices)), 200
