"""Contract routes: CRUD, cancellation and manual invoice generation."""
from flask import Blueprint, jsonify, request
from comercial.forms.contract import ContractForm, SingleInvoiceForm
from comercial.forms.fields import validate_or_raise
from comercial.services import contract_service
from comercial.utils.tenant import get_tenant_key, operator_required

contracts_bp = Blueprint('contracts', __name__, url_prefix='/contratos')


@contracts_bp.route('', methods=['GET'])
@operator_required
def list_contracts():
    """
    Contract list.

    Query Parameters:
        busca: Text search (client trade name, program name)
        status: todos | ativos | inativos | cancelados (default: ativos)
        page: Page number
    """
    pagination = contract_service.list_contracts(
        get_tenant_key(),
        search=request.args.get('busca', ''),
        status=request.args.get('status', contract_service.DEFAULT_STATUS_FILTER),
        page=request.args.get('page', 1, type=int),
    )
    return jsonify(pagination.to_dict()), 200


@contracts_bp.route('/<int:contract_id>', methods=['GET'])
@operator_required
def get_contract(contract_id):
    contract = contract_service.get_contract(contract_id, get_tenant_key())
    return jsonify(contract.to_dict()), 200


@contracts_bp.route('', methods=['POST'])
@operator_required
def create_contract():
    """
    Create a contract and its recurring invoices.

    Invoice generation is best-effort: the response reports how many
    invoices were created and which ones failed.
    """
    form = ContractForm()
    validate_or_raise(form)

    contract, invoices = contract_service.create_contract(form.to_contract(), get_tenant_key())

    if invoices.complete:
        message = 'Contrato e faturas cadastrados com sucesso!'
    else:
        message = 'Contrato cadastrado, mas houve erro ao gerar algumas faturas.'

    return jsonify({
        'success': invoices.complete,
        'message': message,
        'contrato': contract.to_dict(),
        'faturas': invoices.to_dict()
    }), 201


@contracts_bp.route('/<int:contract_id>', methods=['PUT'])
@operator_required
def update_contract(contract_id):
    """Update a contract and copy its terms onto its unpaid invoices."""
    form = ContractForm()
    validate_or_raise(form)

    invoices = contract_service.update_contract(contract_id, form.to_contract(), get_tenant_key())

    if invoices.complete:
        message = 'Contrato e faturas pendentes atualizados com sucesso!'
    else:
        message = 'Contrato atualizado, mas houve erro ao atualizar algumas faturas pendentes.'

    return jsonify({
        'success': invoices.complete,
        'message': message,
        'faturas': invoices.to_dict()
    }), 200


@contracts_bp.route('/<int:contract_id>/cancelar', methods=['POST'])
@operator_required
def cancel_contract(contract_id):
    """Delete the unpaid invoices and mark the contract as cancelled."""
    tenant_key = get_tenant_key()
    contract = contract_service.get_contract(contract_id, tenant_key)
    result = contract_service.cancel_contract(contract, tenant_key)

    if result.failed:
        message = 'Contrato cancelado, mas algumas faturas pendentes não foram excluídas.'
    else:
        message = 'Contrato cancelado com sucesso!'

    return jsonify({
        'success': result.failed == 0,
        'message': message,
        'faturas': result.to_dict()
    }), 200


@contracts_bp.route('/<int:contract_id>', methods=['DELETE'])
@operator_required
def delete_contract(contract_id):
    """Delete the unpaid invoices, then the contract."""
    result = contract_service.delete_contract(contract_id, get_tenant_key())

    if result.failed:
        message = 'Contrato excluído, mas algumas faturas pendentes não foram excluídas.'
    else:
        message = 'Contrato excluído com sucesso!'

    return jsonify({
        'success': result.failed == 0,
        'message': message,
        'faturas': result.to_dict()
    }), 200


@contracts_bp.route('/<int:contract_id>/faturas', methods=['POST'])
@operator_required
def generate_invoice(contract_id):
    """Generate one invoice of the contract for the given month/year."""
    form = SingleInvoiceForm()
    validate_or_raise(form)

    tenant_key = get_tenant_key()
    contract = contract_service.get_contract(contract_id, tenant_key)
    invoice = contract_service.generate_single_invoice(
        contract, form.mes.data, form.ano.data, tenant_key
    )
    return jsonify({
        'success': True,
        'message': 'Fatura gerada com sucesso!',
        'fatura': invoice.to_dict()
    }), 201
