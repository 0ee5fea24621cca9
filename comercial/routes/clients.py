"""Client (cliente) CRUD routes."""
from flask import Blueprint, jsonify, request
from comercial.forms.client import ClientForm
from comercial.forms.fields import validate_or_raise
from comercial.services import registry_service
from comercial.utils.formatting import format_phone
from comercial.utils.listing import requested_sort
from comercial.utils.tenant import get_tenant_key, operator_required

clients_bp = Blueprint('clients', __name__, url_prefix='/clientes')


def _serialize(client):
    data = client.to_dict()
    data['fone'] = format_phone(client.phone)
    return data


@clients_bp.route('', methods=['GET'])
@operator_required
def list_clients():
    """
    Client list.

    Query Parameters:
        busca: Text search (trade name, activity, e-mail)
        ordenar: nomeFantasia | atividade | documento | email | fone
        direcao: asc | desc
        alternar: Clicked column header (asc -> desc -> unsorted)
        page: Page number
    """
    sort, direction = requested_sort(request.args)
    pagination = registry_service.list_clients(
        get_tenant_key(),
        search=request.args.get('busca', ''),
        sort=sort,
        direction=direction,
        page=request.args.get('page', 1, type=int),
    )
    return jsonify({**pagination.to_dict(_serialize), 'ordenar': sort, 'direcao': direction}), 200


@clients_bp.route('', methods=['POST'])
@operator_required
def create_client():
    form = ClientForm()
    validate_or_raise(form)

    client = registry_service.create_client(form.to_client(), get_tenant_key())
    return jsonify({
        'success': True,
        'message': 'Cliente cadastrado com sucesso!',
        'cliente': _serialize(client)
    }), 201


@clients_bp.route('/<int:client_id>', methods=['PUT'])
@operator_required
def update_client(client_id):
    form = ClientForm()
    validate_or_raise(form)

    client = registry_service.update_client(client_id, form.to_client(), get_tenant_key())
    return jsonify({
        'success': True,
        'message': 'Cliente atualizado com sucesso!',
        'cliente': _serialize(client)
    }), 200


@clients_bp.route('/<int:client_id>', methods=['DELETE'])
@operator_required
def delete_client(client_id):
    registry_service.delete_record('clients', client_id)
    return jsonify({'success': True, 'message': 'Cliente excluído com sucesso!'}), 200
