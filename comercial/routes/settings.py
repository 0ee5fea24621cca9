"""Settings routes: agents, programs, payment methods and the audit log."""
from flask import Blueprint, jsonify, request
from comercial.forms.agent import AgentForm
from comercial.forms.fields import validate_or_raise
from comercial.forms.payment_method import PaymentMethodForm
from comercial.forms.program import ProgramForm
from comercial.services import registry_service
from comercial.utils.formatting import format_phone
from comercial.utils.tenant import get_tenant_key, operator_required

settings_bp = Blueprint('settings', __name__)


# ---------------- Agents (corretores) ---------------- #

def _serialize_agent(agent):
    data = agent.to_dict()
    data['fone'] = format_phone(agent.phone)
    return data


@settings_bp.route('/corretores', methods=['GET'])
@operator_required
def list_agents():
    pagination = registry_service.list_agents(
        get_tenant_key(),
        search=request.args.get('busca', ''),
        page=request.args.get('page', 1, type=int),
    )
    return jsonify(pagination.to_dict(_serialize_agent)), 200


@settings_bp.route('/corretores', methods=['POST'])
@operator_required
def create_agent():
    form = AgentForm()
    validate_or_raise(form)

    agent = registry_service.save_agent(form.to_agent(), get_tenant_key())
    return jsonify({
        'success': True,
        'message': 'Corretor cadastrado com sucesso!',
        'corretor': _serialize_agent(agent)
    }), 201


@settings_bp.route('/corretores/<int:agent_id>', methods=['PUT'])
@operator_required
def update_agent(agent_id):
    form = AgentForm()
    validate_or_raise(form)

    agent = registry_service.save_agent(form.to_agent(), get_tenant_key(), agent_id=agent_id)
    return jsonify({
        'success': True,
        'message': 'Corretor atualizado com sucesso!',
        'corretor': _serialize_agent(agent)
    }), 200


@settings_bp.route('/corretores/<int:agent_id>', methods=['DELETE'])
@operator_required
def delete_agent(agent_id):
    registry_service.delete_record('agents', agent_id)
    return jsonify({'success': True, 'message': 'Corretor excluído com sucesso!'}), 200


# ---------------- Programs ---------------- #

@settings_bp.route('/programas', methods=['GET'])
@operator_required
def list_programs():
    pagination = registry_service.list_programs(
        get_tenant_key(),
        search=request.args.get('busca', ''),
        page=request.args.get('page', 1, type=int),
    )
    return jsonify(pagination.to_dict()), 200


@settings_bp.route('/programas', methods=['POST'])
@operator_required
def create_program():
    form = ProgramForm()
    validate_or_raise(form)

    program = registry_service.create_record('programs', form.to_program(), get_tenant_key())
    return jsonify({
        'success': True,
        'message': 'Programa cadastrado com sucesso!',
        'programa': program.to_dict()
    }), 201


@settings_bp.route('/programas/<int:program_id>', methods=['PUT'])
@operator_required
def update_program(program_id):
    form = ProgramForm()
    validate_or_raise(form)

    program = registry_service.update_record('programs', program_id, form.to_program(), get_tenant_key())
    return jsonify({
        'success': True,
        'message': 'Programa atualizado com sucesso!',
        'programa': program.to_dict()
    }), 200


@settings_bp.route('/programas/<int:program_id>', methods=['DELETE'])
@operator_required
def delete_program(program_id):
    registry_service.delete_record('programs', program_id)
    return jsonify({'success': True, 'message': 'Programa excluído com sucesso!'}), 200


# ---------------- Payment methods ---------------- #

@settings_bp.route('/formas-pagamento', methods=['GET'])
@operator_required
def list_payment_methods():
    methods = registry_service.list_payment_methods(get_tenant_key())
    return jsonify({'items': [method.to_dict() for method in methods]}), 200


@settings_bp.route('/formas-pagamento', methods=['POST'])
@operator_required
def create_payment_method():
    form = PaymentMethodForm()
    validate_or_raise(form)

    method = registry_service.create_record('payment_methods', form.to_payment_method(), get_tenant_key())
    return jsonify({
        'success': True,
        'message': 'Forma de pagamento cadastrada com sucesso!',
        'formaPagamento': method.to_dict()
    }), 201


@settings_bp.route('/formas-pagamento/<int:method_id>', methods=['PUT'])
@operator_required
def update_payment_method(method_id):
    form = PaymentMethodForm()
    validate_or_raise(form)

    method = registry_service.update_record(
        'payment_methods', method_id, form.to_payment_method(), get_tenant_key()
    )
    return jsonify({
        'success': True,
        'message': 'Forma de pagamento atualizada com sucesso!',
        'formaPagamento': method.to_dict()
    }), 200


@settings_bp.route('/formas-pagamento/<int:method_id>', methods=['DELETE'])
@operator_required
def delete_payment_method(method_id):
    registry_service.delete_record('payment_methods', method_id)
    return jsonify({'success': True, 'message': 'Forma de pagamento excluída com sucesso!'}), 200


# ---------------- Audit log ---------------- #

@settings_bp.route('/logs', methods=['GET'])
@operator_required
def list_logs():
    """
    Audit log, newest first.

    Query Parameters:
        busca: Text search (message, table)
        tabela: Table filter ('all' = every table)
        tipo: Type filter ('all' = every type)
        page: Page number
    """
    result = registry_service.list_logs(
        get_tenant_key(),
        search=request.args.get('busca', ''),
        table=request.args.get('tabela', registry_service.ALL),
        category=request.args.get('tipo', registry_service.ALL),
        page=request.args.get('page', 1, type=int),
    )
    return jsonify({**result['pagination'].to_dict(), 'filtros': result['options']}), 200
