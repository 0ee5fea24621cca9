"""Financial dashboard route."""
from flask import Blueprint, jsonify, request
from comercial.services import dashboard_service
from comercial.utils.exceptions import ValidationError
from comercial.utils.tenant import get_tenant_key, operator_required

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')


@dashboard_bp.route('', methods=['GET'])
@operator_required
def dashboard():
    """
    KPIs of a reporting period.

    Query Parameters:
        mes: Month 1-12 (default: current month)
        ano: Year (default: current year)
    """
    month = request.args.get('mes', type=int)
    year = request.args.get('ano', type=int)

    if month is not None and not 1 <= month <= 12:
        raise ValidationError('Mês inválido.')
    if year is not None and year < 1:
        raise ValidationError('Ano inválido.')

    return jsonify(dashboard_service.load_dashboard(get_tenant_key(), month=month, year=year)), 200
