"""Commission report route."""
from flask import Blueprint, jsonify, request
from comercial.services import commission_service
from comercial.utils.listing import requested_sort
from comercial.utils.tenant import get_tenant_key, operator_required

commissions_bp = Blueprint('commissions', __name__, url_prefix='/comissoes')


@commissions_bp.route('', methods=['GET'])
@operator_required
def commission_report():
    """
    Commissions earned on paid invoices.

    Query Parameters:
        inicio, fim: Payment date range, DD/MM/YYYY (default: current month to today)
        corretor: Agent name ('todos' = every agent)
        ordenar: corretor | cliente | programa | dataPagamento | valor | comissao | valorComissao
        direcao: asc | desc
        alternar: Clicked column header (asc -> desc -> unsorted)
        page: Page number
    """
    sort, direction = requested_sort(request.args)
    report = commission_service.load_commission_report(
        get_tenant_key(),
        start=request.args.get('inicio'),
        end=request.args.get('fim'),
        agent=request.args.get('corretor', commission_service.ALL_AGENTS),
        sort=sort,
        direction=direction,
        page=request.args.get('page', 1, type=int),
    )
    return jsonify({
        **report['pagination'].to_dict(),
        'resumo': report['summary'],
        'corretores': report['agents'],
        'inicio': report['start'],
        'fim': report['end'],
        'ordenar': sort,
        'direcao': direction,
    }), 200
