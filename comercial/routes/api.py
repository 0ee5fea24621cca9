"""API helper routes for the browser client."""
from flask import Blueprint, jsonify
from flask_wtf.csrf import generate_csrf

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    """
    CSRF token for JSON requests.

    The client sends it back in the ``X-CSRFToken`` header on every
    POST/PUT/DELETE.
    """
    return jsonify({'csrf_token': generate_csrf()}), 200
