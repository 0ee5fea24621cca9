"""Client for the external REST data service that owns every record.

All reads and writes go through ``DataApiClient``; the rest of the
application never builds URLs or touches ``requests`` directly. Each call is
attempted once: failures surface as ``DataServiceError`` and the calling
action is abandoned (no automatic retry).
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Type

import requests
from flask import current_app, has_app_context

from comercial.utils.exceptions import DataServiceError

logger = logging.getLogger(__name__)

# Collection paths on the data service
CLIENTS = '/clientes'
AGENTS = '/corretores'
PROGRAMS = '/programacao'
PAYMENT_METHODS = '/forma-pagamento'
CONTRACTS = '/contratos'
INVOICES = '/faturamento'
LOGS = '/logs'


class DataApiClient:
    """
    Thin JSON client over ``requests.Session``.

    Args:
        base_url: Root URL of the data service
        timeout: Per-request timeout in seconds
        token: Optional bearer token for the Authorization header
        max_workers: Thread count for concurrent batch reads (fetch_many)
        session: Injected session (tests)
    """

    def __init__(self, base_url: str, timeout: int = 15, token: Optional[str] = None,
                 max_workers: int = 4, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_workers = max(1, max_workers)
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'

    # ---------------- HTTP ---------------- #

    def request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        """
        Send one request and return the decoded JSON body (None when empty).

        Raises:
            DataServiceError: Timeout, connection failure, non-2xx status or
                an undecodable body
        """
        url = f'{self.base_url}{path}'
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning(f'Data API timeout: {method} {path}')
            raise DataServiceError('O serviço de dados não respondeu a tempo.',
                                   method=method, path=path, original_exception=e)
        except requests.ConnectionError as e:
            logger.warning(f'Data API connection error: {method} {path}: {e}')
            raise DataServiceError('Não foi possível conectar ao serviço de dados.',
                                   method=method, path=path, original_exception=e)
        except requests.RequestException as e:
            logger.error(f'Data API request failed: {method} {path}: {e}')
            raise DataServiceError('Erro na comunicação com o serviço de dados.',
                                   method=method, path=path, original_exception=e)

        if not response.ok:
            logger.warning(f'Data API returned HTTP {response.status_code}: {method} {path}')
            raise DataServiceError(f'Erro no serviço de dados (HTTP {response.status_code}).',
                                   method=method, path=path, upstream_status=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f'Data API returned invalid JSON: {method} {path}')
            raise DataServiceError('Resposta inválida do serviço de dados.',
                                   method=method, path=path, original_exception=e)

    def get(self, path: str) -> Any:
        return self.request('GET', path)

    def post(self, path: str, payload: dict) -> Any:
        return self.request('POST', path, payload)

    def put(self, path: str, payload: dict) -> Any:
        return self.request('PUT', path, payload)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    # ---------------- Records ---------------- #

    def list_records(self, resource: str, model: Type, tenant_key: str) -> List[Any]:
        """``GET /<resource>/<tenant>`` decoded into ``model`` instances."""
        data = self.get(f'{resource}/{tenant_key}') or []
        return [model.from_api(item) for item in data]

    def create_record(self, resource: str, model: Type, payload: dict, tenant_key: str) -> Any:
        """``POST /<resource>``; returns the created record (with its id)."""
        created = self.post(resource, {**payload, 'chave': tenant_key})
        return model.from_api(created or {})

    def update_record(self, resource: str, record_id: int, payload: dict, tenant_key: str) -> Any:
        """``PUT /<resource>/<id>`` with the full record."""
        return self.put(f'{resource}/{record_id}', {**payload, 'chave': tenant_key})

    def delete_record(self, resource: str, record_id: int) -> Any:
        return self.delete(f'{resource}/{record_id}')

    def list_pending_invoices(self, contract_id: int, tenant_key: str) -> List[dict]:
        """Unpaid invoices of a contract, as raw service payloads."""
        return self.get(f'{INVOICES}/{tenant_key}/{contract_id}/pendentes') or []

    def register_payment(self, invoice_id: int, payment_date: str, payment_method_id) -> Any:
        """Single state transition unpaid -> paid."""
        return self.put(f'{INVOICES}/{invoice_id}/pagamento', {
            'dataPagamento': payment_date,
            'formaPagamentoId': payment_method_id,
        })

    # ---------------- Batches ---------------- #

    def fetch_many(self, calls: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
        """
        Run independent reads concurrently and wait for all of them.

        Args:
            calls: name -> zero-argument callable

        Returns:
            dict: name -> result

        Raises:
            DataServiceError: The first failing call (in declaration order);
                the whole batch is discarded
        """
        # Workers share the caller's app config (APP_TIMEZONE for date decoding)
        app = current_app._get_current_object() if has_app_context() else None

        def run(call):
            if app is None:
                return call()
            with app.app_context():
                return call()

        with ThreadPoolExecutor(max_workers=min(self.max_workers, max(1, len(calls)))) as executor:
            futures = {name: executor.submit(run, call) for name, call in calls.items()}
            return {name: future.result() for name, future in futures.items()}


def init_data_api(app) -> DataApiClient:
    """Create the client from config and register it on the app."""
    client = DataApiClient(
        base_url=app.config['DATA_API_URL'],
        timeout=app.config['DATA_API_TIMEOUT'],
        token=app.config.get('DATA_API_TOKEN'),
        max_workers=app.config.get('DATA_API_MAX_WORKERS', 4),
    )
    app.extensions['data_api'] = client
    return client


def get_data_api() -> DataApiClient:
    """Data service client of the current app."""
    return current_app.extensions['data_api']
