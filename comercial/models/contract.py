"""Contract record (a client sponsoring a program, billed monthly)."""
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from comercial.models.common import decimal_to_api, nested, to_decimal, to_int, to_text
from comercial.utils.dates import format_local_date, parse_api_date, parse_api_datetime, to_api_instant

STATUS_ACTIVE = 'ativo'
STATUS_INACTIVE = 'inativo'
STATUS_CANCELLED = 'cancelado'

CONTRACT_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE, STATUS_CANCELLED)


@dataclass
class Contract:
    """
    Agreement to air a program for a client.

    ``issue_date``/``due_date`` bound the recurring invoice window and
    ``day_of_month`` is the monthly due day (0 or None: no recurring invoices).
    """

    id: Optional[int] = None

    # Links
    client_id: Optional[int] = None
    program_id: Optional[int] = None
    agent_id: Optional[int] = None
    payment_method_id: Optional[int] = None

    # Billing window and recurrence
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    day_of_month: Optional[int] = None

    insertions: Optional[int] = None
    value: Optional[Decimal] = None
    commission_percent: Optional[Decimal] = None
    status: str = STATUS_ACTIVE
    description: str = ''
    created_at: Optional[datetime] = None

    # Display names embedded by the service
    client_name: str = ''
    program_name: str = ''
    payment_method_label: str = ''

    def is_active_at(self, now: datetime) -> bool:
        """Active while the local midnight of its due date is still ahead of ``now``."""
        return self.due_date is not None and datetime.combine(self.due_date, time.min) >= now

    def with_status(self, status: str) -> 'Contract':
        return replace(self, status=status)

    @classmethod
    def from_api(cls, payload: dict) -> 'Contract':
        return cls(
            id=to_int(payload.get('id')),
            client_id=to_int(payload.get('clienteId')),
            program_id=to_int(payload.get('programaId')),
            agent_id=to_int(payload.get('corretorId')),
            payment_method_id=to_int(payload.get('formaPagamentoId')),
            issue_date=parse_api_date(payload.get('dataEmissao')),
            due_date=parse_api_date(payload.get('dataVencimento')),
            day_of_month=to_int(payload.get('diaVencimento')),
            insertions=to_int(payload.get('numInsercoes')),
            value=to_decimal(payload.get('valor')),
            commission_percent=to_decimal(payload.get('comissao')),
            status=to_text(payload.get('status')) or STATUS_ACTIVE,
            description=to_text(payload.get('descritivo')),
            created_at=parse_api_datetime(payload.get('createdAt')),
            client_name=to_text(nested(payload, 'cliente', 'nomeFantasia')),
            program_name=to_text(nested(payload, 'programacao', 'programa')),
            payment_method_label=to_text(nested(payload, 'formaPagamento', 'formaPagamento')),
        )

    def to_api(self) -> dict:
        return {
            'clienteId': self.client_id,
            'programaId': self.program_id,
            'corretorId': self.agent_id,
            'formaPagamentoId': self.payment_method_id,
            'dataEmissao': to_api_instant(self.issue_date),
            'dataVencimento': to_api_instant(self.due_date),
            'diaVencimento': self.day_of_month,
            'numInsercoes': self.insertions,
            'valor': decimal_to_api(self.value),
            'comissao': decimal_to_api(self.commission_percent),
            'status': self.status,
            'descritivo': self.description,
        }

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'clienteId': self.client_id,
            'cliente': self.client_name,
            'programaId': self.program_id,
            'programa': self.program_name,
            'corretorId': self.agent_id,
            'formaPagamentoId': self.payment_method_id,
            'formaPagamento': self.payment_method_label,
            'dataEmissao': format_local_date(self.issue_date),
            'dataVencimento': format_local_date(self.due_date),
            'diaVencimento': self.day_of_month,
            'numInsercoes': self.insertions,
            'valor': self.value,
            'comissao': self.commission_percent,
            'status': self.status,
            'descritivo': self.description,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Contract {self.id} client={self.client_id} status={self.status}>'
