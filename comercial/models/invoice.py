"""Invoice record ("fatura"): one billing period of a contract."""
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from comercial.models.common import decimal_to_api, nested, to_decimal, to_int, to_text
from comercial.utils.dates import format_local_date, parse_api_date, to_api_instant


@dataclass
class Invoice:
    """
    A charge generated from a contract.

    Unpaid while ``payment_date`` is None; the payment endpoint sets the
    payment date and method together, exactly once.
    """

    id: Optional[int] = None

    # Links
    client_id: Optional[int] = None
    contract_id: Optional[int] = None
    program_id: Optional[int] = None
    agent_id: Optional[int] = None
    payment_method_id: Optional[int] = None

    # Dates
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    payment_date: Optional[date] = None

    value: Optional[Decimal] = None
    commission_percent: Optional[Decimal] = None
    description: str = ''

    # Display fields embedded by the service
    client_name: str = ''
    program_name: str = ''
    agent_name: str = ''
    contract_description: str = ''

    @property
    def is_paid(self) -> bool:
        return self.payment_date is not None

    def is_overdue_at(self, now: datetime) -> bool:
        """
        Unpaid and due strictly before ``now``.

        The due date stands for its local midnight, so an invoice due today
        is already overdue once the day has started.
        """
        if self.is_paid or self.due_date is None:
            return False
        return datetime.combine(self.due_date, time.min) < now

    @classmethod
    def from_api(cls, payload: dict) -> 'Invoice':
        return cls(
            id=to_int(payload.get('id')),
            client_id=to_int(payload.get('clienteId')),
            contract_id=to_int(payload.get('contratoId')),
            program_id=to_int(payload.get('programaId')),
            agent_id=to_int(payload.get('corretoresId')),
            payment_method_id=to_int(payload.get('formaPagamentoId')),
            issue_date=parse_api_date(payload.get('dataEmissao')),
            due_date=parse_api_date(payload.get('dataVencimento')),
            payment_date=parse_api_date(payload.get('dataPagamento')),
            value=to_decimal(payload.get('valor')),
            commission_percent=to_decimal(payload.get('comissao')),
            description=to_text(payload.get('descritivo')),
            client_name=to_text(nested(payload, 'cliente', 'nomeFantasia')),
            program_name=to_text(nested(payload, 'programa', 'programa')),
            agent_name=to_text(nested(payload, 'corretores', 'nome')),
            contract_description=to_text(nested(payload, 'contrato', 'descritivo')),
        )

    def to_api(self) -> dict:
        payload = {
            'clienteId': self.client_id,
            'contratoId': self.contract_id,
            'programaId': self.program_id,
            'corretoresId': self.agent_id,
            'dataEmissao': to_api_instant(self.issue_date),
            'dataVencimento': to_api_instant(self.due_date),
            'dataPagamento': to_api_instant(self.payment_date),
            'valor': decimal_to_api(self.value),
            'formaPagamentoId': self.payment_method_id,
            'descritivo': self.description,
        }
        if self.commission_percent is not None:
            payload['comissao'] = decimal_to_api(self.commission_percent)
        return payload

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'clienteId': self.client_id,
            'cliente': self.client_name,
            'contratoId': self.contract_id,
            'programaId': self.program_id,
            'programa': self.program_name,
            'corretoresId': self.agent_id,
            'corretor': self.agent_name,
            'formaPagamentoId': self.payment_method_id,
            'dataEmissao': format_local_date(self.issue_date),
            'dataVencimento': format_local_date(self.due_date),
            'dataPagamento': format_local_date(self.payment_date),
            'valor': self.value,
            'descritivo': self.description,
            'paga': self.is_paid,
        }

    def __repr__(self):
        state = 'paga' if self.is_paid else 'pendente'
        return f'<Invoice {self.id} contract={self.contract_id} due={self.due_date} {state}>'
