"""Payment method record."""
from dataclasses import dataclass
from typing import Optional

from comercial.models.common import to_int, to_text


@dataclass
class PaymentMethod:
    id: Optional[int] = None
    label: str = ''

    @classmethod
    def from_api(cls, payload: dict) -> 'PaymentMethod':
        return cls(id=to_int(payload.get('id')), label=to_text(payload.get('formaPagamento')))

    def to_api(self) -> dict:
        return {'formaPagamento': self.label}

    def to_dict(self) -> dict:
        return {'id': self.id, 'formaPagamento': self.label}

    def __repr__(self):
        return f'<PaymentMethod {self.label}>'
