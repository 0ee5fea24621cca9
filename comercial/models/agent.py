"""Agent record (sales intermediary, "corretor")."""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from comercial.models.common import to_int, to_text
from comercial.utils.dates import format_local_date, parse_api_date, to_api_instant


@dataclass
class Agent:
    """Sales agent credited with contracts and paid a commission."""

    id: Optional[int] = None
    name: str = ''
    email: str = ''
    address: str = ''
    phone: str = ''
    admission_date: Optional[date] = None

    @classmethod
    def from_api(cls, payload: dict) -> 'Agent':
        return cls(
            id=to_int(payload.get('id')),
            name=to_text(payload.get('nome')),
            email=to_text(payload.get('email')),
            address=to_text(payload.get('endereco')),
            phone=to_text(payload.get('fone')),
            admission_date=parse_api_date(payload.get('dataAdmissao')),
        )

    def to_api(self) -> dict:
        return {
            'nome': self.name,
            'email': self.email,
            'endereco': self.address,
            'fone': self.phone,
            # The service stores a missing admission date as an empty string
            'dataAdmissao': to_api_instant(self.admission_date) or '',
        }

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'nome': self.name,
            'email': self.email,
            'endereco': self.address,
            'fone': self.phone,
            'dataAdmissao': format_local_date(self.admission_date),
        }

    def __repr__(self):
        return f'<Agent {self.name}>'
