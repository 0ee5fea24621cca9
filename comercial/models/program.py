"""Program record (a show whose airtime is sponsored)."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from comercial.models.common import decimal_to_api, to_decimal, to_int, to_text


@dataclass
class Program:
    """A radio program with its daily time slot and sponsorship price."""

    id: Optional[int] = None
    name: str = ''

    # Time slot, e.g. '06:00' - '08:00'
    start_time: str = ''
    end_time: str = ''

    presenter: str = ''
    air_days: str = ''  # Free text ("Seg a Sex")
    sponsorship_price: Optional[Decimal] = None
    style: str = ''

    @classmethod
    def from_api(cls, payload: dict) -> 'Program':
        return cls(
            id=to_int(payload.get('id')),
            name=to_text(payload.get('programa')),
            start_time=to_text(payload.get('horaInicio')),
            end_time=to_text(payload.get('horaFim')),
            presenter=to_text(payload.get('apresentador')),
            air_days=to_text(payload.get('diasApresentacao')),
            sponsorship_price=to_decimal(payload.get('valorPatrocinio')),
            style=to_text(payload.get('estilo')),
        )

    def to_api(self) -> dict:
        return {
            'programa': self.name,
            'horaInicio': self.start_time,
            'horaFim': self.end_time,
            'apresentador': self.presenter,
            'diasApresentacao': self.air_days,
            'valorPatrocinio': decimal_to_api(self.sponsorship_price),
            'estilo': self.style,
        }

    def to_dict(self) -> dict:
        return {'id': self.id, **self.to_api()}

    def __repr__(self):
        return f'<Program {self.name} {self.start_time}-{self.end_time}>'
