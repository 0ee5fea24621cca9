"""Audit log entry written by the data service (read-only here)."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from comercial.models.common import to_int, to_text
from comercial.utils.dates import parse_api_datetime


@dataclass
class LogEntry:
    id: Optional[int] = None
    category: str = ''  # 'tipo' on the wire (create/update/delete...)
    table: str = ''
    message: str = ''
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, payload: dict) -> 'LogEntry':
        return cls(
            id=to_int(payload.get('id')),
            category=to_text(payload.get('tipo')),
            table=to_text(payload.get('tabela')),
            message=to_text(payload.get('mensagem')),
            created_at=parse_api_datetime(payload.get('createdAt')),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'tipo': self.category,
            'tabela': self.table,
            'mensagem': self.message,
            'createdAt': self.created_at.strftime('%d/%m/%Y %H:%M') if self.created_at else '',
        }
