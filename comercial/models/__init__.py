"""Records mirrored from the external data service."""

from comercial.models.client import Client
from comercial.models.agent import Agent
from comercial.models.program import Program
from comercial.models.payment_method import PaymentMethod
from comercial.models.contract import Contract
from comercial.models.invoice import Invoice
from comercial.models.log_entry import LogEntry
from comercial.models.operator import Operator

__all__ = [
    'Client',
    'Agent',
    'Program',
    'PaymentMethod',
    'Contract',
    'Invoice',
    'LogEntry',
    'Operator',
]
