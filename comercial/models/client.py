"""Client record (advertiser billed through contracts)."""
from dataclasses import dataclass
from typing import Optional

from comercial.models.common import to_int, to_text


@dataclass
class Client:
    """A client of the station, identified by CPF (person) or CNPJ (company)."""

    id: Optional[int] = None

    # Identification
    trade_name: str = ''
    legal_name: str = ''
    contact: str = ''
    cpf: str = ''
    cnpj: str = ''
    municipal_registration: str = ''
    activity: str = ''

    # Address
    address: str = ''
    number: str = ''
    district: str = ''
    city: str = ''
    state: str = ''
    postal_code: str = ''

    # Contact
    email: str = ''
    phone: str = ''

    @property
    def document(self) -> str:
        """Tax id shown in lists: CNPJ when present, otherwise CPF."""
        return self.cnpj or self.cpf or ''

    @classmethod
    def from_api(cls, payload: dict) -> 'Client':
        return cls(
            id=to_int(payload.get('id')),
            trade_name=to_text(payload.get('nomeFantasia')),
            legal_name=to_text(payload.get('razaoSocial')),
            contact=to_text(payload.get('contato')),
            cpf=to_text(payload.get('cpf')),
            cnpj=to_text(payload.get('cnpj')),
            municipal_registration=to_text(payload.get('inscMunicipal')),
            activity=to_text(payload.get('atividade')),
            address=to_text(payload.get('endereco')),
            number=to_text(payload.get('numero')),
            district=to_text(payload.get('bairro')),
            city=to_text(payload.get('cidade')),
            state=to_text(payload.get('estado')),
            postal_code=to_text(payload.get('cep')),
            email=to_text(payload.get('email')),
            phone=to_text(payload.get('fone')),
        )

    def to_api(self) -> dict:
        return {
            'nomeFantasia': self.trade_name,
            'razaoSocial': self.legal_name,
            'contato': self.contact,
            'cpf': self.cpf,
            'cnpj': self.cnpj,
            'inscMunicipal': self.municipal_registration,
            'atividade': self.activity,
            'endereco': self.address,
            'numero': self.number,
            'bairro': self.district,
            'cidade': self.city,
            'estado': self.state,
            'cep': self.postal_code,
            'email': self.email,
            'fone': self.phone,
        }

    def to_dict(self) -> dict:
        return {'id': self.id, 'documento': self.document, **self.to_api()}

    def __repr__(self):
        return f'<Client {self.trade_name} ({self.document})>'
