"""Form for payment methods."""
from flask_wtf import FlaskForm
from wtforms.validators import DataRequired, Length

from comercial.forms.fields import TextValueField
from comercial.models.payment_method import PaymentMethod


class PaymentMethodForm(FlaskForm):

    forma_pagamento = TextValueField(
        'Forma de pagamento',
        validators=[
            DataRequired(message='A forma de pagamento não pode ser nula!'),
            Length(max=100)
        ]
    )

    def to_payment_method(self) -> PaymentMethod:
        return PaymentMethod(label=self.forma_pagamento.data)
