"""Authentication form for the shared back-office password."""
from flask_wtf import FlaskForm
from wtforms import PasswordField
from wtforms.validators import DataRequired


class LoginForm(FlaskForm):
    """Login form: the operator only types the shared password."""

    password = PasswordField(
        'Senha',
        validators=[DataRequired(message='A senha é obrigatória.')],
        render_kw={'placeholder': 'Digite a senha', 'class': 'form-control'}
    )
