"""Flask CLI commands for application management."""
import click
from flask import current_app
from flask.cli import with_appcontext
from comercial import bcrypt
from comercial.models.client import Client
from comercial.services.dashboard_service import load_dashboard
from comercial.services.data_api_service import CLIENTS, get_data_api
from comercial.utils.exceptions import DataServiceError
from comercial.utils.formatting import format_brl, format_percent


@click.command('hash-password')
@with_appcontext
def hash_password_command():
    """
    Print the bcrypt hash of a new back-office password.

    Put the output in ACCESS_PASSWORD_HASH.

    Usage:
        flask hash-password
    """
    # Prompt for password (hidden input)
    password = click.prompt('Password', hide_input=True, confirmation_prompt=True)

    password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    click.echo(click.style('[SUCCESS] Hash gerado. Defina ACCESS_PASSWORD_HASH com:', fg='green'))
    click.echo(password_hash)


@click.command('check-data-api')
@with_appcontext
def check_data_api_command():
    """
    Check that the data service answers for the configured tenant.

    Usage:
        flask check-data-api
    """
    tenant_key = current_app.config['TENANT_KEY']
    click.echo(f'Serviço de dados: {current_app.config["DATA_API_URL"]}')

    try:
        clients = get_data_api().list_records(CLIENTS, Client, tenant_key)
    except DataServiceError as e:
        click.echo(click.style(f'[ERROR] {e.message}', fg='red'))
        raise SystemExit(1)

    click.echo(click.style(f'[OK] Serviço respondeu: {len(clients)} clientes cadastrados.', fg='green'))


@click.command('dashboard-metrics')
@click.option('--month', type=click.IntRange(1, 12), help='Mês (1-12), padrão: mês atual')
@click.option('--year', type=int, help='Ano, padrão: ano atual')
@with_appcontext
def dashboard_metrics_command(month, year):
    """
    Print the dashboard KPIs of a month for the configured tenant.

    Usage:
        flask dashboard-metrics
        flask dashboard-metrics --month 3 --year 2024
    """
    try:
        dashboard = load_dashboard(current_app.config['TENANT_KEY'], month=month, year=year)
    except DataServiceError as e:
        click.echo(click.style(f'[ERROR] {e.message}', fg='red'))
        raise SystemExit(1)

    metrics = dashboard['metrics']
    click.echo(click.style(f'\n[INFO] {metrics["period"]}\n', fg='cyan', bold=True))

    click.echo(f'   Receita bruta (RBM): {format_brl(metrics["rbm"])}')
    click.echo(f'   Comissões: {format_brl(metrics["total_commission"])}')
    click.echo(f'   Receita líquida (RLM): {format_brl(metrics["rlm"])}')
    click.echo(f'   Ticket médio: {format_brl(metrics["average_ticket"])}')
    click.echo(f'   Crescimento mensal: {format_percent(metrics["growth_mom"])}')
    click.echo(f'   MRR: {format_brl(metrics["mrr"])}')
    click.echo(f'   ACV: {format_brl(metrics["acv"])}')
    click.echo(f'   Novos clientes: {metrics["new_clients"]}')
    click.echo(f'   Clientes ativos: {metrics["active_clients"]}')
    click.echo(f'   Pagas em dia: {format_percent(metrics["paid_on_time_percent"])}')
    click.echo(f'   Clientes inadimplentes: {metrics["clients_with_overdue"]}')

    click.echo('   Inadimplência por faixa:')
    for bucket, amount in metrics['aging'].items():
        click.echo(f'      {bucket} dias: {format_brl(amount)}')
    click.echo('')


def register_commands(app):
    """Register all CLI commands with the Flask app."""
    app.cli.add_command(hash_password_command)
    app.cli.add_command(check_data_api_command)
    app.cli.add_command(dashboard_metrics_command)
