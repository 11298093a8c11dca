"""
Flask CLI commands for restaurant setup.

Commands:
- flask init-db: Create all tables
- flask provision-table: Register a dining table
- flask list-tables: Show tables and their occupancy
"""

import click
from restock.database import create_schema, get_session
from restock.exceptions import ConflictError
from restock.services import table_service


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create the database schema."""
        create_schema()
        click.echo(click.style('✅ Esquema de base de datos creado.', fg='green'))

    @app.cli.command('provision-table')
    @click.option('--name', prompt=True, help='Unique table name')
    @click.option('--quantity', type=click.IntRange(min=1), prompt=True, help='Number of seats')
    @click.option('--state', default='available', show_default=True, help='Initial state')
    def provision_table(name, quantity, state):
        """Register a new dining table."""
        try:
            table = table_service.provision_table(get_session(), name, quantity, state)
        except ConflictError as e:
            click.echo(click.style(f'❌ {e.message}', fg='red'))
            raise SystemExit(1)

        click.echo(click.style('\n✅ Mesa creada exitosamente!', fg='green', bold=True))
        click.echo(f'   Nombre: {table.name}')
        click.echo(f'   ID: {table.id}')
        click.echo(f'   Asientos: {table.quantity}')

    @app.cli.command('list-tables')
    def list_tables():
        """List dining tables with state and active order."""
        tables = table_service.list_tables(get_session())
        if not tables:
            click.echo('No hay mesas registradas.')
            return
        for table in tables:
            active = table.active_order_id if table.active_order_id is not None else '-'
            click.echo(f'{table.id:>4}  {table.name:<20} {table.quantity:>3}  {table.state:<10} {active}')
