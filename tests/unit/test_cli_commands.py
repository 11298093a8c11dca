"""
Unit tests for the Flask CLI commands.
"""

from restock.models import DiningTable


class TestTableCommands:

    def test_provision_table(self, app, session):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['provision-table', '--name', 'Barra', '--quantity', '2'])

        assert result.exit_code == 0
        assert 'Barra' in result.output
        assert session.query(DiningTable).filter_by(name='Barra').count() == 1

    def test_provision_duplicate(self, app, table):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['provision-table', '--name', 'T1', '--quantity', '2'])

        assert result.exit_code == 1
        assert 'already exists' in result.output

    def test_list_tables(self, app, table):
        result = app.test_cli_runner().invoke(args=['list-tables'])

        assert 'T1' in result.output
        assert 'available' in result.output

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=['init-db'])

        assert result.exit_code == 0
