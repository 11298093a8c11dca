"""
Unit tests for the table registry.
"""

import pytest

from restock.exceptions import ConflictError, NotFoundError
from restock.services import table_service


class TestProvisionTable:

    def test_provision(self, session):
        table = table_service.provision_table(session, 'Terraza 1', 6)

        assert table.id is not None
        assert table.state == 'available'
        assert table.active_order_id is None

    def test_duplicate_name(self, session, table):
        with pytest.raises(ConflictError) as exc:
            table_service.provision_table(session, 'T1', 2)

        assert exc.value.status_code == 409


class TestFindAndList:

    def test_find_by_name(self, session, table):
        assert table_service.find_table_by_name(session, 'T1').id == table.id

    def test_find_unknown_name(self, session):
        with pytest.raises(NotFoundError) as exc:
            table_service.find_table_by_name(session, 'T2')

        assert exc.value.message == 'Table with name T2 not found'

    def test_list_empty(self, session):
        assert table_service.list_tables(session) == []

    def test_list(self, session, table):
        table_service.provision_table(session, 'T2', 2)

        assert [t.name for t in table_service.list_tables(session)] == ['T1', 'T2']


class TestUpdateTableState:

    def test_overwrites_all_fields(self, session, table):
        updated = table_service.update_table_state(session, table.id, 2, 'occupied', 15)

        assert (updated.quantity, updated.state, updated.active_order_id) == (2, 'occupied', 15)

    def test_clears_active_order(self, session, table):
        table_service.update_table_state(session, table.id, 4, 'occupied', 15)
        updated = table_service.update_table_state(session, table.id, 4, 'available', None)

        assert updated.active_order_id is None

    def test_unknown_table(self, session):
        with pytest.raises(NotFoundError) as exc:
            table_service.update_table_state(session, 42, 2, 'occupied', None)

        assert exc.value.message == 'Table with id 42 is not found'
