"""Table registry: provisioning and occupancy state of dining tables."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from restock.exceptions import ConflictError, NotFoundError
from restock.models import DiningTable
from restock.repositories import Repository

logger = logging.getLogger(__name__)


def table_to_dict(table: DiningTable) -> Dict[str, Any]:
    return {
        'id': table.id,
        'name': table.name,
        'quantity': table.quantity,
        'state': table.state,
        'activeOrderId': table.active_order_id,
    }


def provision_table(session, name: str, quantity: int, state: str = 'available') -> DiningTable:
    """
    Create a table with a unique name.

    Raises:
        ConflictError: If a table with the same name already exists
    """
    tables = Repository(session, DiningTable)
    if tables.find_by(name=name):
        raise ConflictError(f'Table with name {name} already exists')

    try:
        table = tables.save(DiningTable(name=name, quantity=quantity, state=state))
        session.commit()
    except IntegrityError:
        # Lost a race against a concurrent provisioning of the same name
        session.rollback()
        raise ConflictError(f'Table with name {name} already exists')

    logger.info(f"[TABLE] Provisioned table '{name}' (id={table.id}, seats={quantity}, state={state})")
    return table


def find_table_by_name(session, name: str) -> DiningTable:
    """
    Raises:
        NotFoundError: If no table has that name
    """
    table = Repository(session, DiningTable).find_by(name=name)
    if not table:
        raise NotFoundError(f'Table with name {name} not found')
    return table


def list_tables(session) -> List[DiningTable]:
    return Repository(session, DiningTable).list()


def update_table_state(
    session,
    table_id: int,
    quantity: int,
    state: str,
    active_order_id: Optional[int]
) -> DiningTable:
    """
    Overwrite capacity, state and active order of a table in a single write.

    Raises:
        NotFoundError: If table_id is unknown
    """
    tables = Repository(session, DiningTable)
    table = tables.find(table_id)
    if not table:
        raise NotFoundError(f'Table with id {table_id} is not found')

    table.quantity = quantity
    table.state = state
    table.active_order_id = active_order_id
    tables.save(table)
    session.commit()

    logger.info(f"[TABLE] Table {table_id} -> state={state}, seats={quantity}, active_order={active_order_id}")
    return table
