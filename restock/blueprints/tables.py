"""Tables blueprint: provisioning and occupancy of dining tables."""
from flask import Blueprint, jsonify, request
from restock.database import get_session
from restock.schemas import CreateTableRequest, UpdateTableStateRequest, parse_payload
from restock.services import table_service

tables_bp = Blueprint('tables', __name__, url_prefix='/tables')


@tables_bp.route('', methods=['POST'])
def create_table():
    """Provision a new table (unique name)."""
    payload = parse_payload(CreateTableRequest, request.get_json(silent=True))
    table = table_service.provision_table(
        get_session(), payload.name, payload.quantity, payload.state
    )
    return jsonify({'status': 'ok', 'table': table_service.table_to_dict(table)}), 201


@tables_bp.route('', methods=['GET'])
def list_tables():
    """List all tables."""
    tables = table_service.list_tables(get_session())
    return jsonify({'status': 'ok', 'tables': [table_service.table_to_dict(t) for t in tables]})


@tables_bp.route('/by-name/<path:name>', methods=['GET'])
def get_table_by_name(name: str):
    table = table_service.find_table_by_name(get_session(), name)
    return jsonify({'status': 'ok', 'table': table_service.table_to_dict(table)})


@tables_bp.route('/<int:table_id>/state', methods=['PUT'])
def update_table_state(table_id: int):
    """Overwrite quantity, state and active order of a table."""
    payload = parse_payload(UpdateTableStateRequest, request.get_json(silent=True))
    table = table_service.update_table_state(
        get_session(),
        table_id,
        payload.quantity,
        payload.state,
        payload.active_order_id
    )
    return jsonify({'status': 'ok', 'table': table_service.table_to_dict(table)})
