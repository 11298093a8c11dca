"""Orders blueprint: order workflow over the catalog and auth services."""
from flask import Blueprint, jsonify, request
from restock.database import get_session
from restock.schemas import CreateOrderRequest, UpdateOrderRequest, parse_payload
from restock.services import order_service

orders_bp = Blueprint('orders', __name__, url_prefix='/orders')


@orders_bp.route('', methods=['POST'])
def create_order():
    """Create an order; prices come from the catalog, never from the request."""
    payload = parse_payload(CreateOrderRequest, request.get_json(silent=True))
    order = order_service.create_order(
        get_session(),
        payload.user_id,
        payload.table_name,
        payload.email,
        payload.products
    )
    return jsonify({'status': 'ok', 'id': order.id}), 201


@orders_bp.route('', methods=['GET'])
def list_orders():
    return jsonify({'status': 'ok', 'orders': order_service.list_orders(get_session())})


@orders_bp.route('/<int:order_id>', methods=['GET'])
def get_order(order_id: int):
    """Order view repriced against the current catalog."""
    return jsonify({'status': 'ok', 'order': order_service.get_order(get_session(), order_id)})


@orders_bp.route('/<int:order_id>', methods=['PUT'])
def update_order(order_id: int):
    """Replace user, table, email and items of an order."""
    payload = parse_payload(UpdateOrderRequest, request.get_json(silent=True))
    order_service.update_order(
        get_session(),
        order_id,
        payload.user_id,
        payload.table_name,
        payload.email,
        payload.products
    )
    return jsonify({'status': 'ok', 'id': order_id})


@orders_bp.route('/<int:order_id>/items/<int:product_id>', methods=['DELETE'])
def delete_order_item(order_id: int, product_id: int):
    """Remove a product from an order and restore its stock in the catalog."""
    order = order_service.delete_order_item(get_session(), order_id, product_id)
    return jsonify({'status': 'ok', 'id': order_id, 'totalPrice': float(order.total_price)})
