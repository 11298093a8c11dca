"""Users blueprint: read-through to the auth service."""
from flask import Blueprint, jsonify
from restock.services import order_service

users_bp = Blueprint('users', __name__, url_prefix='/users')


@users_bp.route('/<int:user_id>', methods=['GET'])
def get_user(user_id: int):
    return jsonify({'status': 'ok', 'user': order_service.get_user(user_id)})
