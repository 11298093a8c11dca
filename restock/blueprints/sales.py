"""Sales blueprint: closing orders into sales and listing them."""
from flask import Blueprint, jsonify, request
from restock.database import get_session
from restock.schemas import CreateSaleRequest, parse_payload
from restock.services import sale_service

sales_bp = Blueprint('sales', __name__, url_prefix='/sales')


@sales_bp.route('', methods=['POST'])
def create_sale():
    """Record a sale and email its receipt (delivery failures do not block the sale)."""
    payload = parse_payload(CreateSaleRequest, request.get_json(silent=True))
    sale = sale_service.create_sale(
        get_session(),
        payload.user_name,
        payload.table_name,
        payload.date,
        payload.tip,
        payload.total_price,
        payload.products,
        payload.email
    )
    return jsonify({'status': 'ok', 'id': sale.id}), 201


@sales_bp.route('', methods=['GET'])
def list_sales():
    """
    List sales.

    Query params:
        user: substring of the served-by user name
        date: substring of the sale date
    """
    session = get_session()
    user = request.args.get('user')
    date = request.args.get('date')

    if user is not None:
        sales = sale_service.list_sales_by_user(session, user)
    elif date is not None:
        sales = sale_service.list_sales_by_date(session, date)
    else:
        sales = sale_service.list_sales(session)

    return jsonify({'status': 'ok', 'sales': [sale_service.sale_to_dict(s) for s in sales]})
