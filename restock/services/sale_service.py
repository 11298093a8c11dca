"""
Sale ledger: detached records of closed orders plus their emailed receipt.

Sale recording trusts its caller: names, prices and totals are stored as
given, without consulting the auth service, the catalog or the table
registry.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy.orm import selectinload

from restock.blueprints.metrics import notifications_failed_total
from restock.models import Sale, SaleLine
from restock.repositories import Repository
from restock.services.email_service import Notifier, get_notifier
from restock.services.receipt_service import render_receipt_html
from restock.utils.formatters import as_float

logger = logging.getLogger(__name__)


def sale_to_dict(sale: Sale) -> Dict[str, Any]:
    return {
        'id': sale.id,
        'userName': sale.user_name,
        'tableName': sale.table_name,
        'date': sale.date,
        'tip': as_float(sale.tip),
        'totalPrice': as_float(sale.total_price),
        'products': [
            {
                'productId': line.product_id,
                'productName': line.product_name,
                'quantity': line.quantity,
                'modifications': line.modifications,
                'pricePerUnit': as_float(line.price_per_unit),
                'totalPrice': as_float(line.total_price),
            }
            for line in sale.lines
        ],
    }


def _send_receipt(notifier: Notifier, email: str, sale: Sale, lines: List[SaleLine]) -> bool:
    """Deliver the receipt; any failure is logged and reported as False."""
    subject = current_app.config.get('RECEIPT_SUBJECT', 'Comprobante de pedido')
    try:
        delivered = bool(notifier(email, subject, render_receipt_html(sale, lines)))
    except Exception as e:
        logger.exception(f"[SALE] Receipt delivery to {email} raised: {e}")
        delivered = False

    if not delivered:
        notifications_failed_total.inc()
        logger.warning(f"[SALE] Receipt for table '{sale.table_name}' was not delivered to {email}")
    return delivered


def create_sale(
    session,
    user_name: str,
    table_name: str,
    date: str,
    tip,
    total_price,
    lines: Iterable,
    email: str,
    notifier: Optional[Notifier] = None
) -> Sale:
    """
    Record a closed order as a detached sale and email its receipt.

    Steps:
    1. Assemble the sale and its line snapshots from the given values
    2. Render and send the receipt (failure is logged, never raised)
    3. Write the sale row, then its line rows, in one transaction

    Args:
        lines: Objects with product_id, product_name, quantity, modifications,
               price_per_unit and total_price

    Returns:
        The persisted Sale
    """
    notifier = notifier or get_notifier()

    sale = Sale(
        user_name=user_name,
        table_name=table_name,
        date=date,
        tip=Decimal(str(tip or 0)),
        total_price=Decimal(str(total_price))
    )
    sale_lines = [
        SaleLine(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            modifications=line.modifications or '',
            price_per_unit=Decimal(str(line.price_per_unit)),
            total_price=Decimal(str(line.total_price))
        )
        for line in lines
    ]

    _send_receipt(notifier, email, sale, sale_lines)

    try:
        Repository(session, Sale).save(sale)
        for line in sale_lines:
            line.sale_id = sale.id
        Repository(session, SaleLine).save_all(sale_lines)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[SALE] Sale {sale.id} recorded for '{user_name}' at table '{table_name}' (total={sale.total_price})")
    return sale


# =====================================================
# QUERIES
# =====================================================

def _contains(column, term: str):
    """Substring match (case-insensitive) with LIKE wildcards in the term taken literally."""
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return column.ilike(f'%{escaped}%', escape='\\')


def list_sales(session) -> List[Sale]:
    return Repository(session, Sale).list('lines')


def list_sales_by_user(session, user_name: str) -> List[Sale]:
    return (
        session.query(Sale)
        .options(selectinload(Sale.lines))
        .filter(_contains(Sale.user_name, user_name))
        .order_by(Sale.id)
        .all()
    )


def list_sales_by_date(session, date: str) -> List[Sale]:
    return (
        session.query(Sale)
        .options(selectinload(Sale.lines))
        .filter(_contains(Sale.date, date))
        .order_by(Sale.id)
        .all()
    )
