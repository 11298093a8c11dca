"""
Order orchestration: create, update, read and item deletion.

Every write workflow resolves the user (auth service), the table (local
registry) and each line's product (catalog) before touching storage, so a
failed lookup never leaves a partial order behind. Only the final commit is
atomic; nothing spans the external calls.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from restock.blueprints.metrics import orders_created_total, stock_restore_failures_total
from restock.exceptions import InvalidReferenceError, NotFoundError, UpstreamError
from restock.models import DiningTable, Order, OrderItem, compute_line_total, to_cents
from restock.repositories import Repository
from restock.services.catalog_client import CatalogClient, get_catalog_client
from restock.services.identity_client import IdentityClient, get_identity_client
from restock.services.table_service import table_to_dict
from restock.utils.formatters import as_float

logger = logging.getLogger(__name__)


# =====================================================
# RESOLUTION STEPS
# =====================================================

def _resolve_user(identity: IdentityClient, user_id: int) -> Dict[str, Any]:
    user = identity.get_user(user_id)
    if not user:
        raise InvalidReferenceError(f'User with ID {user_id} not found', payload={'userId': user_id})
    return user


def _resolve_table(session, table_name: str) -> DiningTable:
    table = Repository(session, DiningTable).find_by(name=table_name)
    if not table:
        raise InvalidReferenceError(f'Table {table_name} is not found', payload={'tableName': table_name})
    return table


def _build_items(catalog: CatalogClient, lines: Iterable) -> List[OrderItem]:
    """
    Resolve every requested line against the catalog and snapshot name/price.

    The first unresolvable product aborts the whole batch; nothing built so
    far is kept.
    """
    items = []
    for line in lines:
        product = catalog.find_one(line.product_id)
        if product is None:
            raise InvalidReferenceError(
                f'Product with ID {line.product_id} not found',
                payload={'productId': line.product_id}
            )
        unit_price = to_cents(product.price)
        items.append(OrderItem(
            product_id=line.product_id,
            quantity=line.quantity,
            modifications=line.modifications or '',
            product_name=product.name,
            price_per_unit=unit_price,
            total_price=compute_line_total(unit_price, line.quantity)
        ))
    return items


# =====================================================
# WRITE WORKFLOWS
# =====================================================

def create_order(
    session,
    user_id: int,
    table_name: str,
    email: str,
    lines: Iterable,
    catalog: Optional[CatalogClient] = None,
    identity: Optional[IdentityClient] = None
) -> Order:
    """
    Create an order priced from the catalog.

    Steps:
    1. Resolve user (auth service)
    2. Resolve table by name
    3. Resolve each line's product (catalog)
    4. Snapshot prices and compute totals
    5. Write order row, then item rows, in one transaction

    Args:
        lines: Objects with product_id, quantity and modifications

    Returns:
        The persisted Order

    Raises:
        InvalidReferenceError: Unknown user, table or product
        UpstreamError: An external service could not be reached
    """
    catalog = catalog or get_catalog_client()
    identity = identity or get_identity_client()

    _resolve_user(identity, user_id)
    table = _resolve_table(session, table_name)
    items = _build_items(catalog, lines)

    try:
        order = Repository(session, Order).save(Order(
            user_id=user_id,
            table_id=table.id,
            email=email,
            total_price=Order.sum_line_totals(items)
        ))
        for item in items:
            item.order_id = order.id
        Repository(session, OrderItem).save_all(items)
        session.commit()
    except Exception:
        session.rollback()
        raise

    orders_created_total.inc()
    logger.info(
        f"[ORDER] Order {order.id} created for user {user_id} at table '{table_name}' "
        f"({len(items)} items, total={order.total_price})"
    )
    return order


def update_order(
    session,
    order_id: int,
    user_id: int,
    table_name: str,
    email: str,
    lines: Iterable,
    catalog: Optional[CatalogClient] = None,
    identity: Optional[IdentityClient] = None
) -> Order:
    """
    Replace an order's user, table, email and full item collection.

    Validation is the same as creation; the total is recomputed from the
    freshly resolved prices.

    Raises:
        NotFoundError: Unknown order
        InvalidReferenceError: Unknown user, table or product
    """
    catalog = catalog or get_catalog_client()
    identity = identity or get_identity_client()

    orders = Repository(session, Order)
    order = orders.find(order_id, 'items')
    if not order:
        raise NotFoundError(f'Order with ID {order_id} not found')

    _resolve_user(identity, user_id)
    table = _resolve_table(session, table_name)
    items = _build_items(catalog, lines)

    try:
        item_repo = Repository(session, OrderItem)
        for old_item in list(order.items):
            item_repo.remove(old_item)
        session.expire(order, ['items'])

        order.user_id = user_id
        order.table_id = table.id
        order.email = email
        order.total_price = Order.sum_line_totals(items)
        orders.save(order)

        for item in items:
            item.order_id = order.id
        item_repo.save_all(items)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[ORDER] Order {order_id} replaced ({len(items)} items, total={order.total_price})")
    return order


def delete_order_item(
    session,
    order_id: int,
    product_id: int,
    catalog: Optional[CatalogClient] = None
) -> Order:
    """
    Remove a product's line from an order and give its quantity back to stock.

    The line removal and the new order total are committed before the
    catalog stock update is attempted. If that update fails the removal
    stays committed and UpstreamError is raised.

    Raises:
        NotFoundError: Unknown order, or the product is not in the order
        InvalidReferenceError: The product cannot be resolved in the catalog
        UpstreamError: The catalog rejected the stock restoration
    """
    catalog = catalog or get_catalog_client()

    orders = Repository(session, Order)
    order = orders.find(order_id, 'items')
    if not order:
        raise NotFoundError(f'Order with ID {order_id} not found')

    product = catalog.find_one(product_id)
    if product is None:
        raise InvalidReferenceError(f'Product with ID {product_id} not found', payload={'productId': product_id})

    item = next((i for i in order.items if i.product_id == product_id), None)
    if item is None:
        raise NotFoundError(
            f'Product with ID {product_id} not found in order {order_id}',
            payload={'orderId': order_id, 'productId': product_id}
        )

    removed_quantity = item.quantity
    removed_total = Decimal(str(item.total_price))

    try:
        order.items.remove(item)
        Repository(session, OrderItem).remove(item)
        order.total_price = (Decimal(str(order.total_price)) - removed_total).quantize(Decimal('0.01'))
        orders.save(order)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        f"[ORDER] Removed product {product_id} (qty={removed_quantity}) from order {order_id}; "
        f"total now {order.total_price}"
    )

    new_stock = product.stock + removed_quantity
    try:
        catalog.adjust_stock(product_id, new_stock, current=product)
    except UpstreamError as e:
        stock_restore_failures_total.inc()
        logger.error(
            f"[ORDER] Item removed from order {order_id} but stock for product {product_id} "
            f"was not restored: {e.message}"
        )
        e.payload = dict(e.payload or {}, orderId=order_id, productId=product_id, itemRemoved=True)
        raise

    return order


# =====================================================
# READS
# =====================================================

def _resolve_user_or_none(identity: IdentityClient, user_id: int) -> Optional[Dict[str, Any]]:
    try:
        return identity.get_user(user_id)
    except UpstreamError as e:
        logger.warning(f"[ORDER] User {user_id} could not be resolved for read: {e.message}")
        return None


def _repriced_item(catalog: CatalogClient, item: OrderItem) -> Dict[str, Any]:
    """Line view priced from the catalog as it is now; stored snapshot if the product is gone."""
    try:
        product = catalog.find_one(item.product_id)
    except UpstreamError as e:
        logger.warning(f"[ORDER] Catalog unavailable while repricing product {item.product_id}: {e.message}")
        product = None

    if product is None:
        logger.warning(f"[ORDER] Product {item.product_id} not resolved; showing stored snapshot")
        name, unit_price, line_total, repriced = item.product_name, item.price_per_unit, item.total_price, False
    else:
        name, unit_price, repriced = product.name, to_cents(product.price), True
        line_total = compute_line_total(unit_price, item.quantity)

    return {
        'productId': item.product_id,
        'quantity': item.quantity,
        'modifications': item.modifications,
        'productName': name,
        'pricePerUnit': as_float(unit_price),
        'totalPrice': as_float(line_total),
        'repriced': repriced,
    }


def _order_view(order: Order, catalog: CatalogClient, identity: IdentityClient) -> Dict[str, Any]:
    items = [_repriced_item(catalog, item) for item in order.items]
    live_total = sum((Decimal(str(i['totalPrice'])) for i in items), Decimal('0.00'))
    return {
        'id': order.id,
        'userId': order.user_id,
        'user': _resolve_user_or_none(identity, order.user_id),
        'email': order.email,
        'table': table_to_dict(order.table) if order.table else None,
        'items': items,
        'totalPrice': as_float(live_total),
        'storedTotalPrice': as_float(order.total_price),
    }


def get_order(
    session,
    order_id: int,
    catalog: Optional[CatalogClient] = None,
    identity: Optional[IdentityClient] = None
) -> Dict[str, Any]:
    """
    Full order view with lines repriced from the current catalog.

    Raises:
        NotFoundError: Unknown order
    """
    catalog = catalog or get_catalog_client()
    identity = identity or get_identity_client()

    order = Repository(session, Order).find(order_id, 'items', 'table')
    if not order:
        raise NotFoundError('Order not found', payload={'orderId': order_id})
    return _order_view(order, catalog, identity)


def list_orders(
    session,
    catalog: Optional[CatalogClient] = None,
    identity: Optional[IdentityClient] = None
) -> List[Dict[str, Any]]:
    catalog = catalog or get_catalog_client()
    identity = identity or get_identity_client()

    return [_order_view(order, catalog, identity) for order in Repository(session, Order).list('items', 'table')]


def get_user(user_id: int, identity: Optional[IdentityClient] = None) -> Dict[str, Any]:
    """
    Raises:
        InvalidReferenceError: The auth service does not know the user
    """
    return _resolve_user(identity or get_identity_client(), user_id)
