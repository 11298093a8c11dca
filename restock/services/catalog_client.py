"""Catalog (product service) client: price/stock authority for order lines."""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import requests
from flask import Flask, current_app

from restock.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogProduct:
    """Product data as returned by the catalog at lookup time."""
    id: int
    name: str
    price: Decimal
    stock: int
    data: Dict[str, Any] = field(default_factory=dict, compare=False)


def _unwrap(body: Any, key: str) -> Optional[Dict[str, Any]]:
    """Accept both `{"status": 200, "<key>": {...}}` envelopes and bare objects."""
    if not isinstance(body, dict):
        return None
    status = body.get('status')
    if isinstance(status, int) and not isinstance(status, bool) and status >= 400:
        return None
    inner = body.get(key, body)
    return inner if isinstance(inner, dict) and inner else None


class CatalogClient:
    """Cliente HTTP del servicio de productos."""

    def __init__(self, base_url: str, timeout: float = 10, http: Optional[requests.Session] = None):
        """
        Initialize catalog client.

        Args:
            base_url: Root URL of the product service (no trailing slash needed)
            timeout: Seconds to wait for each request
            http: Optional requests.Session (connection pooling, tests)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests.Session()
        self.headers = {'Content-Type': 'application/json'}

    def find_one(self, product_id: int) -> Optional[CatalogProduct]:
        """
        Look up a product by id.

        Returns:
            CatalogProduct, or None when the catalog answers with anything but success

        Raises:
            UpstreamError: If the catalog cannot be reached or returns an unreadable body
        """
        url = f"{self.base_url}/products/{product_id}"
        try:
            response = self.http.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"[CATALOG] Error looking up product {product_id}: {e}")
            raise UpstreamError(f'Catalog service unavailable: {e}')

        if not response.ok:
            logger.info(f"[CATALOG] Product {product_id} not resolved (HTTP {response.status_code})")
            return None

        try:
            data = _unwrap(response.json(), 'data')
        except ValueError as e:
            logger.error(f"[CATALOG] Unreadable response for product {product_id}: {e}")
            raise UpstreamError(f'Catalog service returned an invalid response for product {product_id}')

        if data is None:
            logger.info(f"[CATALOG] Product {product_id} not resolved (empty payload)")
            return None

        try:
            return CatalogProduct(
                id=int(data.get('id', product_id)),
                name=str(data['name']),
                price=Decimal(str(data['price'])),
                stock=int(data.get('stock') or 0),
                data=data,
            )
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.error(f"[CATALOG] Malformed product {product_id}: {e}")
            raise UpstreamError(f'Catalog service returned a malformed product {product_id}')

    def adjust_stock(self, product_id: int, new_stock: int, current: Optional[CatalogProduct] = None) -> None:
        """
        Overwrite a product's stock level.

        The catalog update endpoint replaces the product, so the last known
        product fields are sent along with the new stock.

        Raises:
            UpstreamError: If the catalog rejects the update or cannot be reached
        """
        url = f"{self.base_url}/products/{product_id}"
        payload = dict(current.data) if current else {}
        payload['stock'] = new_stock

        logger.info(f"[CATALOG] Setting stock of product {product_id} to {new_stock}")

        try:
            response = self.http.put(url, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"[CATALOG] Error updating stock for product {product_id}: {e}")
            raise UpstreamError(f'Failed to update product stock: {e}')

        if not response.ok:
            logger.error(f"[CATALOG] Stock update rejected for product {product_id}: {response.text}")
            raise UpstreamError(
                f'Failed to update product stock: HTTP {response.status_code}',
                payload={'upstream_status': response.status_code}
            )


def init_catalog_client(app: Flask) -> None:
    """Register the catalog client on the app."""
    if not hasattr(app, 'extensions'):
        app.extensions = {}
    app.extensions['catalog_client'] = CatalogClient(
        app.config['CATALOG_SERVICE_URL'],
        timeout=app.config.get('SERVICE_TIMEOUT', 10)
    )


def get_catalog_client() -> CatalogClient:
    """Get the catalog client for the current app."""
    client = current_app.extensions.get('catalog_client')
    if client is None:
        raise RuntimeError("Catalog client not initialized.")
    return client
