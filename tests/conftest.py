import pytest
from decimal import Decimal

from restock import create_app
from restock.database import create_schema, drop_schema, get_session
from restock.exceptions import UpstreamError
from restock.models import DiningTable
from restock.services.catalog_client import CatalogProduct


class FakeCatalog:
    """In-memory stand-in for the product service."""

    def __init__(self):
        self.products = {}
        self.stock_updates = []
        self.fail_stock_updates = False
        self.unavailable = False

    def add(self, product_id, name, price, stock=10):
        self.products[product_id] = CatalogProduct(
            id=product_id,
            name=name,
            price=Decimal(str(price)),
            stock=stock,
            data={'id': product_id, 'name': name, 'price': price, 'stock': stock}
        )

    def find_one(self, product_id):
        if self.unavailable:
            raise UpstreamError('Catalog service unavailable')
        return self.products.get(product_id)

    def adjust_stock(self, product_id, new_stock, current=None):
        if self.fail_stock_updates:
            raise UpstreamError('Failed to update product stock: HTTP 500', payload={'upstream_status': 500})
        self.stock_updates.append((product_id, new_stock))
        product = self.products[product_id]
        self.products[product_id] = CatalogProduct(
            id=product.id, name=product.name, price=product.price, stock=new_stock, data=product.data
        )


class FakeIdentity:
    """In-memory stand-in for the auth service."""

    def __init__(self):
        self.users = {}
        self.unavailable = False

    def get_user(self, user_id):
        if self.unavailable:
            raise UpstreamError('Auth service unavailable')
        return self.users.get(user_id)


class FakeNotifier:
    """Records receipts instead of sending them."""

    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.sent = []

    def __call__(self, to, subject, html):
        self.sent.append({'to': to, 'subject': subject, 'html': html})
        if self.error:
            raise self.error
        return self.result


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing, with a fresh in-memory schema."""
    app = create_app('config.TestingConfig')
    ctx = app.app_context()
    ctx.push()
    create_schema()
    yield app
    get_session().remove()
    drop_schema()
    ctx.pop()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Database session for testing."""
    session = get_session()
    yield session
    session.rollback()


@pytest.fixture(scope='function')
def catalog(app):
    """Catalog fake installed on the app, stocked with two dishes."""
    fake = FakeCatalog()
    fake.add(1, 'Milanesa', 10, stock=5)
    fake.add(2, 'Flan', 4.5, stock=3)
    app.extensions['catalog_client'] = fake
    return fake


@pytest.fixture(scope='function')
def identity(app):
    """Identity fake installed on the app, knowing user 7."""
    fake = FakeIdentity()
    fake.users[7] = {'id': 7, 'name': 'Alice', 'email': 'alice@example.com'}
    app.extensions['identity_client'] = fake
    return fake


@pytest.fixture(scope='function')
def notifier(app):
    fake = FakeNotifier()
    app.extensions['receipt_notifier'] = fake
    return fake


@pytest.fixture(scope='function')
def table(session):
    """Available table T1."""
    table = DiningTable(name='T1', quantity=4, state='available')
    session.add(table)
    session.commit()
    return table


@pytest.fixture(scope='function')
def make_notifier():
    """Factory for standalone notifier fakes passed straight to services."""
    return FakeNotifier
