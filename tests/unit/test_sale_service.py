"""
Unit tests for sale recording and lookups.
"""

import pytest
from decimal import Decimal
from prometheus_client import REGISTRY
from sqlalchemy import inspect

from restock.models import Sale, SaleLine
from restock.schemas import SaleLineRequest
from restock.services import sale_service


def _line(product_id=1, name='Milanesa', quantity=2, price='10.00'):
    return SaleLineRequest(
        product_id=product_id,
        product_name=name,
        quantity=quantity,
        price_per_unit=Decimal(price),
        total_price=Decimal(price) * quantity
    )


def _record(session, notifier, user_name='Alice', date='2024-05-01', lines=None):
    return sale_service.create_sale(
        session,
        user_name,
        'T1',
        date,
        Decimal('2.00'),
        Decimal('22.00'),
        lines if lines is not None else [_line()],
        'client@example.com',
        notifier=notifier
    )


class TestCreateSale:

    def test_persists_sale_and_lines(self, session, make_notifier):
        notifier = make_notifier()

        sale = _record(session, notifier)

        assert sale.id is not None
        stored = session.get(Sale, sale.id)
        assert stored.total_price == Decimal('22.00')
        assert [l.product_name for l in stored.lines] == ['Milanesa']
        assert notifier.sent[0]['to'] == 'client@example.com'
        assert notifier.sent[0]['subject'] == 'Comprobante de pedido'
        assert 'Milanesa' in notifier.sent[0]['html']
        assert '20,00' in notifier.sent[0]['html']

    def test_persists_when_notifier_raises(self, session, make_notifier):
        before = REGISTRY.get_sample_value('restock_notifications_failed_total') or 0

        sale = _record(session, make_notifier(error=ConnectionError('smtp down')))

        assert session.get(Sale, sale.id) is not None
        assert REGISTRY.get_sample_value('restock_notifications_failed_total') == before + 1

    def test_persists_when_notifier_reports_failure(self, session, make_notifier):
        sale = _record(session, make_notifier(result=False))

        assert session.query(SaleLine).filter_by(sale_id=sale.id).count() == 1

    def test_receipt_escapes_names(self, session, make_notifier):
        notifier = make_notifier()

        _record(session, notifier, lines=[_line(name='<b>Flan</b>')])

        assert '&lt;b&gt;Flan&lt;/b&gt;' in notifier.sent[0]['html']

    def test_uses_app_notifier_by_default(self, session, notifier):
        sale_service.create_sale(
            session, 'Alice', 'T1', '2024-05-01', 0, Decimal('20.00'), [_line()], 'client@example.com'
        )

        assert len(notifier.sent) == 1


class TestSaleQueries:

    def test_user_substring_match(self, session, notifier):
        _record(session, notifier, user_name='Alice')
        _record(session, notifier, user_name='Bob')

        sales = sale_service.list_sales_by_user(session, 'ali')

        assert [s.user_name for s in sales] == ['Alice']

    def test_filtered_lookups_load_lines_eagerly(self, session, notifier):
        _record(session, notifier, user_name='Alice', date='2024-05-01')
        session.expire_all()

        by_user = sale_service.list_sales_by_user(session, 'ali')
        by_date = sale_service.list_sales_by_date(session, '2024-05')

        for sale in by_user + by_date:
            assert 'lines' not in inspect(sale).unloaded
            assert [l.product_name for l in sale.lines] == ['Milanesa']

    def test_user_wildcards_are_literal(self, session, notifier):
        _record(session, notifier, user_name='Alice')

        assert sale_service.list_sales_by_user(session, '%') == []

    def test_date_substring_match(self, session, notifier):
        _record(session, notifier, date='2024-05-01')
        _record(session, notifier, date='2024-06-01')

        sales = sale_service.list_sales_by_date(session, '2024-05')

        assert [s.date for s in sales] == ['2024-05-01']

    def test_list_all(self, session, notifier):
        _record(session, notifier, user_name='Alice')
        _record(session, notifier, user_name='Bob')

        payload = [sale_service.sale_to_dict(s) for s in sale_service.list_sales(session)]

        assert [p['userName'] for p in payload] == ['Alice', 'Bob']
        assert payload[0]['products'][0]['pricePerUnit'] == 10.0
        assert payload[0]['tip'] == 2.0
