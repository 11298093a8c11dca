"""
Unit tests for request payload validation.
"""

import pytest

from restock.exceptions import ValidationError
from restock.schemas import (
    CreateOrderRequest, CreateSaleRequest, CreateTableRequest, UpdateTableStateRequest, parse_payload
)


class TestCreateOrderRequest:

    def test_wire_keys(self):
        payload = parse_payload(CreateOrderRequest, {
            'userId': 1,
            'nameTable': 'T1',
            'email': 'ana@example.com',
            'products': [{'productId': 7, 'quantity': 2}]
        })

        assert payload.user_id == 1
        assert payload.table_name == 'T1'
        assert payload.products[0].product_id == 7
        assert payload.products[0].modifications == ''

    def test_table_name_alias(self):
        payload = parse_payload(CreateOrderRequest, {
            'userId': 1, 'tableName': 'T1', 'email': 'ana@example.com', 'products': []
        })

        assert payload.table_name == 'T1'

    def test_rejects_non_positive_quantity(self):
        with pytest.raises(ValidationError) as exc:
            parse_payload(CreateOrderRequest, {
                'userId': 1, 'nameTable': 'T1', 'email': 'ana@example.com',
                'products': [{'productId': 7, 'quantity': 0}]
            })

        assert exc.value.status_code == 422
        assert exc.value.payload['errors'][0]['field'] == 'products.0.quantity'

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            parse_payload(CreateOrderRequest, {'userId': 1, 'nameTable': 'T1', 'email': 'nope'})


class TestTableRequests:

    def test_default_state(self):
        assert parse_payload(CreateTableRequest, {'name': 'T1', 'quantity': 4}).state == 'available'

    def test_active_order_optional(self):
        payload = parse_payload(UpdateTableStateRequest, {'quantity': 4, 'state': 'available'})

        assert payload.active_order_id is None

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError) as exc:
            parse_payload(CreateTableRequest, ['T1'])

        assert exc.value.message == 'Request body must be a JSON object'


class TestCreateSaleRequest:

    SALE = {
        'userName': 'Alice', 'tableName': 'T1', 'date': '2024-05-01', 'totalPrice': 20,
        'email': 'client@example.com',
        'products': [{'productId': 1, 'productName': 'Milanesa', 'quantity': 2, 'pricePerUnit': 10, 'totalPrice': 20}],
    }

    def test_column_sized_values_accepted(self):
        payload = parse_payload(CreateSaleRequest, dict(self.SALE, userName='a' * 200, tableName='t' * 100, date='2' * 50))

        assert len(payload.user_name) == 200
        assert payload.tip == 0

    @pytest.mark.parametrize('field, length', [('userName', 201), ('tableName', 101), ('date', 51)])
    def test_rejects_values_longer_than_column(self, field, length):
        with pytest.raises(ValidationError) as exc:
            parse_payload(CreateSaleRequest, dict(self.SALE, **{field: 'x' * length}))

        assert exc.value.payload['errors'][0]['field'] == field

    def test_rejects_long_product_name(self):
        line = dict(self.SALE['products'][0], productName='m' * 201)

        with pytest.raises(ValidationError) as exc:
            parse_payload(CreateSaleRequest, dict(self.SALE, products=[line]))

        assert exc.value.payload['errors'][0]['field'] == 'products.0.productName'
