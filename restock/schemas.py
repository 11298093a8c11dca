"""
Request schemas checked at the HTTP boundary before any service runs.

Wire keys follow the front-of-house client contract (camelCase); attributes
are snake_case.
"""
from decimal import Decimal
from typing import List, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from pydantic import ValidationError as PydanticValidationError

from restock.exceptions import ValidationError

SchemaT = TypeVar('SchemaT', bound=BaseModel)


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class OrderLineRequest(_Schema):
    product_id: int = Field(alias='productId')
    quantity: int = Field(gt=0)
    modifications: str = ''


class CreateOrderRequest(_Schema):
    user_id: int = Field(alias='userId')
    table_name: str = Field(min_length=1, validation_alias=AliasChoices('nameTable', 'tableName', 'table_name'))
    email: EmailStr
    products: List[OrderLineRequest] = Field(default_factory=list)


class UpdateOrderRequest(CreateOrderRequest):
    """Full replace of an existing order: same fields as creation."""


class CreateTableRequest(_Schema):
    name: str = Field(min_length=1, max_length=100)
    quantity: int = Field(gt=0)
    state: str = Field(default='available', min_length=1, max_length=30)


class UpdateTableStateRequest(_Schema):
    quantity: int = Field(gt=0)
    state: str = Field(min_length=1, max_length=30)
    active_order_id: Optional[int] = Field(default=None, alias='activeOrderId')


class SaleLineRequest(_Schema):
    product_id: int = Field(alias='productId')
    product_name: str = Field(alias='productName', min_length=1, max_length=200)
    quantity: int = Field(gt=0)
    modifications: str = ''
    price_per_unit: Decimal = Field(alias='pricePerUnit', ge=0)
    total_price: Decimal = Field(alias='totalPrice', ge=0)


class CreateSaleRequest(_Schema):
    user_name: str = Field(alias='userName', min_length=1, max_length=200)
    table_name: str = Field(alias='tableName', min_length=1, max_length=100)
    date: str = Field(min_length=1, max_length=50)
    tip: Decimal = Field(default=Decimal('0'), ge=0)
    total_price: Decimal = Field(alias='totalPrice', ge=0)
    products: List[SaleLineRequest] = Field(default_factory=list)
    email: EmailStr


def parse_payload(schema: Type[SchemaT], data) -> SchemaT:
    """Validate a decoded JSON body against a schema, raising ValidationError with field details."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
            for err in e.errors(include_url=False)
        ]
        raise ValidationError('Invalid request payload', errors=errors)
