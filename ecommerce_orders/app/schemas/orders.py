from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ..models.order import Order, OrderItem


# Deliberately loose: emptiness and sign checks belong to app.models.order so
# that the HTTP surface and the service reject bad input with the same errors.
class OrderItemIn(BaseModel):
    product_id: str = ""
    quantity: int
    price: int = Field(..., description="Unit price in minor currency units")

    def to_domain(self) -> OrderItem:
        return OrderItem(product_id=self.product_id, quantity=self.quantity, price=self.price)


class CreateOrderIn(BaseModel):
    user_id: str = ""
    items: List[OrderItemIn] = []


class CreateOrderOut(BaseModel):
    id: str
    status: str
    total: int


class OrderItemOut(BaseModel):
    product_id: str
    quantity: int
    price: int


class OrderOut(BaseModel):
    id: str
    user_id: str
    status: str
    total: int
    items: List[OrderItemOut]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderOut":
        return cls(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            total=order.total,
            items=[
                OrderItemOut(product_id=i.product_id, quantity=i.quantity, price=i.price)
                for i in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
