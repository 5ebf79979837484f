# app/models/order.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional

from ..errors import ValidationError


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    quantity: int
    price: int  # minor currency units


@dataclass
class Order:
    id: Optional[str]
    user_id: str
    items: List[OrderItem]
    status: OrderStatus
    total: int
    created_at: datetime
    updated_at: datetime

    def __setattr__(self, name, value):
        # id may still be filled in by storage; total is fixed once set
        if name == "total" and "total" in self.__dict__:
            raise AttributeError("order total is fixed at construction")
        super().__setattr__(name, value)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _oid() -> str:
    return str(uuid.uuid4())


def validate_items(items: List[OrderItem]) -> None:
    """
    Check line items in list order; the first violation wins.
    product_id, then quantity, then price for each item.
    """
    if not items:
        raise ValidationError("items", "order must have at least one item")
    for i, item in enumerate(items):
        if not item.product_id:
            raise ValidationError("product_id", "product reference is required", index=i)
        if not _is_int(item.quantity):
            raise ValidationError("quantity", "quantity must be an integer", index=i)
        if item.quantity <= 0:
            raise ValidationError("quantity", "quantity must be positive", index=i)
        if not _is_int(item.price):
            raise ValidationError("price", "price must be an integer number of minor units", index=i)
        if item.price <= 0:
            raise ValidationError("price", "price must be positive", index=i)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def new_order(user_id: str, items: Iterable[OrderItem], *, assign_id: bool = True) -> Order:
    """
    Build a pending Order from a user reference and its line items.

    Raises ValidationError on the first invariant violation; nothing here
    touches storage. With ``assign_id=False`` the id is left as None for
    the database to generate on insert.
    """
    if not user_id:
        raise ValidationError("user_id", "user reference is required")

    lines = list(items)
    validate_items(lines)

    total = sum(item.quantity * item.price for item in lines)
    now = _now()
    return Order(
        id=_oid() if assign_id else None,
        user_id=user_id,
        items=lines,
        status=OrderStatus.PENDING,
        total=total,
        created_at=now,
        updated_at=now,
    )
