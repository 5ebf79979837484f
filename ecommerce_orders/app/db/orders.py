"""Postgres persistence for orders and their line items."""
from __future__ import annotations

import asyncio
from typing import List, Literal, Optional

import asyncpg

from ..errors import NotFoundError, PersistenceError
from ..models.order import Order, OrderItem, OrderStatus
from ..utils.logging import EventSink, get_logger

IdMode = Literal["constructor", "storage"]

_INSERT_ORDER = """
    INSERT INTO orders (id, user_id, status, total, created_at, updated_at)
    VALUES ($1, $2, $3, $4, $5, $6)
    RETURNING id
"""

# storage mode: let the column default mint the id
_INSERT_ORDER_GENERATED_ID = """
    INSERT INTO orders (user_id, status, total, created_at, updated_at)
    VALUES ($1, $2, $3, $4, $5)
    RETURNING id
"""

_INSERT_ITEM = """
    INSERT INTO order_items (order_id, product_id, quantity, price)
    VALUES ($1, $2, $3, $4)
"""

_SELECT_ORDER = """
    SELECT id, user_id, status, total, created_at, updated_at
    FROM orders
    WHERE id = $1
"""

_SELECT_ITEMS = """
    SELECT product_id, quantity, price
    FROM order_items
    WHERE order_id = $1
    ORDER BY id
"""


class OrderRepository:
    """
    Writes an order and its items in one transaction and reads them back.

    Every storage fault surfaces as PersistenceError with the asyncpg (or
    socket) exception chained; a missing order is NotFoundError. Task
    cancellation is never converted: it unwinds through the transaction
    block, which rolls back before the connection goes back to the pool.
    """

    def __init__(
        self,
        pool: asyncpg.Pool,
        *,
        id_mode: IdMode = "constructor",
        logger: Optional[EventSink] = None,
    ):
        if id_mode not in ("constructor", "storage"):
            raise ValueError(f"unknown id_mode: {id_mode!r}")
        self.pool = pool
        self.id_mode = id_mode
        self.logger = (logger or get_logger(__name__)).bind(component="repository")

    def _check_id(self, order: Order) -> None:
        if self.id_mode == "constructor" and not order.id:
            raise ValueError("order has no id but id_mode is 'constructor'")
        if self.id_mode == "storage" and order.id is not None:
            raise ValueError("order already has an id but id_mode is 'storage'")

    async def create(self, order: Order) -> Order:
        self._check_id(order)

        op = "acquire connection"
        item_index: Optional[int] = None
        try:
            async with self.pool.acquire() as conn:
                op = "begin transaction"
                async with conn.transaction():
                    op = "insert order"
                    if self.id_mode == "storage":
                        order_id = await conn.fetchval(
                            _INSERT_ORDER_GENERATED_ID,
                            order.user_id,
                            order.status.value,
                            order.total,
                            order.created_at,
                            order.updated_at,
                        )
                    else:
                        order_id = await conn.fetchval(
                            _INSERT_ORDER,
                            order.id,
                            order.user_id,
                            order.status.value,
                            order.total,
                            order.created_at,
                            order.updated_at,
                        )
                    self.logger.debug("order inserted", order_id=order_id)

                    op = "insert order item"
                    for item_index, item in enumerate(order.items):
                        await conn.execute(
                            _INSERT_ITEM, order_id, item.product_id, item.quantity, item.price
                        )
                    item_index = None
                    self.logger.debug(
                        "order items inserted", order_id=order_id, items_count=len(order.items)
                    )
                    op = "commit transaction"
        except asyncio.CancelledError:
            self.logger.warning("order create cancelled, transaction rolled back", order_id=order.id)
            raise
        except Exception as exc:
            self.logger.error(
                f"failed to {op}", error=str(exc), order_id=order.id, item_index=item_index
            )
            raise PersistenceError(op, exc) from exc

        # only visible to the caller once the commit went through
        order.id = str(order_id)
        self.logger.info("order transaction committed", order_id=order.id)
        return order

    async def get_by_id(self, order_id: str) -> Order:
        op = "acquire connection"
        try:
            async with self.pool.acquire() as conn:
                op = "begin transaction"
                async with conn.transaction(isolation="repeatable_read", readonly=True):
                    op = "select order"
                    row = await conn.fetchrow(_SELECT_ORDER, order_id)
                    item_rows = []
                    if row is not None:
                        op = "select order items"
                        item_rows = await conn.fetch(_SELECT_ITEMS, order_id)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.logger.error(f"failed to {op}", error=str(exc), order_id=order_id)
            raise PersistenceError(op, exc) from exc

        if row is None:
            self.logger.warning("order not found", order_id=order_id)
            raise NotFoundError(order_id)

        op = "read order row"
        try:
            order = _row_to_order(row, item_rows)
        except (KeyError, ValueError, TypeError) as exc:
            self.logger.error("failed to read order row", error=str(exc), order_id=order_id)
            raise PersistenceError(op, exc) from exc

        self.logger.debug("order loaded with items", order_id=order.id, items_count=len(order.items))
        return order


def _row_to_order(row, item_rows) -> Order:
    items: List[OrderItem] = [
        OrderItem(
            product_id=r["product_id"],
            quantity=int(r["quantity"]),
            price=int(r["price"]),
        )
        for r in item_rows
    ]
    return Order(
        id=str(row["id"]),
        user_id=row["user_id"],
        items=items,
        status=OrderStatus(row["status"]),
        total=int(row["total"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
