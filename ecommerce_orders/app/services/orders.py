# app/services/orders.py
from __future__ import annotations

from typing import Iterable, Optional

from ..db.orders import OrderRepository
from ..errors import InvalidRequestError, ValidationError
from ..models.order import Order, OrderItem, new_order
from ..utils.logging import EventSink, get_logger


class OrderService:
    """
    Entry point for placing orders: build the aggregate, then persist it.

    Errors from the constructor and the repository are re-raised as-is so
    the HTTP layer can branch on ``err.kind``. No retries.
    """

    def __init__(self, repository: OrderRepository, logger: Optional[EventSink] = None):
        self.repository = repository
        self.logger = (logger or get_logger(__name__)).bind(component="service")

    async def create_order(self, user_id: str, items: Iterable[OrderItem]) -> Order:
        # Guard kept on purpose even though new_order checks the same thing:
        # a looser constructor must never let an anonymous order reach storage.
        if not user_id:
            self.logger.warning("empty user_id")
            raise InvalidRequestError("user_id", "user reference is required")

        try:
            order = new_order(
                user_id, items, assign_id=self.repository.id_mode == "constructor"
            )
        except ValidationError as exc:
            self.logger.warning("invalid order model", error=str(exc), user_id=user_id)
            raise

        self.logger.debug(
            "creating order in repository",
            order_id=order.id,
            user_id=order.user_id,
            total=order.total,
        )

        try:
            await self.repository.create(order)
        except Exception as exc:
            self.logger.error("failed to save order to repository", error=str(exc), order_id=order.id)
            raise

        self.logger.info("order created", order_id=order.id)
        return order

    async def get_order(self, order_id: str) -> Order:
        return await self.repository.get_by_id(order_id)
