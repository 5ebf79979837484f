# app/routes/orders.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from ..db import get_pool
from ..db.orders import OrderRepository
from ..schemas.orders import CreateOrderIn, CreateOrderOut, OrderOut
from ..services.orders import OrderService
from ..settings import settings


router = APIRouter(prefix="/orders", tags=["orders"])


async def get_order_service() -> OrderService:
    pool = await get_pool()
    return OrderService(OrderRepository(pool, id_mode=settings.order_id_mode))


# Errors raised below are app.errors.OrderError subclasses; app.main maps
# their kind to 400 / 404 / 500.
@router.post("", response_model=CreateOrderOut, status_code=201)
async def create_order_endpoint(
    body: CreateOrderIn,
    service: OrderService = Depends(get_order_service),
):
    order = await service.create_order(body.user_id, [i.to_domain() for i in body.items])
    return CreateOrderOut(id=order.id, status=order.status.value, total=order.total)


@router.get("/{order_id}", response_model=OrderOut)
async def get_order_endpoint(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    order = await service.get_order(order_id)
    return OrderOut.from_domain(order)
