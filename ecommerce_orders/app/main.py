# app/main.py
import asyncio

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .db import close_pool, get_pool, ping
from .errors import ErrorKind, OrderError
from .middleware import request_logging
from .routes import health, orders
from .settings import settings
from .utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

app = FastAPI(title="Ecommerce Orders API")

app.middleware("http")(request_logging)

app.include_router(health.router)
app.include_router(orders.router)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERSISTENCE: 500,
}


@app.exception_handler(OrderError)
async def order_error_handler(request: Request, exc: OrderError):
    return JSONResponse(status_code=_STATUS_BY_KIND[exc.kind], content=exc.to_dict())


@app.get("/")
def root():
    return {"message": "Orders API is running"}


@app.on_event("startup")
async def _startup_database():
    configure_logging()
    pool = await get_pool()
    # refuse to serve if the database is not reachable
    await asyncio.wait_for(ping(pool, timeout=5.0), timeout=5.0)
    logger.info(
        "database is ready",
        env=settings.environment,
        order_id_mode=settings.order_id_mode,
    )


@app.on_event("shutdown")
async def _shutdown_database():
    await close_pool()
    logger.info("server stopped")
