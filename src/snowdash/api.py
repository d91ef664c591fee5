"""REST endpoints serving the dashboard charts as JSON.

Each route runs one fixed statement through the shared ConnectionManager.
Success returns a JSON array of records; any failure is logged here and
answered with a generic error object and HTTP 500, so no credential or
infrastructure detail reaches the browser.

Dependency injection:
    Routes receive the manager via ``Depends(get_manager)``. Tests can pass
    a manager to ``create_app`` or override ``get_manager`` with
    ``app.dependency_overrides``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, AsyncIterator, Optional, Type

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from snowdash.connection import ConnectionManager
from snowdash.primitives import query
from snowdash.queries import (
    CUSTOMERS_BY_SEGMENT,
    ORDERS_BY_MONTH,
    REVENUE_BY_REGION,
    CustomerBySegment,
    OrdersByMonth,
    RevenueByRegion,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_manager(request: Request) -> ConnectionManager:
    """Return the application's ConnectionManager, creating it on first use"""
    manager = getattr(request.app.state, "manager", None)
    if manager is None:
        manager = ConnectionManager()
        request.app.state.manager = manager
    return manager


Manager = Annotated[ConnectionManager, Depends(get_manager)]


async def _fetch(manager: ConnectionManager, sql: str, model: Type[BaseModel], name: str) -> Any:
    try:
        rows = await query(sql, manager, row_model=model)
    except Exception:
        logger.exception(f"Failed to fetch {name}")
        return JSONResponse({"error": f"Failed to fetch {name}"}, status_code=500)
    return [row.model_dump() for row in rows]


@router.get("/revenue", response_model=None)
async def revenue(manager: Manager) -> Any:
    """Revenue by region, highest first"""
    return await _fetch(manager, REVENUE_BY_REGION, RevenueByRegion, "revenue")


@router.get("/orders", response_model=None)
async def orders(manager: Manager) -> Any:
    """Order count and total price per month"""
    return await _fetch(manager, ORDERS_BY_MONTH, OrdersByMonth, "orders")


@router.get("/customers", response_model=None)
async def customers(manager: Manager) -> Any:
    """Customer count and average balance per market segment"""
    return await _fetch(manager, CUSTOMERS_BY_SEGMENT, CustomerBySegment, "customers")


def create_app(manager: Optional[ConnectionManager] = None) -> FastAPI:
    """Build the API application around one ConnectionManager"""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        owned = getattr(app.state, "manager", None)
        if owned is not None:
            await owned.close()

    app = FastAPI(title="TPC-H Dashboard API", lifespan=lifespan)
    if manager is not None:
        app.state.manager = manager
    app.include_router(router)
    return app


app = create_app()
