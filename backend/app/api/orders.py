"""Order API - any authenticated user"""
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import CurrentPrincipal
from app.core.errors import NotFoundError
from app.database import get_db
from app.models.order import OrderStatus
from app.schemas.order import (
    OrderCreate,
    OrderFilters,
    OrderResponse,
    OrderStatusPatch,
    OrderStatusPatchResult,
    OrderUpdate,
)
from app.services.orders import OrderRepository

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


@router.get("", response_model=list[OrderResponse])
def list_orders(
    principal: CurrentPrincipal,
    data: date | None = Query(None),
    stato: OrderStatus | None = Query(None),
    agente_id: int | None = Query(None),
    autista_id: int | None = Query(None),
    giro: str | None = Query(None),
    search: str | None = Query(None),
    repo: OrderRepository = Depends(get_order_repository),
):
    filters = OrderFilters(
        data=data, stato=stato, agente_id=agente_id, autista_id=autista_id, giro=giro, search=search
    )
    return repo.list(filters)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    principal: CurrentPrincipal,
    repo: OrderRepository = Depends(get_order_repository),
):
    order = repo.get(order_id)
    if order is None:
        raise NotFoundError(f"Order {order_id} not found", order_id=order_id)
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    principal: CurrentPrincipal,
    repo: OrderRepository = Depends(get_order_repository),
):
    return repo.create(data, principal)


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    data: OrderUpdate,
    principal: CurrentPrincipal,
    repo: OrderRepository = Depends(get_order_repository),
):
    """Full update: header and complete line set"""
    return repo.update(order_id, data, principal)


@router.patch("/{order_id}/status", response_model=OrderStatusPatchResult)
def patch_order_status(
    order_id: int,
    data: OrderStatusPatch,
    principal: CurrentPrincipal,
    repo: OrderRepository = Depends(get_order_repository),
):
    return OrderStatusPatchResult(stato=repo.patch_status(order_id, data.stato))


@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    principal: CurrentPrincipal,
    repo: OrderRepository = Depends(get_order_repository),
):
    repo.delete(order_id, principal)
    return {"ok": True}
