"""Truck load plan API - any authenticated user"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import CurrentPrincipal
from app.database import get_db
from app.schemas.truck import TruckConfirmationSet, TruckDriverSet, TruckResponse, TruckSlotsUpdate
from app.services.trucks import TruckLoadManager

router = APIRouter(prefix="/api/trucks", tags=["trucks"])


def get_truck_manager(db: Session = Depends(get_db)) -> TruckLoadManager:
    return TruckLoadManager(db)


@router.get("", response_model=list[TruckResponse])
def list_trucks(
    principal: CurrentPrincipal,
    manager: TruckLoadManager = Depends(get_truck_manager),
):
    return manager.list()


@router.patch("/{truck_id}/slots", response_model=TruckResponse)
def update_truck_slots(
    truck_id: int,
    data: TruckSlotsUpdate,
    principal: CurrentPrincipal,
    manager: TruckLoadManager = Depends(get_truck_manager),
):
    """Slot notes batch update - clears the load confirmation"""
    return manager.update_slots(truck_id, data.pedane, principal)


@router.patch("/{truck_id}/driver", response_model=TruckResponse)
def set_truck_driver(
    truck_id: int,
    data: TruckDriverSet,
    principal: CurrentPrincipal,
    manager: TruckLoadManager = Depends(get_truck_manager),
):
    """Driver reassignment - clears the load confirmation"""
    return manager.assign_driver(truck_id, data.autista_in_uso)


@router.patch("/{truck_id}/confirm", response_model=TruckResponse)
def set_truck_confirmation(
    truck_id: int,
    data: TruckConfirmationSet,
    principal: CurrentPrincipal,
    manager: TruckLoadManager = Depends(get_truck_manager),
):
    return manager.set_confirmation(truck_id, data.confermato, principal)
