"""Delivery route calendar - which weekdays each route runs"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.auth import CurrentPrincipal, Principal, RequireAdmin
from app.database import get_db
from app.models import RouteCalendar
from app.schemas.route_calendar import RouteCalendarResponse, RouteCalendarUpdate

router = APIRouter(prefix="/api/route-calendar", tags=["route-calendar"])


@router.get("", response_model=list[RouteCalendarResponse])
def list_route_calendar(
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
):
    return list(db.execute(select(RouteCalendar).order_by(RouteCalendar.giro)).scalars().all())


@router.put("/{entry_id}", response_model=RouteCalendarResponse)
def update_route_days(
    entry_id: int,
    data: RouteCalendarUpdate,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    entry = db.get(RouteCalendar, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Route not found")
    entry.giorni = data.giorni
    db.commit()
    db.refresh(entry)
    return entry
