"""Truck load manager.

A confirmation is a claim about one exact slot/driver configuration. Every
slot-note or driver change clears it in the same transaction, and only
set_confirmation(confirmed=True) can set it.
"""
from collections.abc import Sequence
from datetime import datetime, timezone

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.auth import Principal
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.database import transaction
from app.models import CargoSlot, Truck, User
from app.models.truck import LAYOUTS
from app.schemas.truck import CargoSlotUpdate
from app.services.activity import ActivityNotifier

log = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TruckLoadManager:
    def __init__(self, db: Session, notifier: ActivityNotifier | None = None):
        self.db = db
        self.notifier = notifier or ActivityNotifier(db)

    def get(self, truck_id: int) -> Truck | None:
        return self.db.get(Truck, truck_id, options=[selectinload(Truck.pedane)], populate_existing=True)

    def _require(self, truck_id: int) -> Truck:
        truck = self.db.get(Truck, truck_id, options=[selectinload(Truck.pedane)])
        if truck is None:
            raise NotFoundError(f"Truck {truck_id} not found", truck_id=truck_id)
        return truck

    def update_slots(self, truck_id: int, slots: Sequence[CargoSlotUpdate], principal: Principal) -> Truck:
        """Apply slot notes, stamp last_update and drop the confirmation atomically"""
        with transaction(self.db, "update load plan"):
            truck = self._require(truck_id)
            by_number = {p.numero: p for p in truck.pedane}
            unknown = sorted({s.numero for s in slots} - by_number.keys())
            if unknown:
                raise ValidationError(f"Truck {truck_id} has no slot {unknown}", field="pedane")
            for s in slots:
                by_number[s.numero].nota = s.nota or ""
            truck.last_update = _utcnow()
            truck.clear_confirmation()
        log.info("truck_slots_updated", truck_id=truck_id, slots=len(slots), user_id=principal.id)
        self.notifier.record(principal, "Load plan updated", f"Truck #{truck_id} updated")
        return self.get(truck_id)

    def assign_driver(self, truck_id: int, driver_id: int | None) -> Truck:
        """Set or release the driver; always unconfirms. Not audited."""
        with transaction(self.db, "assign truck driver"):
            truck = self._require(truck_id)
            if driver_id is not None and self.db.get(User, driver_id) is None:
                raise ValidationError(f"User {driver_id} not found", field="autista_in_uso")
            truck.autista_in_uso = driver_id
            truck.clear_confirmation()
        log.info("truck_driver_assigned", truck_id=truck_id, driver_id=driver_id)
        return self.get(truck_id)

    def set_confirmation(self, truck_id: int, confirmed: bool, principal: Principal) -> Truck:
        with transaction(self.db, "set load confirmation"):
            truck = self._require(truck_id)
            if confirmed:
                truck.confermato = True
                truck.confermato_da = principal.display_name
                truck.confermato_at = _utcnow()
            else:
                truck.clear_confirmation()
        log.info("truck_confirmation_set", truck_id=truck_id, confirmed=confirmed, user_id=principal.id)
        if confirmed:
            self.notifier.record(principal, "Load confirmed", f"Truck #{truck_id}")
        return self.get(truck_id)

    def provision(self, targa: str, nome: str, layout: str = "asym8", num_pedane: int | None = None) -> Truck:
        """Create a truck together with its slots 1..num_pedane"""
        if layout not in LAYOUTS:
            raise ValidationError(f"Unknown layout '{layout}'", field="layout")
        count = num_pedane if num_pedane is not None else LAYOUTS[layout]
        if count < 1:
            raise ValidationError("A truck needs at least one slot", field="num_pedane")
        with transaction(self.db, "provision truck"):
            if self.db.execute(select(Truck.id).where(Truck.targa == targa)).first():
                raise ConflictError(f"Plate {targa} already exists", targa=targa)
            truck = Truck(targa=targa, nome=nome, layout=layout, num_pedane=count)
            truck.pedane = [CargoSlot(numero=n, nota="") for n in range(1, count + 1)]
            self.db.add(truck)
            self.db.flush()
            truck_id = truck.id
        log.info("truck_provisioned", truck_id=truck_id, targa=targa, slots=count)
        return self.get(truck_id)

    # last in the class body: the name shadows the builtin for later annotations
    def list(self) -> list[Truck]:
        stmt = select(Truck).options(selectinload(Truck.pedane)).order_by(Truck.id)
        return list(self.db.execute(stmt).scalars().all())
