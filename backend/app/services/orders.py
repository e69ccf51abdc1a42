"""Order repository.

An order is an aggregate: the header and its lines are validated against the
catalog by the writer and persisted in a single transaction. Updates replace
the whole line set; there is no line-level merge. Audit entries are written
only after the transaction committed.
"""
from datetime import datetime, timezone

import structlog
from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session, aliased, joinedload, selectinload

from app.core.auth import Principal
from app.core.errors import NotFoundError, ValidationError
from app.database import transaction
from app.models import Customer, Order, OrderLine, OrderStatus, Product, User
from app.schemas.order import OrderCreate, OrderFilters, OrderLineIn, OrderUpdate
from app.services.activity import ActivityNotifier

log = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _hydrated():
    """Loader options: display names via joins, lines in one batched IN query"""
    return [
        joinedload(Order.cliente),
        joinedload(Order.agente),
        joinedload(Order.autista),
        joinedload(Order.inserted_by_user),
        selectinload(Order.linee).joinedload(OrderLine.prodotto),
    ]


def _build_line(line: OrderLineIn) -> OrderLine:
    return OrderLine(
        prodotto_id=line.prodotto_id,
        qty=line.qty,
        peso_effettivo=line.peso_effettivo,
        is_pedana=line.is_pedana,
        nota_riga=line.nota_riga or "",
        unita_misura=line.unita_misura or "pezzi",
    )


class OrderRepository:
    def __init__(self, db: Session, notifier: ActivityNotifier | None = None):
        self.db = db
        self.notifier = notifier or ActivityNotifier(db)

    def get(self, order_id: int) -> Order | None:
        """Hydrated order, or None"""
        return self.db.get(Order, order_id, options=_hydrated(), populate_existing=True)

    def _validate(self, data: OrderCreate | OrderUpdate) -> None:
        if self.db.get(Customer, data.cliente_id) is None:
            raise ValidationError(f"Customer {data.cliente_id} not found", field="cliente_id")
        for field in ("agente_id", "autista_di_giro"):
            user_id = getattr(data, field)
            if user_id is not None and self.db.get(User, user_id) is None:
                raise ValidationError(f"User {user_id} not found", field=field)
        if not data.linee:
            raise ValidationError("At least one product is required", field="linee")
        wanted = {line.prodotto_id for line in data.linee}
        found = set(self.db.execute(select(Product.id).where(Product.id.in_(wanted))).scalars().all())
        missing = sorted(wanted - found)
        if missing:
            raise ValidationError(f"Products not found: {missing}", field="linee")
        for line in data.linee:
            if line.qty <= 0:
                raise ValidationError("Quantity must be positive", field="qty")

    def create(self, data: OrderCreate, principal: Principal) -> Order:
        with transaction(self.db, "create order"):
            self._validate(data)
            order = Order(
                **data.model_dump(exclude={"linee", "stato"}),
                stato=data.stato.value,
                inserted_by=principal.id,
                updated_at=_utcnow(),
            )
            order.linee = [_build_line(line) for line in data.linee]
            self.db.add(order)
            self.db.flush()
            order_id = order.id
        log.info("order_created", order_id=order_id, lines=len(data.linee), user_id=principal.id)
        self.notifier.record(principal, "New order", f"#{order_id}")
        return self.get(order_id)

    def update(self, order_id: int, data: OrderUpdate, principal: Principal) -> Order:
        """Replace header fields and the complete line set"""
        with transaction(self.db, "update order"):
            order = self.db.get(Order, order_id)
            if order is None:
                raise NotFoundError(f"Order {order_id} not found", order_id=order_id)
            self._validate(data)
            for k, v in data.model_dump(exclude={"linee", "stato"}).items():
                setattr(order, k, v)
            order.stato = data.stato.value
            order.updated_at = _utcnow()
            # delete-orphan removes every previous line in the same flush
            order.linee = [_build_line(line) for line in data.linee]
        log.info("order_updated", order_id=order_id, lines=len(data.linee), user_id=principal.id)
        self.notifier.record(principal, "Order modified", f"#{order_id}")
        return self.get(order_id)

    def patch_status(self, order_id: int, stato: str) -> OrderStatus:
        """Status-only write. A missing id updates zero rows and still succeeds."""
        try:
            status = OrderStatus(stato)
        except ValueError:
            raise ValidationError(f"Unknown status '{stato}'", field="stato") from None
        with transaction(self.db, "patch order status"):
            result = self.db.execute(
                update(Order)
                .where(Order.id == order_id)
                .values(stato=status.value, updated_at=_utcnow())
            )
        log.info("order_status_patched", order_id=order_id, stato=status.value, matched=result.rowcount)
        return status

    def delete(self, order_id: int, principal: Principal) -> None:
        """Idempotent; the audit entry is written even when nothing was deleted"""
        with transaction(self.db, "delete order"):
            order = self.db.get(Order, order_id, options=[joinedload(Order.cliente)])
            label = (order.cliente_nome or "") if order else ""
            if order is not None:
                self.db.delete(order)
        log.info("order_deleted", order_id=order_id, existed=order is not None, user_id=principal.id)
        self.notifier.record(principal, "Order deleted", f"#{order_id} {label}".strip())

    # last in the class body: the name shadows the builtin for later annotations
    def list(self, filters: OrderFilters) -> list[Order]:
        """Filtered orders, newest first, each with its lines"""
        agent = aliased(User)
        stmt = (
            select(Order)
            .join(Customer, Order.cliente_id == Customer.id)
            .outerjoin(agent, Order.agente_id == agent.id)
            .options(*_hydrated())
            .order_by(Order.id.desc())
        )
        if filters.data:
            stmt = stmt.where(Order.data == filters.data)
        if filters.stato:
            stmt = stmt.where(Order.stato == filters.stato.value)
        if filters.agente_id is not None:
            stmt = stmt.where(Order.agente_id == filters.agente_id)
        if filters.autista_id is not None:
            stmt = stmt.where(Order.autista_di_giro == filters.autista_id)
        if filters.giro:
            stmt = stmt.where(Customer.giro == filters.giro)
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            stmt = stmt.where(or_(Customer.nome.ilike(pattern), agent.nome.ilike(pattern)))
        return list(self.db.execute(stmt).scalars().unique().all())
