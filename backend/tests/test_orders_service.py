"""OrderRepository - aggregate writes, validation and audit entries"""
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError

from app.core.errors import NotFoundError, PersistenceError, ValidationError
from app.models import ActivityLog, Order, OrderLine, OrderStatus
from app.schemas.order import OrderCreate, OrderFilters, OrderUpdate
from app.services.activity import ActivityNotifier
from app.services.orders import OrderRepository


def _payload(customer, products, **overrides):
    data = {
        "cliente_id": customer.id,
        "data": "2025-06-01",
        "note": "consegna mattina",
        "linee": [
            {"prodotto_id": products[0].id, "qty": 2},
            {"prodotto_id": products[1].id, "qty": "1.5", "is_pedana": True, "nota_riga": "intera"},
        ],
    }
    data.update(overrides)
    return data


def _audit(db):
    return db.execute(select(ActivityLog).order_by(ActivityLog.id)).scalars().all()


def _line_count(db):
    return db.execute(select(func.count(OrderLine.id))).scalar()


def test_create_two_line_order(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    assert order.stato == OrderStatus.PENDING.value
    assert order.data == date(2025, 6, 1)
    assert order.n_linee == 2
    assert [line.codice for line in order.linee] == ["ALB23", "BAD"]
    assert order.linee[1].qty == Decimal("1.5")
    assert order.linee[1].is_pedana is True
    assert order.inserted_by == admin_principal.id
    assert order.cliente_nome == "CASEIFICIO ALTAMURA"
    assert order.cliente_giro == "bari nord"
    assert order.inserted_by_nome == "Marco"
    assert order.inserted_by_cognome == "Palmisano"


def test_create_records_new_order_entry(db, admin_principal, customers, products):
    order = OrderRepository(db).create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    entries = _audit(db)
    assert len(entries) == 1
    assert entries[0].action == "New order"
    assert entries[0].detail == f"#{order.id}"
    assert entries[0].user_name == "Marco Palmisano"


def test_create_without_lines_writes_nothing(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    with pytest.raises(ValidationError):
        repo.create(OrderCreate(**_payload(customers[0], products, linee=[])), admin_principal)

    assert db.execute(select(func.count(Order.id))).scalar() == 0
    assert _audit(db) == []


def test_create_unknown_customer(db, admin_principal, customers, products):
    with pytest.raises(ValidationError) as exc:
        OrderRepository(db).create(OrderCreate(**_payload(customers[0], products, cliente_id=999)), admin_principal)
    assert exc.value.context["field"] == "cliente_id"


def test_create_unknown_product_writes_no_lines(db, admin_principal, customers, products):
    payload = _payload(customers[0], products)
    payload["linee"].append({"prodotto_id": 999, "qty": 1})
    with pytest.raises(ValidationError):
        OrderRepository(db).create(OrderCreate(**payload), admin_principal)

    assert db.execute(select(func.count(Order.id))).scalar() == 0
    assert _line_count(db) == 0


def test_create_unknown_agent(db, admin_principal, customers, products):
    with pytest.raises(ValidationError) as exc:
        OrderRepository(db).create(OrderCreate(**_payload(customers[0], products, agente_id=999)), admin_principal)
    assert exc.value.context["field"] == "agente_id"


def test_blank_optional_refs_are_null(db, admin_principal, customers, products):
    order = OrderRepository(db).create(
        OrderCreate(**_payload(customers[0], products, agente_id="", autista_di_giro=0)), admin_principal
    )
    assert order.agente_id is None
    assert order.autista_di_giro is None
    assert order.agente_nome is None


def test_update_replaces_line_set(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    updated = repo.update(
        order.id,
        OrderUpdate(**_payload(
            customers[1], products,
            stato="preparing",
            linee=[{"prodotto_id": products[2].id, "qty": 4}],
        )),
        admin_principal,
    )

    assert updated.stato == "preparing"
    assert updated.cliente_id == customers[1].id
    assert [line.prodotto_id for line in updated.linee] == [products[2].id]
    assert _line_count(db) == 1
    assert _audit(db)[-1].action == "Order modified"


def test_update_failure_keeps_previous_lines(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    with pytest.raises(ValidationError):
        repo.update(
            order.id,
            OrderUpdate(**_payload(customers[0], products, stato="pending", linee=[{"prodotto_id": 999}])),
            admin_principal,
        )

    assert repo.get(order.id).n_linee == 2


def test_update_missing_order(db, admin_principal, customers, products):
    with pytest.raises(NotFoundError):
        OrderRepository(db).update(404, OrderUpdate(**_payload(customers[0], products, stato="pending")), admin_principal)


def test_patch_status_keeps_lines_and_bumps_updated_at(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)
    before = order.updated_at
    line_ids = [line.id for line in order.linee]

    assert repo.patch_status(order.id, "delivered") == OrderStatus.DELIVERED

    after = repo.get(order.id)
    assert after.stato == "delivered"
    assert after.updated_at > before
    assert [line.id for line in after.linee] == line_ids


def test_patch_status_unknown_value(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    with pytest.raises(ValidationError):
        repo.patch_status(order.id, "shipped")
    assert repo.get(order.id).stato == "pending"


def test_patch_status_is_not_audited(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)
    repo.patch_status(order.id, "preparing")

    assert [e.action for e in _audit(db)] == ["New order"]


def test_patch_status_missing_order_succeeds(db):
    assert OrderRepository(db).patch_status(12345, "cancelled") == OrderStatus.CANCELLED


def test_delete_cascades_lines(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    order_id = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal).id
    repo.delete(order_id, admin_principal)

    assert repo.get(order_id) is None
    assert _line_count(db) == 0
    assert _audit(db)[-1].detail == f"#{order_id} CASEIFICIO ALTAMURA"


def test_delete_missing_order_records_empty_label(db, admin_principal):
    OrderRepository(db).delete(777, admin_principal)

    entry = _audit(db)[-1]
    assert entry.action == "Order deleted"
    assert entry.detail == "#777"


def test_list_filters(db, admin_principal, driver, customers, products):
    repo = OrderRepository(db)
    first = repo.create(OrderCreate(**_payload(customers[0], products, agente_id=admin_principal.id)), admin_principal)
    second = repo.create(
        OrderCreate(**_payload(customers[1], products, data="2025-06-02", agente_id=driver.id,
                               autista_di_giro=driver.id)),
        admin_principal,
    )
    repo.patch_status(second.id, "preparing")

    assert [o.id for o in repo.list(OrderFilters())] == [second.id, first.id]
    assert [o.id for o in repo.list(OrderFilters(data=date(2025, 6, 1)))] == [first.id]
    assert [o.id for o in repo.list(OrderFilters(stato=OrderStatus.PREPARING))] == [second.id]
    assert [o.id for o in repo.list(OrderFilters(agente_id=driver.id))] == [second.id]
    assert [o.id for o in repo.list(OrderFilters(autista_id=driver.id))] == [second.id]
    assert [o.id for o in repo.list(OrderFilters(giro="bari nord"))] == [first.id]


def test_list_search_matches_customer_or_agent(db, admin_principal, driver, customers, products):
    repo = OrderRepository(db)
    first = repo.create(OrderCreate(**_payload(customers[0], products, agente_id=admin_principal.id)), admin_principal)
    second = repo.create(OrderCreate(**_payload(customers[1], products, agente_id=driver.id)), admin_principal)

    assert [o.id for o in repo.list(OrderFilters(search="altamura"))] == [first.id]
    assert [o.id for o in repo.list(OrderFilters(search="FRANCESCO"))] == [second.id]
    assert repo.list(OrderFilters(search="nessuno")) == []


def test_list_orders_carry_lines(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    (order,) = repo.list(OrderFilters())
    assert order.n_linee == 2
    assert order.linee[0].prodotto_nome == "ALBERTI"
    assert order.linee[0].packaging == "1ct=10lt"


def test_commit_failure_rolls_back(db, admin_principal, customers, products, monkeypatch):
    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(PersistenceError):
        OrderRepository(db).create(OrderCreate(**_payload(customers[0], products)), admin_principal)
    monkeypatch.undo()

    assert db.execute(select(func.count(Order.id))).scalar() == 0
    assert _line_count(db) == 0


def test_audit_failure_does_not_fail_the_write(db, admin_principal, customers, products):
    broken = MagicMock()
    broken.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
    repo = OrderRepository(db, notifier=ActivityNotifier(broken))

    order = repo.create(OrderCreate(**_payload(customers[0], products)), admin_principal)

    assert order.n_linee == 2
    broken.rollback.assert_called_once()
    assert _audit(db) == []


def test_list_loads_lines_in_one_batched_query(db, admin_principal, customers, products):
    repo = OrderRepository(db)
    for customer in customers * 3:
        repo.create(OrderCreate(**_payload(customer, products)), admin_principal)
    db.expire_all()

    statements = []

    def count(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    engine = db.get_bind()
    event.listen(engine, "before_cursor_execute", count)
    try:
        orders = repo.list(OrderFilters())
        names = [line.prodotto_nome for order in orders for line in order.linee]
        agents = [order.agente_nome for order in orders]
    finally:
        event.remove(engine, "before_cursor_execute", count)

    assert len(orders) == 6
    assert len(names) == 12
    assert agents == [None] * 6
    assert len(statements) == 2
