"""Customer CRUD - any user may create/edit, delete is ADMIN only"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from app.core.auth import CurrentPrincipal, Principal, RequireAdmin
from app.database import get_db
from app.models import Customer, Order, User
from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from app.services.activity import ActivityNotifier

router = APIRouter(prefix="/api/customers", tags=["customers"])


def _check_user_refs(db: Session, data: CustomerCreate | CustomerUpdate) -> None:
    for user_id in (data.agente_id, data.autista_di_giro):
        if user_id is not None and not db.get(User, user_id):
            raise HTTPException(status_code=400, detail=f"User {user_id} not found")


def _get_customer(db: Session, customer_id: int) -> Customer | None:
    return db.get(
        Customer,
        customer_id,
        options=[joinedload(Customer.agente), joinedload(Customer.autista)],
        populate_existing=True,
    )


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
):
    stmt = (
        select(Customer)
        .options(joinedload(Customer.agente), joinedload(Customer.autista))
        .order_by(Customer.nome)
    )
    return list(db.execute(stmt).scalars().all())


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    data: CustomerCreate,
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
):
    _check_user_refs(db, data)
    customer = Customer(**data.model_dump())
    db.add(customer)
    db.commit()
    customer_id = customer.id
    ActivityNotifier(db).record(principal, "New customer", data.nome)
    return _get_customer(db, customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
):
    customer = db.get(Customer, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    _check_user_refs(db, data)
    for k, v in data.model_dump().items():
        setattr(customer, k, v)
    db.commit()
    return _get_customer(db, customer_id)


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    customer = db.get(Customer, customer_id)
    if customer and db.execute(select(Order.id).where(Order.cliente_id == customer_id).limit(1)).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Customer has orders")
    if customer:
        db.delete(customer)
        db.commit()
    return {"ok": True}
