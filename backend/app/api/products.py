"""Product catalog - list for everyone, writes ADMIN only. Codes are unique."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.auth import CurrentPrincipal, Principal, RequireAdmin
from app.database import get_db
from app.models import OrderLine, Product
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter(prefix="/api/products", tags=["products"])


def _code_taken(db: Session, codice: str, exclude_id: int | None = None) -> bool:
    stmt = select(Product.id).where(Product.codice == codice)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)
    return db.execute(stmt).first() is not None


@router.get("", response_model=list[ProductResponse])
def list_products(
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
):
    stmt = select(Product).order_by(Product.categoria, Product.nome)
    return list(db.execute(stmt).scalars().all())


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    if _code_taken(db, data.codice):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product code already exists")
    product = Product(**data.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    if _code_taken(db, data.codice, exclude_id=product_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product code already in use")
    for k, v in data.model_dump().items():
        setattr(product, k, v)
    db.commit()
    db.refresh(product)
    return product


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    product = db.get(Product, product_id)
    if product and db.execute(select(OrderLine.id).where(OrderLine.prodotto_id == product_id).limit(1)).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product is used by orders")
    if product:
        db.delete(product)
        db.commit()
    return {"ok": True}
