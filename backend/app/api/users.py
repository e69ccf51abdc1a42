"""User management - list for everyone, writes ADMIN only"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.auth import CurrentPrincipal, Principal, RequireAdmin
from app.core.security import hash_password
from app.database import get_db
from app.models import User
from app.schemas.auth import UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])


def _username_taken(db: Session, username: str, exclude_id: int | None = None) -> bool:
    stmt = select(User.id).where(User.username == username)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return db.execute(stmt).first() is not None


@router.get("", response_model=list[UserResponse])
def list_users(
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
):
    return list(db.execute(select(User).order_by(User.nome)).scalars().all())


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    if _username_taken(db, data.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
    user = User(
        **data.model_dump(exclude={"password"}),
        password_hash=hash_password(data.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if _username_taken(db, data.username, exclude_id=user_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already in use")
    for k, v in data.model_dump(exclude={"password"}).items():
        setattr(user, k, v)
    if data.password:
        user.password_hash = hash_password(data.password)
    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: Principal = RequireAdmin,
):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete yourself")
    user = db.get(User, user_id)
    if user:
        db.delete(user)
        db.commit()
    return {"ok": True}
