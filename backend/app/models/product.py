"""Product model"""
from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Product(Base):
    """Product - code is stored upper-cased"""

    __tablename__ = "prodotti"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    codice: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    nome: Mapped[str] = mapped_column(String(128), nullable=False)
    categoria: Mapped[str] = mapped_column(String(64), nullable=False)
    um: Mapped[str] = mapped_column(String(16), nullable=False)  # unit: kg, lt, pz
    packaging: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    peso_fisso: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # fixed weight
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
