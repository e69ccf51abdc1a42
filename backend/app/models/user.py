"""User model"""
from enum import Enum as PyEnum

from sqlalchemy import JSON, Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Role(str, PyEnum):
    ADMIN = "admin"
    AUTISTA = "autista"
    MAGAZZINO = "magazzino"
    DIREZIONE = "direzione"


class User(Base):
    """User - agents and drivers are users too"""

    __tablename__ = "utenti"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(128), nullable=False)
    cognome: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    ruolo: Mapped[Role] = mapped_column(
        Enum(Role, name="ruolo", values_callable=lambda e: [m.value for m in e]), nullable=False
    )
    tipo_utente: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    # ordered route names, decoded by the JSON type at the storage boundary
    giri_consegna: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_agente: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def display_name(self) -> str:
        return f"{self.nome} {self.cognome or ''}".strip()
