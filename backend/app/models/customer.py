"""Customer model"""
from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Customer(Base):
    """Customer (cheese factories, dairies, wholesalers)"""

    __tablename__ = "clienti"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    localita: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    giro: Mapped[str] = mapped_column(String(64), nullable=False, default="")  # delivery route
    agente_id: Mapped[int | None] = mapped_column(ForeignKey("utenti.id", ondelete="SET NULL"), nullable=True)
    autista_di_giro: Mapped[int | None] = mapped_column(ForeignKey("utenti.id", ondelete="SET NULL"), nullable=True)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    piva: Mapped[str] = mapped_column(String(32), nullable=False, default="")  # VAT number
    cond_pagamento: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    e_fornitore: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    classificazione: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    agente: Mapped["User"] = relationship("User", foreign_keys=[agente_id])
    autista: Mapped["User"] = relationship("User", foreign_keys=[autista_di_giro])

    @property
    def agente_nome(self) -> str | None:
        return self.agente.nome if self.agente else None

    @property
    def autista_nome(self) -> str | None:
        return self.autista.display_name if self.autista else None
