"""Order and order line models"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class OrderStatus(str, PyEnum):
    PENDING = "pending"
    PREPARING = "preparing"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


STATUS_VALUES = tuple(s.value for s in OrderStatus)


class Order(Base):
    """Order header - exclusively owns its lines"""

    __tablename__ = "ordini"
    __table_args__ = (
        CheckConstraint(f"stato IN {STATUS_VALUES!r}", name="ck_ordini_stato"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    cliente_id: Mapped[int] = mapped_column(ForeignKey("clienti.id"), nullable=False, index=True)
    agente_id: Mapped[int | None] = mapped_column(
        ForeignKey("utenti.id", ondelete="SET NULL"), nullable=True, index=True
    )
    autista_di_giro: Mapped[int | None] = mapped_column(ForeignKey("utenti.id", ondelete="SET NULL"), nullable=True)
    inserted_by: Mapped[int | None] = mapped_column(ForeignKey("utenti.id", ondelete="SET NULL"), nullable=True)
    data: Mapped[date] = mapped_column(Date, nullable=False, index=True)  # delivery date
    stato: Mapped[str] = mapped_column(String(16), nullable=False, default=OrderStatus.PENDING.value, index=True)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    data_non_certa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # date uncertain
    stef: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # refrigerated carrier
    inserted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    cliente: Mapped["Customer"] = relationship("Customer")
    agente: Mapped["User"] = relationship("User", foreign_keys=[agente_id])
    autista: Mapped["User"] = relationship("User", foreign_keys=[autista_di_giro])
    inserted_by_user: Mapped["User"] = relationship("User", foreign_keys=[inserted_by])
    linee: Mapped[list["OrderLine"]] = relationship(
        "OrderLine", back_populates="ordine", cascade="all, delete-orphan", order_by="OrderLine.id"
    )

    @property
    def cliente_nome(self) -> str | None:
        return self.cliente.nome if self.cliente else None

    @property
    def cliente_localita(self) -> str | None:
        return self.cliente.localita if self.cliente else None

    @property
    def cliente_giro(self) -> str | None:
        return self.cliente.giro if self.cliente else None

    @property
    def agente_nome(self) -> str | None:
        return self.agente.nome if self.agente else None

    @property
    def autista_nome(self) -> str | None:
        return self.autista.nome if self.autista else None

    @property
    def inserted_by_nome(self) -> str | None:
        return self.inserted_by_user.nome if self.inserted_by_user else None

    @property
    def inserted_by_cognome(self) -> str | None:
        return self.inserted_by_user.cognome if self.inserted_by_user else None

    @property
    def n_linee(self) -> int:
        return len(self.linee)


class OrderLine(Base):
    """Order line - product, quantity and packing info"""

    __tablename__ = "ordine_linee"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ordine_id: Mapped[int] = mapped_column(ForeignKey("ordini.id", ondelete="CASCADE"), nullable=False, index=True)
    prodotto_id: Mapped[int] = mapped_column(ForeignKey("prodotti.id"), nullable=False)
    qty: Mapped[Decimal] = mapped_column(Numeric(14, 3), nullable=False, default=1)
    peso_effettivo: Mapped[Decimal | None] = mapped_column(Numeric(14, 3), nullable=True)  # measured weight
    is_pedana: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # whole pallet
    nota_riga: Mapped[str] = mapped_column(Text, nullable=False, default="")
    unita_misura: Mapped[str] = mapped_column(String(16), nullable=False, default="pezzi")

    ordine: Mapped["Order"] = relationship("Order", back_populates="linee")
    prodotto: Mapped["Product"] = relationship("Product")

    @property
    def codice(self) -> str | None:
        return self.prodotto.codice if self.prodotto else None

    @property
    def prodotto_nome(self) -> str | None:
        return self.prodotto.nome if self.prodotto else None

    @property
    def um(self) -> str | None:
        return self.prodotto.um if self.prodotto else None

    @property
    def packaging(self) -> str | None:
        return self.prodotto.packaging if self.prodotto else None
