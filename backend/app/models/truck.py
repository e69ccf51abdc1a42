"""Truck and cargo slot (pallet position) models"""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# layout id -> slot count
LAYOUTS = {"asym8": 8, "sym12": 12, "ford5": 5}


class Truck(Base):
    """Truck - load plan is confirmed only in the exact slot/driver state it was confirmed in"""

    __tablename__ = "camions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    targa: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)  # plate
    nome: Mapped[str] = mapped_column(String(128), nullable=False)
    layout: Mapped[str] = mapped_column(String(16), nullable=False, default="asym8")
    num_pedane: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    autista_in_uso: Mapped[int | None] = mapped_column(ForeignKey("utenti.id", ondelete="SET NULL"), nullable=True)
    confermato: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    confermato_da: Mapped[str | None] = mapped_column(String(256), nullable=True)
    confermato_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_update: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    pedane: Mapped[list["CargoSlot"]] = relationship(
        "CargoSlot", back_populates="camion", cascade="all, delete-orphan", order_by="CargoSlot.numero"
    )

    def clear_confirmation(self) -> None:
        self.confermato = False
        self.confermato_da = None
        self.confermato_at = None


class CargoSlot(Base):
    """Cargo slot - position is fixed at provisioning, only the note changes"""

    __tablename__ = "pedane"
    __table_args__ = (UniqueConstraint("camion_id", "numero", name="uq_pedane_camion_numero"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    camion_id: Mapped[int] = mapped_column(ForeignKey("camions.id", ondelete="CASCADE"), nullable=False)
    numero: Mapped[int] = mapped_column(Integer, nullable=False)
    nota: Mapped[str] = mapped_column(Text, nullable=False, default="")

    camion: Mapped["Truck"] = relationship("Truck", back_populates="pedane")
