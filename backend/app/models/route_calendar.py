"""Delivery route calendar model"""
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class RouteCalendar(Base):
    """Route -> weekdays it runs (1=Monday ... 7=Sunday)"""

    __tablename__ = "giri_calendario"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    giro: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    giorni: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
