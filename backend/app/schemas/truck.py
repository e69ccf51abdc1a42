"""Truck / load plan schemas"""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.order import blank_to_none


class CargoSlotResponse(BaseModel):
    numero: int
    nota: str = ""

    model_config = {"from_attributes": True}


class TruckResponse(BaseModel):
    id: int
    targa: str
    nome: str
    layout: str
    num_pedane: int
    autista_in_uso: int | None = None
    confermato: bool = False
    confermato_da: str | None = None
    confermato_at: datetime | None = None
    last_update: datetime | None = None
    pedane: list[CargoSlotResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class CargoSlotUpdate(BaseModel):
    numero: int = Field(..., ge=1)
    nota: str | None = ""


class TruckSlotsUpdate(BaseModel):
    """Slots not listed keep their note"""

    pedane: list[CargoSlotUpdate] = Field(default_factory=list)


class TruckDriverSet(BaseModel):
    """Null releases the truck"""

    autista_in_uso: int | None = None

    @field_validator("autista_in_uso", mode="before")
    @classmethod
    def optional_driver(cls, v):
        return blank_to_none(v)


class TruckConfirmationSet(BaseModel):
    confermato: bool
