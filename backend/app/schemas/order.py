"""Order schemas"""
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from app.models.order import OrderStatus


def blank_to_none(v):
    """Optional references: "" and 0 mean unset"""
    if v in ("", 0, "0"):
        return None
    return v


class OrderLineIn(BaseModel):
    prodotto_id: int
    qty: Decimal = Field(default=Decimal(1), gt=0)
    peso_effettivo: Decimal | None = Field(None, ge=0)
    is_pedana: bool = False
    nota_riga: str = ""
    unita_misura: str = Field(default="pezzi", max_length=16)


class OrderBase(BaseModel):
    cliente_id: int
    agente_id: int | None = None
    autista_di_giro: int | None = None
    data: date
    note: str = ""
    data_non_certa: bool = False
    stef: bool = False

    @field_validator("agente_id", "autista_di_giro", mode="before")
    @classmethod
    def optional_refs(cls, v):
        return blank_to_none(v)


class OrderCreate(OrderBase):
    stato: OrderStatus = OrderStatus.PENDING
    # emptiness is checked by OrderRepository so it reports a 400 like other reference errors
    linee: list[OrderLineIn] = Field(default_factory=list)


class OrderUpdate(OrderBase):
    """Full replacement - lines not re-submitted are dropped"""

    stato: OrderStatus
    linee: list[OrderLineIn] = Field(default_factory=list)


class OrderStatusPatch(BaseModel):
    stato: str = Field(..., min_length=1)


class OrderStatusPatchResult(BaseModel):
    ok: bool = True
    stato: OrderStatus


class OrderFilters(BaseModel):
    """Exact-match filters plus case-insensitive search on customer or agent name"""

    data: date | None = None
    stato: OrderStatus | None = None
    agente_id: int | None = None
    autista_id: int | None = None
    giro: str | None = None
    search: str | None = None


class OrderLineResponse(BaseModel):
    id: int
    prodotto_id: int
    qty: Decimal
    peso_effettivo: Decimal | None = None
    is_pedana: bool = False
    nota_riga: str = ""
    unita_misura: str = "pezzi"
    codice: str | None = None
    prodotto_nome: str | None = None
    um: str | None = None
    packaging: str | None = None

    model_config = {"from_attributes": True}


class OrderResponse(OrderBase):
    id: int
    stato: OrderStatus
    inserted_by: int | None = None
    inserted_at: datetime | None = None
    updated_at: datetime | None = None
    cliente_nome: str | None = None
    cliente_localita: str | None = None
    cliente_giro: str | None = None
    agente_nome: str | None = None
    autista_nome: str | None = None
    inserted_by_nome: str | None = None
    inserted_by_cognome: str | None = None
    n_linee: int = 0
    linee: list[OrderLineResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}
