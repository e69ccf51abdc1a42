"""Customer schemas"""
from pydantic import BaseModel, Field, field_validator

from app.schemas.order import blank_to_none


class CustomerBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=256)
    localita: str = Field(default="", max_length=128)
    giro: str = Field(default="", max_length=64)
    agente_id: int | None = None
    autista_di_giro: int | None = None
    note: str = ""
    piva: str = Field(default="", max_length=32)
    cond_pagamento: str = Field(default="", max_length=128)
    e_fornitore: bool = False
    classificazione: str = Field(default="", max_length=64)

    @field_validator("agente_id", "autista_di_giro", mode="before")
    @classmethod
    def optional_refs(cls, v):
        return blank_to_none(v)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase):
    pass


class CustomerResponse(CustomerBase):
    id: int
    agente_nome: str | None = None
    autista_nome: str | None = None

    model_config = {"from_attributes": True}
