"""Product schemas - code is upper-cased, unit must be kg / lt / pz"""
from pydantic import BaseModel, Field, field_validator

UM_CHOICES = ("kg", "lt", "pz")


def _normalize_code(v):
    """Codes are unique case-insensitively, stored upper-case"""
    return str(v).strip().upper() if v is not None else v


def _normalize_um(v):
    s = str(v or "").strip().lower()
    if s not in UM_CHOICES:
        raise ValueError(f"unit must be one of {', '.join(UM_CHOICES)}")
    return s


class ProductBase(BaseModel):
    codice: str = Field(..., min_length=1, max_length=64)
    nome: str = Field(..., min_length=1, max_length=128)
    categoria: str = Field(..., min_length=1, max_length=64)
    um: str = Field(..., max_length=16)
    packaging: str = Field(default="", max_length=128)  # e.g. "1ct=10lt"
    peso_fisso: bool = False
    note: str = ""

    @field_validator("codice", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return _normalize_code(v)

    @field_validator("um", mode="before")
    @classmethod
    def normalize_um(cls, v):
        return _normalize_um(v)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductResponse(ProductBase):
    id: int

    model_config = {"from_attributes": True}
