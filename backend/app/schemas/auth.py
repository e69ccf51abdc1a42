"""Auth and user schemas"""
from pydantic import BaseModel, Field, field_validator

from app.models.user import Role


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class UserResponse(BaseModel):
    id: int
    nome: str
    cognome: str = ""
    username: str
    ruolo: str
    tipo_utente: str = ""
    giri_consegna: list[str] = Field(default_factory=list)
    is_agente: bool = False

    @field_validator("ruolo", mode="before")
    @classmethod
    def role_to_str(cls, v: object) -> str:
        if hasattr(v, "value"):
            return str(v.value)
        return str(v)

    @field_validator("giri_consegna", mode="before")
    @classmethod
    def routes_or_empty(cls, v: object) -> list:
        return list(v) if v else []

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


def _clean_routes(v: list[str] | None) -> list[str]:
    """Drop blanks and duplicates, keep order"""
    seen: list[str] = []
    for g in v or []:
        s = str(g).strip()
        if s and s not in seen:
            seen.append(s)
    return seen


class UserCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=128)
    cognome: str = Field(default="", max_length=128)
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    ruolo: Role
    tipo_utente: str = Field(default="", max_length=64)
    giri_consegna: list[str] = Field(default_factory=list)
    is_agente: bool = False

    @field_validator("giri_consegna")
    @classmethod
    def clean_routes(cls, v: list[str]) -> list[str]:
        return _clean_routes(v)


class UserUpdate(UserCreate):
    """Password is only changed when supplied"""

    password: str | None = None
