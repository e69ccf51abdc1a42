"""Bearer-token authentication and explicit role checks"""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from app.core.errors import PermissionDeniedError
from app.core.security import create_access_token, decode_access_token
from app.models import User
from app.models.user import Role

bearer_scheme = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    """Authenticated caller, rebuilt from token claims on every request"""

    id: int
    username: str
    nome: str
    cognome: str = ""
    ruolo: Role
    tipo_utente: str = ""
    giri_consegna: list[str] = Field(default_factory=list)
    is_agente: bool = False

    @property
    def display_name(self) -> str:
        return f"{self.nome} {self.cognome or ''}".strip()


def issue_token(user: User) -> str:
    """Token for a user; claims mirror Principal"""
    return create_access_token({
        "sub": str(user.id),
        "username": user.username,
        "nome": user.nome,
        "cognome": user.cognome or "",
        "ruolo": user.ruolo.value,
        "tipo_utente": user.tipo_utente or "",
        "giri_consegna": list(user.giri_consegna or []),
        "is_agente": bool(user.is_agente),
    })


def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Principal:
    """Authentication required - 401 without a valid bearer token"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = decode_access_token(credentials.credentials)
    if not claims or "sub" not in claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Principal(id=int(claims["sub"]), **{k: v for k, v in claims.items() if k not in ("sub", "exp")})


def check_role(principal: Principal, *roles: Role) -> Principal:
    """Capability check; call at the start of a gated operation"""
    if principal.ruolo not in roles:
        raise PermissionDeniedError("Permission denied", role=principal.ruolo.value)
    return principal


def require_role(*roles: Role):
    """Dependency wrapper around check_role"""

    def _check(principal: Annotated[Principal, Depends(get_principal)]) -> Principal:
        return check_role(principal, *roles)

    return _check


CurrentPrincipal = Annotated[Principal, Depends(get_principal)]
RequireAdmin = Depends(require_role(Role.ADMIN))
