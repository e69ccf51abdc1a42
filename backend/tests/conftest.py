"""Shared fixtures - in-memory SQLite, fresh schema per test"""
import os

# the app builds its engine at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import Principal, issue_token
from app.core.security import hash_password
from app.database import Base, get_db
from app.main import app
from app.models import Customer, Product, User
from app.models.user import Role
from app.services.trucks import TruckLoadManager

PASSWORD = "secret"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _make_user(db, username, ruolo, nome, cognome="", **extra):
    user = User(
        nome=nome,
        cognome=cognome,
        username=username,
        password_hash=hash_password(PASSWORD),
        ruolo=ruolo,
        **extra,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db):
    return _make_user(db, "marco", Role.ADMIN, "Marco", "Palmisano", tipo_utente="Operazioni", is_agente=True)


@pytest.fixture
def driver(db):
    return _make_user(
        db, "francescoa", Role.AUTISTA, "Francesco", "Avossa",
        tipo_utente="Autista", giri_consegna=["bari nord", "lecce"], is_agente=True,
    )


@pytest.fixture
def warehouse(db):
    return _make_user(db, "gaston", Role.MAGAZZINO, "Gaston", "Casas", tipo_utente="Magazziniere")


@pytest.fixture
def management(db):
    return _make_user(db, "mariella", Role.DIREZIONE, "Mariella", "Lacatena", tipo_utente="Contabilità")


def as_principal(user: User) -> Principal:
    return Principal(
        id=user.id,
        username=user.username,
        nome=user.nome,
        cognome=user.cognome,
        ruolo=user.ruolo,
        tipo_utente=user.tipo_utente,
        giri_consegna=user.giri_consegna,
        is_agente=user.is_agente,
    )


@pytest.fixture
def admin_principal(admin):
    return as_principal(admin)


@pytest.fixture
def driver_principal(driver):
    return as_principal(driver)


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {issue_token(user)}"}


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def driver_headers(driver):
    return bearer(driver)


@pytest.fixture
def warehouse_headers(warehouse):
    return bearer(warehouse)


@pytest.fixture
def management_headers(management):
    return bearer(management)


@pytest.fixture
def customers(db, admin, driver):
    rows = [
        Customer(nome="CASEIFICIO ALTAMURA", localita="MOLFETTA", giro="bari nord", agente_id=admin.id,
                 autista_di_giro=driver.id),
        Customer(nome="CAVALERA MAILA S.R.L.S.", localita="GALATONE", giro="lecce", agente_id=driver.id),
    ]
    db.add_all(rows)
    db.commit()
    for c in rows:
        db.refresh(c)
    return rows


@pytest.fixture
def products(db):
    rows = [
        Product(codice="ALB23", nome="ALBERTI", categoria="PANNA UHT", um="lt", packaging="1ct=10lt", peso_fisso=True),
        Product(codice="BAD", nome="BAD", categoria="CAGLIATA", um="kg", packaging="1pz=15kg"),
        Product(codice="RICFNEU", nome="RICOTTA FORTE", categoria="RICOTTA", um="kg", packaging="1 secchio= 5 kg"),
    ]
    db.add_all(rows)
    db.commit()
    for p in rows:
        db.refresh(p)
    return rows


@pytest.fixture
def truck(db):
    return TruckLoadManager(db).provision("FT747BN", "Furgone 100q FT747BN", "asym8")
