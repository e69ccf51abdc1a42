"""Initial seed - users, sample catalog, trucks with slots, route calendar (run after migrations)"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.database import SessionLocal
from app.logging_config import configure_logging
from app.models import Customer, Product, RouteCalendar, User
from app.models.user import Role
from app.services.trucks import TruckLoadManager

log = structlog.get_logger(__name__)

DEFAULT_PASSWORD = "1234"

# nome, cognome, username, ruolo, tipo_utente, giri_consegna, is_agente
USERS = [
    ("Francesco", "Chiarappa", "francescoc", Role.DIREZIONE, "CEO", [], True),
    ("Marco", "Palmisano", "marco", Role.ADMIN, "Operazioni", [], True),
    ("Mariella", "Lacatena", "mariella", Role.DIREZIONE, "Contabilità", [], False),
    ("Gaston", "Casas", "gaston", Role.MAGAZZINO, "Magazziniere", [], False),
    ("Francesco", "Avossa", "francescoa", Role.AUTISTA, "Autista", ["bari nord", "lecce", "calabria"], True),
    ("Emanuele", "Fornaro", "emanuele", Role.AUTISTA, "Autista",
     ["bari/foggia", "taranto", "lecce est", "valle itria", "murgia"], True),
]

# nome, localita, giro
CUSTOMERS = [
    ("CASEIFICIO ALTAMURA DI PIETRO ALTAMURA", "MOLFETTA", "bari nord"),
    ("CASEIFICIO MAGGIORE SRL", "MATERA", "murgia"),
    ("I SAPORI DEL CASARO SRL", "MOTTOLA", "taranto"),
    ("CASEIFICIO IL CESTINO DEL CASARO", "MONTALTO UFFUGO", "calabria"),
    ("CAVALERA MAILA S.R.L.S.", "GALATONE", "lecce"),
    ("CASEIFICIO CONSOLI SRL", "LOCOROTONDO", "valle itria"),
    ("BONTA' BIANCA SRL", "CONVERSANO", "diretto"),
]

# codice, nome, categoria, um, packaging, peso_fisso
PRODUCTS = [
    ("ACIDOC", "ACIDO CITRICO", "ALTRO", "kg", "1sacco=25kg", True),
    ("ALB23", "ALBERTI", "PANNA UHT", "lt", "1ct=10lt", True),
    ("BAD", "BAD", "CAGLIATA", "kg", "1pz=15kg", False),
    ("BUR250N", "BURRO 250", "ALTRO", "pz", "1ct=20pz", True),
    ("CACIO", "CACIO PICCANTE", "FORMAGGI", "kg", "1pz=1,5kg circa", False),
    ("CLT2710", "CLT27%", "PANNA UHT", "lt", "1ct=10lt", True),
    ("MOZBUF", "MOZZARELLA DI BUFALA", "ALTRO", "kg", "1ct=3kg", True),
    ("RICFNEU", "RICOTTA FORTE", "RICOTTA", "kg", "1 secchio= 5 kg", True),
]

# targa, nome, layout
TRUCKS = [
    ("FT747BN", "Furgone 100q FT747BN", "asym8"),
    ("FM249VA", "Furgone 100q FM249VA", "asym8"),
    ("FV671ZL", "Furgone 72q FV671ZL", "asym8"),
    ("FT748BN", "Furgone 150q FT748BN", "sym12"),
    ("GC808NZ", "Ford GC808NZ", "ford5"),
]

ROUTE_DAYS = [
    ("bari nord", [3, 5]), ("bari/foggia", [1]), ("calabria", [2]),
    ("diretto", [2]), ("lecce", [1, 4]), ("lecce est", [3]),
    ("murgia", [5]), ("stef", []), ("taranto", [2]),
    ("valle itria", [4]), ("variabile", []), ("foggia", []),
]


def seed(db: Session) -> bool:
    """Seed an empty database. Returns False when users already exist."""
    if db.execute(select(func.count(User.id))).scalar():
        return False
    password_hash = hash_password(DEFAULT_PASSWORD)
    for nome, cognome, username, ruolo, tipo_utente, giri, is_agente in USERS:
        db.add(User(
            nome=nome, cognome=cognome, username=username, password_hash=password_hash,
            ruolo=ruolo, tipo_utente=tipo_utente, giri_consegna=giri, is_agente=is_agente,
        ))
    for nome, localita, giro in CUSTOMERS:
        db.add(Customer(nome=nome, localita=localita, giro=giro))
    for codice, nome, categoria, um, packaging, peso_fisso in PRODUCTS:
        db.add(Product(codice=codice, nome=nome, categoria=categoria, um=um, packaging=packaging, peso_fisso=peso_fisso))
    for giro, giorni in ROUTE_DAYS:
        db.add(RouteCalendar(giro=giro, giorni=giorni))
    db.commit()

    trucks = TruckLoadManager(db)
    for targa, nome, layout in TRUCKS:
        trucks.provision(targa, nome, layout)
    return True


def main():
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    db = SessionLocal()
    try:
        if seed(db):
            log.info("seed_completed", users=len(USERS), trucks=len(TRUCKS), password=DEFAULT_PASSWORD)
        else:
            log.info("seed_skipped", reason="users already exist")
    finally:
        db.close()


if __name__ == "__main__":
    main()
