"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-06-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "utenti",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(128), nullable=False),
        sa.Column("cognome", sa.String(128), nullable=False, server_default=""),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("ruolo", sa.Enum("admin", "autista", "magazzino", "direzione", name="ruolo"), nullable=False),
        sa.Column("tipo_utente", sa.String(64), nullable=False, server_default=""),
        sa.Column("giri_consegna", sa.JSON(), nullable=False),
        sa.Column("is_agente", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_utenti_username", "utenti", ["username"], unique=True)

    op.create_table(
        "clienti",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(256), nullable=False),
        sa.Column("localita", sa.String(128), nullable=False, server_default=""),
        sa.Column("giro", sa.String(64), nullable=False, server_default=""),
        sa.Column("agente_id", sa.Integer(), nullable=True),
        sa.Column("autista_di_giro", sa.Integer(), nullable=True),
        sa.Column("note", sa.Text(), nullable=False, server_default=""),
        sa.Column("piva", sa.String(32), nullable=False, server_default=""),
        sa.Column("cond_pagamento", sa.String(128), nullable=False, server_default=""),
        sa.Column("e_fornitore", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("classificazione", sa.String(64), nullable=False, server_default=""),
        sa.ForeignKeyConstraint(["agente_id"], ["utenti.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["autista_di_giro"], ["utenti.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clienti_nome", "clienti", ["nome"])

    op.create_table(
        "prodotti",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codice", sa.String(64), nullable=False),
        sa.Column("nome", sa.String(128), nullable=False),
        sa.Column("categoria", sa.String(64), nullable=False),
        sa.Column("um", sa.String(16), nullable=False),
        sa.Column("packaging", sa.String(128), nullable=False, server_default=""),
        sa.Column("peso_fisso", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("note", sa.Text(), nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_prodotti_codice", "prodotti", ["codice"], unique=True)

    op.create_table(
        "ordini",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cliente_id", sa.Integer(), nullable=False),
        sa.Column("agente_id", sa.Integer(), nullable=True),
        sa.Column("autista_di_giro", sa.Integer(), nullable=True),
        sa.Column("inserted_by", sa.Integer(), nullable=True),
        sa.Column("data", sa.Date(), nullable=False),
        sa.Column("stato", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("note", sa.Text(), nullable=False, server_default=""),
        sa.Column("data_non_certa", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("stef", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("inserted_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint(
            "stato IN ('pending', 'preparing', 'delivered', 'cancelled')", name="ck_ordini_stato"
        ),
        sa.ForeignKeyConstraint(["cliente_id"], ["clienti.id"]),
        sa.ForeignKeyConstraint(["agente_id"], ["utenti.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["autista_di_giro"], ["utenti.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["inserted_by"], ["utenti.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ordini_cliente_id", "ordini", ["cliente_id"])
    op.create_index("ix_ordini_agente_id", "ordini", ["agente_id"])
    op.create_index("ix_ordini_data", "ordini", ["data"])
    op.create_index("ix_ordini_stato", "ordini", ["stato"])

    op.create_table(
        "ordine_linee",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("ordine_id", sa.Integer(), nullable=False),
        sa.Column("prodotto_id", sa.Integer(), nullable=False),
        sa.Column("qty", sa.Numeric(14, 3), nullable=False, server_default="1"),
        sa.Column("peso_effettivo", sa.Numeric(14, 3), nullable=True),
        sa.Column("is_pedana", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("nota_riga", sa.Text(), nullable=False, server_default=""),
        sa.Column("unita_misura", sa.String(16), nullable=False, server_default="pezzi"),
        sa.ForeignKeyConstraint(["ordine_id"], ["ordini.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["prodotto_id"], ["prodotti.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ordine_linee_ordine_id", "ordine_linee", ["ordine_id"])

    op.create_table(
        "camions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("targa", sa.String(16), nullable=False),
        sa.Column("nome", sa.String(128), nullable=False),
        sa.Column("layout", sa.String(16), nullable=False, server_default="asym8"),
        sa.Column("num_pedane", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("autista_in_uso", sa.Integer(), nullable=True),
        sa.Column("confermato", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("confermato_da", sa.String(256), nullable=True),
        sa.Column("confermato_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_update", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["autista_in_uso"], ["utenti.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("targa"),
    )

    op.create_table(
        "pedane",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("camion_id", sa.Integer(), nullable=False),
        sa.Column("numero", sa.Integer(), nullable=False),
        sa.Column("nota", sa.Text(), nullable=False, server_default=""),
        sa.ForeignKeyConstraint(["camion_id"], ["camions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("camion_id", "numero", name="uq_pedane_camion_numero"),
    )

    op.create_table(
        "giri_calendario",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("giro", sa.String(64), nullable=False),
        sa.Column("giorni", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("giro"),
    )

    op.create_table(
        "activity_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("user_name", sa.String(256), nullable=False),
        sa.Column("action", sa.String(128), nullable=False),
        sa.Column("detail", sa.Text(), nullable=False, server_default=""),
        sa.Column("ts", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["utenti.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_log_ts", "activity_log", ["ts"])


def downgrade() -> None:
    op.drop_index("ix_activity_log_ts", "activity_log")
    op.drop_table("activity_log")
    op.drop_table("giri_calendario")
    op.drop_table("pedane")
    op.drop_table("camions")
    op.drop_index("ix_ordine_linee_ordine_id", "ordine_linee")
    op.drop_table("ordine_linee")
    op.drop_index("ix_ordini_stato", "ordini")
    op.drop_index("ix_ordini_data", "ordini")
    op.drop_index("ix_ordini_agente_id", "ordini")
    op.drop_index("ix_ordini_cliente_id", "ordini")
    op.drop_table("ordini")
    op.drop_index("ix_prodotti_codice", "prodotti")
    op.drop_table("prodotti")
    op.drop_index("ix_clienti_nome", "clienti")
    op.drop_table("clienti")
    op.drop_index("ix_utenti_username", "utenti")
    op.drop_table("utenti")
    sa.Enum(name="ruolo").drop(op.get_bind(), checkfirst=True)
