# catalog/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    ForeignKey, CheckConstraint, UniqueConstraint,
)

metadata = MetaData()

states = Table(
    "states",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("uf", String(2), nullable=False, unique=True),
    CheckConstraint("length(uf) = 2", name="ck_states_uf_len"),
)

cities = Table(
    "cities",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column(
        "state_uf",
        String(2),
        ForeignKey("states.uf", name="fk_cities_state_uf"),
        nullable=False,
    ),
    UniqueConstraint("name", "state_uf", name="uq_cities_name_state_uf"),
    CheckConstraint("length(name) > 0", name="ck_cities_name_nonempty"),
)
