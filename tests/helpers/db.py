"""DB helpers for tests: bootstrap a temporary SQLite DB and seed ledger rows."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy import text as sql_text

from passbook.db import Base
from passbook.db.client import get_engine, session_scope
from passbook.db.models import Ledger, PaymentVoucher, WeaverChallan


def bootstrap_sqlite_db(db_file: Path, *, set_default_env: bool = False) -> str:
    """Create a SQLite database file, initialize schema, and return the URL.

    Using a file-backed SQLite DB ensures multiple SQLAlchemy connections share
    the same state (in-memory DBs are per-connection by default), which the
    concurrent challan/voucher reads rely on.
    """

    url = f"sqlite+pysqlite:///{db_file}"
    # Ensure parent exists before engine creation attempts any writes
    db_file.parent.mkdir(parents=True, exist_ok=True)
    engine = get_engine(database_url=url)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _):  # pragma: no cover - tiny bridge
        dbapi_conn.execute("PRAGMA foreign_keys = ON")

    Base.metadata.create_all(bind=engine)
    _assert_schema_in_sync(url)

    # Make it the default for any code paths that read from the environment
    if set_default_env:
        os.environ.setdefault("DATABASE_URL", url)
    return url


def seed_ledger(
    *,
    database_url: str,
    ledger_id: str,
    business_name: str,
    challans: Iterable[Mapping[str, Any]] = (),
    vouchers: Iterable[Mapping[str, Any]] = (),
) -> None:
    """Insert one ledger with its challans and vouchers.

    Row mappings use the store's column names; ``ledger_id`` is filled in.
    """

    with session_scope(database_url=database_url) as session:
        session.add(Ledger(ledger_id=ledger_id, business_name=business_name))
        session.flush()
        for row in challans:
            session.add(WeaverChallan(ledger_id=ledger_id, **_coerce(row)))
        for row in vouchers:
            session.add(PaymentVoucher(ledger_id=ledger_id, **_coerce(row)))


def _coerce(row: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in row.items():
        if key in {"challan_date", "date"} and isinstance(value, str):
            value = date.fromisoformat(value)
        elif isinstance(value, (int, float, str)) and key in {
            "total_grey_mtr",
            "transport_charge",
            "vendor_amount",
            "amount",
        }:
            value = Decimal(str(value))
        out[key] = value
    return out


def _assert_schema_in_sync(database_url: str) -> None:
    """Quick sanity check: ORM column sets match the SQLite tables."""

    with session_scope(database_url=database_url) as session:
        for table in Base.metadata.sorted_tables:
            rows = session.execute(sql_text(f"PRAGMA table_info('{table.name}')")).fetchall()
            got = {row[1] for row in rows}  # (cid, name, type, notnull, dflt_value, pk)
            expected = {c.name for c in table.columns}
            assert got == expected, f"{table.name} schema drift: {expected ^ got}"
