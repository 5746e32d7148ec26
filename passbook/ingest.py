"""JSON snapshot source for offline use and fixtures.

A snapshot is an export of the store's three tables::

    {
      "ledgers": [{"ledger_id": "L1", "business_name": "Acme Weavers"}],
      "weaver_challans": [{"ledger_id": "L1", "challan_no": "WC-1", ...}],
      "payment_vouchers": [{"ledger_id": "L1", "payment_type": "Debit", ...}]
    }

Rows keep the store's column names. Missing tables are treated as empty.
Numbers are decoded as ``Decimal`` so amounts are never rounded through
floats.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from decimal import Decimal
from os import PathLike
from pathlib import Path
from typing import Any

from .exceptions import AccountNotFound
from .logging_setup import get_logger
from .models import LedgerAccount

_logger = get_logger("passbook.ingest")

_TABLES = ("ledgers", "weaver_challans", "payment_vouchers")


def _rows(snapshot: Mapping[str, Any], table: str) -> list[Mapping[str, Any]]:
    rows = snapshot.get(table)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise ValueError(f"snapshot table {table!r} must be a list, got {type(rows).__name__}")
    bad = [i for i, r in enumerate(rows) if not isinstance(r, Mapping)]
    if bad:
        raise ValueError(f"snapshot table {table!r} has non-object rows at {bad[:5]}")
    return rows


def _for_ledger(rows: Sequence[Mapping[str, Any]], account_id: str) -> list[Mapping[str, Any]]:
    return [r for r in rows if str(r.get("ledger_id", "")) == account_id]


class JsonSnapshotRepository:
    """Ledger source over an in-memory snapshot (see module docstring)."""

    def __init__(self, snapshot: Mapping[str, Any]) -> None:
        if not isinstance(snapshot, Mapping):
            raise ValueError("snapshot must be a JSON object")
        self._tables = {t: _rows(snapshot, t) for t in _TABLES}

    @classmethod
    def from_path(cls, path: str | PathLike[str]) -> JsonSnapshotRepository:
        p = Path(path)
        with p.open(encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
        repo = cls(data)
        _logger.debug(
            "snapshot:loaded path=%s ledgers=%d challans=%d vouchers=%d",
            p,
            len(repo._tables["ledgers"]),
            len(repo._tables["weaver_challans"]),
            len(repo._tables["payment_vouchers"]),
        )
        return repo

    def fetch_account(self, account_id: str) -> LedgerAccount:
        for row in _for_ledger(self._tables["ledgers"], account_id):
            return LedgerAccount(
                ledger_id=account_id,
                display_name=str(row.get("business_name") or account_id),
            )
        raise AccountNotFound(account_id)

    def fetch_credit_sources(self, account_id: str) -> list[Mapping[str, Any]]:
        return _for_ledger(self._tables["weaver_challans"], account_id)

    def fetch_vouchers(self, account_id: str) -> list[Mapping[str, Any]]:
        return _for_ledger(self._tables["payment_vouchers"], account_id)


__all__ = ["JsonSnapshotRepository"]
