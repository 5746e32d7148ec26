"""SQL-backed ledger source.

Reads weaver challans, payment vouchers and the ledger account from the
store mapped in :mod:`passbook.db.models`. Each read opens its own session so
the two fetches can run on separate threads (see
:func:`passbook.repository.fetch_sources`).

Rows are returned as plain mappings keyed by the store's column names; the
passbook models accept those names directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select

from .db.client import session_scope
from .db.models import Ledger, PaymentVoucher, WeaverChallan
from .exceptions import AccountNotFound
from .logging_setup import get_logger
from .models import LedgerAccount

_logger = get_logger("passbook.persistence")


def _challan_row(row: WeaverChallan) -> Mapping[str, Any]:
    return {
        "id": row.id,
        "challan_no": row.challan_no,
        "challan_date": row.challan_date,
        "total_grey_mtr": row.total_grey_mtr,
        "quality_details": row.quality_details,
        "transport_charge": row.transport_charge,
        "vendor_amount": row.vendor_amount,
        "sgst": row.sgst,
        "cgst": row.cgst,
        "igst": row.igst,
    }


def _voucher_row(row: PaymentVoucher) -> Mapping[str, Any]:
    return {
        "id": row.id,
        "date": row.date,
        "payment_for": row.payment_for,
        "payment_type": row.payment_type,
        "amount": row.amount,
    }


class SqlLedgerRepository:
    """Ledger source over a SQLAlchemy database URL.

    ``database_url`` defaults to ``DATABASE_URL`` from the environment
    (resolved by :mod:`passbook.db.client` at read time).
    """

    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url

    def fetch_account(self, account_id: str) -> LedgerAccount:
        with session_scope(database_url=self.database_url) as session:
            row = session.get(Ledger, account_id)
            if row is None:
                raise AccountNotFound(account_id)
            return LedgerAccount(ledger_id=row.ledger_id, display_name=row.business_name)

    def fetch_credit_sources(self, account_id: str) -> list[Mapping[str, Any]]:
        stmt = (
            select(WeaverChallan)
            .where(WeaverChallan.ledger_id == account_id)
            .order_by(WeaverChallan.challan_date, WeaverChallan.id)
        )
        with session_scope(database_url=self.database_url) as session:
            rows = [_challan_row(r) for r in session.scalars(stmt).all()]
        _logger.debug("fetch_credit_sources:done account_id=%s rows=%d", account_id, len(rows))
        return rows

    def fetch_vouchers(self, account_id: str) -> list[Mapping[str, Any]]:
        # Ordered by id so the input order (and therefore the codes) is stable.
        stmt = (
            select(PaymentVoucher)
            .where(PaymentVoucher.ledger_id == account_id)
            .order_by(PaymentVoucher.id)
        )
        with session_scope(database_url=self.database_url) as session:
            rows = [_voucher_row(r) for r in session.scalars(stmt).all()]
        _logger.debug("fetch_vouchers:done account_id=%s rows=%d", account_id, len(rows))
        return rows


__all__ = ["SqlLedgerRepository"]
