"""ORM mappings of the store tables the passbook reads.

The schema itself is owned by the application database (these classes map the
existing ``ledgers``, ``weaver_challans`` and ``payment_vouchers`` tables and
are only used for reads). Columns the passbook never looks at are omitted.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# SQLite only autoincrements INTEGER PRIMARY KEY columns.
_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass


# ---------------------------
# Partners: ledgers
# ---------------------------


class Ledger(Base):
    __tablename__ = "ledgers"

    ledger_id: Mapped[str] = mapped_column(String, primary_key=True)
    business_name: Mapped[str] = mapped_column(String, nullable=False)
    contact_person_name: Mapped[str | None] = mapped_column(String, nullable=True)
    gst_number: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, server_default=text("CURRENT_TIMESTAMP")
    )


# ---------------------------
# Production: weaver_challans
# ---------------------------


class WeaverChallan(Base):
    __tablename__ = "weaver_challans"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    challan_no: Mapped[str] = mapped_column(String, nullable=False)
    challan_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    ledger_id: Mapped[str] = mapped_column(
        String, ForeignKey("ledgers.ledger_id"), nullable=False, index=True
    )
    total_grey_mtr: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    # Free-form JSON: list of {quality_name, rate, grey_mtr}, but not guaranteed.
    quality_details: Mapped[Any] = mapped_column(JSON, nullable=True)
    transport_charge: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    vendor_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    sgst: Mapped[str | None] = mapped_column(String, nullable=True)
    cgst: Mapped[str | None] = mapped_column(String, nullable=True)
    igst: Mapped[str | None] = mapped_column(String, nullable=True)


# ---------------------------
# Payments: payment_vouchers
# ---------------------------


class PaymentVoucher(Base):
    __tablename__ = "payment_vouchers"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    ledger_id: Mapped[str] = mapped_column(
        String, ForeignKey("ledgers.ledger_id"), nullable=False, index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    payment_for: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 'Credit' | 'Debit'
    payment_type: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)


__all__ = [
    "Base",
    "Ledger",
    "PaymentVoucher",
    "WeaverChallan",
]
