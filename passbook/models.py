"""Data models and type aliases for ``passbook``.

Two families live here:

- Raw upstream records (:class:`ChallanRecord`, :class:`VoucherRecord`) are
  pydantic models. They accept either the engine's own keys or the column
  names used by the store (``challan_no``, ``total_grey_mtr``,
  ``payment_for``...) and coerce loosely typed values: missing or unparsable
  numbers become zero, dates are parsed from ISO strings.
- Computed shapes (:class:`Transaction`, :class:`LedgerEntry`,
  :class:`LedgerSummary`, :class:`Page`, :class:`Passbook`) are frozen
  dataclasses. They are produced fresh on every read and never persisted.

Amounts are ``decimal.Decimal`` throughout. Occurrence times keep the wall
clock they were recorded with; :func:`occurrence_key` maps them onto one
timeline for sorting.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

ZERO = Decimal("0")

# A raw record as returned by a repository: column name -> value.
type RawRecord = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def to_decimal(raw: Any) -> Decimal | None:
    """Return ``raw`` as a finite ``Decimal`` or ``None`` when it is not numeric.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``. Booleans,
    NaN and infinities are rejected.
    """

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        return Decimal(str(raw)) if math.isfinite(raw) else None
    if isinstance(raw, str):
        s = raw.strip().replace(",", "")
        if not s:
            return None
        try:
            d = Decimal(s)
        except InvalidOperation:
            return None
        return d if d.is_finite() else None
    return None


def parse_timestamp(raw: Any) -> datetime:
    """Parse an occurrence date into a ``datetime``.

    Accepts ``datetime``/``date`` objects and ISO 8601 strings (date-only
    strings become midnight). An offset is kept as given, so the calendar
    date and month are the ones the entry was recorded on.
    """

    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, date):
        value = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        s = raw.strip()
        if not s:
            raise ValueError("date is empty")
        try:
            value = datetime.fromisoformat(s)
        except ValueError as exc:
            raise ValueError(f"invalid ISO date: {raw!r}") from exc
    else:
        raise ValueError(f"unsupported date value: {raw!r}")
    return value


def occurrence_key(value: datetime) -> datetime:
    """Sort key placing naive and offset-aware occurrence times on one timeline.

    Aware values compare by their UTC instant; naive values are taken as UTC.
    """

    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class VoucherType(StrEnum):
    CREDIT = "Credit"
    DEBIT = "Debit"


class CreditBasis(StrEnum):
    """How a weaver challan is valued as a credit event.

    ``quality_rate``: quantity times the rate of the first quality entry.
    ``vendor_invoice``: transport charge plus vendor amount including GST, as
    shown on the printed ledger statement.
    """

    QUALITY_RATE = "quality_rate"
    VENDOR_INVOICE = "vendor_invoice"


class TieBreak(StrEnum):
    """Ordering of vouchers that share an identical occurrence time."""

    INPUT_ORDER = "input_order"
    ID = "id"


# ---------------------------------------------------------------------------
# Raw upstream records
# ---------------------------------------------------------------------------


def _zero_if_missing(v: Any) -> Decimal:
    d = to_decimal(v)
    return d if d is not None else ZERO


def _text(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


class ChallanRecord(BaseModel):
    """A weaver challan as read from the store (source of a credit event)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    date: datetime = Field(validation_alias=AliasChoices("date", "challan_date"))
    reference: str = Field(default="", validation_alias=AliasChoices("reference", "challan_no"))
    quantity: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("quantity", "total_grey_mtr")
    )
    # Left untouched here; see passbook.quality.parse_quality_spec.
    quality_spec: Any = Field(
        default=None,
        validation_alias=AliasChoices("quality_spec", "qualitySpec", "quality_details"),
    )
    transport_charge: Decimal = ZERO
    vendor_amount: Decimal = ZERO
    sgst: str | None = None
    cgst: str | None = None
    igst: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> datetime:
        return parse_timestamp(v)

    @field_validator("reference", mode="before")
    @classmethod
    def _reference_text(cls, v: Any) -> str:
        return _text(v)

    @field_validator("quantity", "transport_charge", "vendor_amount", mode="before")
    @classmethod
    def _numeric_or_zero(cls, v: Any) -> Decimal:
        return _zero_if_missing(v)

    @field_validator("sgst", "cgst", "igst", mode="before")
    @classmethod
    def _label_text(cls, v: Any) -> str | None:
        return _text(v) or None


class VoucherRecord(BaseModel):
    """A manually entered payment voucher."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None
    date: datetime
    purpose: str = Field(default="", validation_alias=AliasChoices("purpose", "payment_for"))
    voucher_type: VoucherType = Field(
        validation_alias=AliasChoices("type", "voucher_type", "payment_type")
    )
    amount: Decimal = Field(default=ZERO, ge=0)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> datetime:
        return parse_timestamp(v)

    @field_validator("purpose", mode="before")
    @classmethod
    def _purpose_text(cls, v: Any) -> str:
        return _text(v)

    @field_validator("voucher_type", mode="before")
    @classmethod
    def _canonical_type(cls, v: Any) -> Any:
        # "credit" / " DEBIT " -> "Credit" / "Debit"; other values fail enum validation.
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_or_zero(cls, v: Any) -> Decimal:
        return _zero_if_missing(v)


# ---------------------------------------------------------------------------
# Computed shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LedgerAccount:
    """A business partner identity (read-only for this package)."""

    ledger_id: str
    display_name: str


@dataclass(frozen=True, slots=True)
class Transaction:
    """A normalized financial event.

    ``detail`` is the category label (``"Weaver Challan"`` or the voucher's
    purpose) and ``remark`` the reference code (challan number or voucher
    code). At most one of ``credit``/``debit`` is non-zero.
    """

    date: datetime
    detail: str
    remark: str
    credit: Decimal = ZERO
    debit: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.credit - self.debit


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """A transaction with the running balance accumulated up to and including it."""

    date: datetime
    detail: str
    remark: str
    credit: Decimal
    debit: Decimal
    balance: Decimal

    @classmethod
    def from_transaction(cls, tx: Transaction, *, balance: Decimal) -> LedgerEntry:
        return cls(
            date=tx.date,
            detail=tx.detail,
            remark=tx.remark,
            credit=tx.credit,
            debit=tx.debit,
            balance=balance,
        )


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    total_credit: Decimal = ZERO
    total_debit: Decimal = ZERO
    balance: Decimal = ZERO


@dataclass(frozen=True, slots=True)
class Page:
    """A contiguous slice of the ordered ledger (``page`` is 1-based)."""

    items: tuple[LedgerEntry, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def first_index(self) -> int:
        """1-based position of the first item within the whole ledger."""
        return (self.page - 1) * self.page_size + 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass(frozen=True, slots=True)
class Passbook:
    """The assembled statement for one ledger account, most recent entry first."""

    account_id: str
    entries: tuple[LedgerEntry, ...]
    summary: LedgerSummary
    account: LedgerAccount | None = None


__all__ = [
    "ZERO",
    "ChallanRecord",
    "CreditBasis",
    "LedgerAccount",
    "LedgerEntry",
    "LedgerSummary",
    "Page",
    "Passbook",
    "RawRecord",
    "TieBreak",
    "Transaction",
    "VoucherRecord",
    "VoucherType",
    "occurrence_key",
    "parse_timestamp",
    "to_decimal",
]
