"""Record -> :class:`~passbook.models.Transaction` normalizers.

Challans and payment vouchers arrive in unrelated shapes. This module validates
each raw record (:func:`coerce_challan`, :func:`coerce_voucher`) and maps it
onto the common transaction shape:

- challan: ``detail="Weaver Challan"``, ``remark=<challan number>``, credit
  valued per :class:`~passbook.models.CreditBasis`, never a debit;
- voucher: ``detail=<purpose>``, ``remark=<voucher code>``, credit or debit by
  voucher type.

Recoverable gaps (missing numbers, malformed quality specifications) resolve
to zero. Records are never dropped; a record whose date or voucher type cannot
be read raises :class:`~passbook.exceptions.MalformedRecordError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from .exceptions import MalformedRecordError
from .logging_setup import get_logger
from .models import (
    ZERO,
    ChallanRecord,
    CreditBasis,
    RawRecord,
    Transaction,
    VoucherRecord,
    VoucherType,
    to_decimal,
)
from .quality import has_usable_rate, parse_quality_spec, resolve_rate

CHALLAN_DETAIL = "Weaver Challan"

_HUNDRED = Decimal(100)
_NOT_APPLICABLE = "not applicable"

_logger = get_logger("passbook.normalizers")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _first_present(raw: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        val = raw.get(key)
        if val is not None and str(val).strip():
            return str(val).strip()
    return None


def coerce_challan(raw: RawRecord | ChallanRecord) -> ChallanRecord:
    """Validate a raw challan mapping (already-validated records pass through)."""

    if isinstance(raw, ChallanRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(
            f"challan record must be a mapping, got {type(raw).__name__}", kind="challan"
        )
    try:
        return ChallanRecord.model_validate(dict(raw))
    except ValidationError as exc:
        ref = _first_present(raw, "reference", "challan_no")
        raise MalformedRecordError(
            f"challan {ref!r} could not be normalized: {exc}", kind="challan", reference=ref
        ) from exc


def coerce_voucher(raw: RawRecord | VoucherRecord) -> VoucherRecord:
    """Validate a raw payment voucher mapping (already-validated records pass through)."""

    if isinstance(raw, VoucherRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(
            f"voucher record must be a mapping, got {type(raw).__name__}", kind="voucher"
        )
    try:
        return VoucherRecord.model_validate(dict(raw))
    except ValidationError as exc:
        ref = _first_present(raw, "id")
        raise MalformedRecordError(
            f"voucher {ref!r} could not be normalized: {exc}", kind="voucher", reference=ref
        ) from exc


# ---------------------------------------------------------------------------
# Challan valuation
# ---------------------------------------------------------------------------


def parse_percentage(label: str | None) -> Decimal:
    """``"5%"`` -> ``Decimal("5")``; ``"Not Applicable"``, blanks and junk -> 0."""

    if label is None:
        return ZERO
    s = label.strip()
    if not s or s.lower() == _NOT_APPLICABLE:
        return ZERO
    pct = to_decimal(s.removesuffix("%"))
    return pct if pct is not None and pct > 0 else ZERO


def vendor_invoice_total(record: ChallanRecord) -> Decimal:
    """Transport charge plus vendor amount including SGST, CGST and IGST."""

    base = record.vendor_amount
    gst = ZERO
    for label in (record.sgst, record.cgst, record.igst):
        gst += base * parse_percentage(label) / _HUNDRED
    return record.transport_charge + base + gst


def challan_credit(
    record: ChallanRecord, *, basis: CreditBasis = CreditBasis.QUALITY_RATE
) -> Decimal:
    """Credit owed to the partner for one challan."""

    if basis is CreditBasis.VENDOR_INVOICE:
        return vendor_invoice_total(record)
    details = parse_quality_spec(record.quality_spec)
    if not has_usable_rate(details):
        _logger.warning(
            "normalize_challans:rate_fallback reference=%s entries=%d rate=0",
            record.reference or "-",
            len(details),
        )
    return record.quantity * resolve_rate(details)


# ---------------------------------------------------------------------------
# Public normalizers
# ---------------------------------------------------------------------------


def normalize_challans(
    records: Iterable[RawRecord | ChallanRecord],
    *,
    basis: CreditBasis = CreditBasis.QUALITY_RATE,
) -> list[Transaction]:
    """Map challans to credit transactions, preserving input order."""

    out: list[Transaction] = []
    for raw in records:
        record = coerce_challan(raw)
        out.append(
            Transaction(
                date=record.date,
                detail=CHALLAN_DETAIL,
                remark=record.reference,
                credit=challan_credit(record, basis=basis),
                debit=ZERO,
            )
        )
    return out


def normalize_vouchers(
    records: Sequence[RawRecord | VoucherRecord],
    codes: Sequence[str],
) -> list[Transaction]:
    """Map vouchers to transactions; ``codes`` is parallel to ``records``.

    Codes come from :func:`passbook.sequencing.assign_voucher_codes`.
    """

    if len(codes) != len(records):
        raise ValueError(
            f"voucher codes misaligned: {len(codes)} codes for {len(records)} vouchers"
        )
    out: list[Transaction] = []
    for raw, code in zip(records, codes, strict=True):
        record = coerce_voucher(raw)
        is_credit = record.voucher_type is VoucherType.CREDIT
        out.append(
            Transaction(
                date=record.date,
                detail=record.purpose,
                remark=code,
                credit=record.amount if is_credit else ZERO,
                debit=ZERO if is_credit else record.amount,
            )
        )
    return out


__all__ = [
    "CHALLAN_DETAIL",
    "challan_credit",
    "coerce_challan",
    "coerce_voucher",
    "normalize_challans",
    "normalize_vouchers",
    "parse_percentage",
    "vendor_invoice_total",
]
