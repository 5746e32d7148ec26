"""Voucher reference codes: ``VCH-{C|D}-{YYYYMM}{NNN}``.

Numbering is one global sequence per voucher type, not a per-month sequence:
vouchers are walked in occurrence order and two counters (Credit, Debit) are
incremented as each voucher is visited, across month boundaries. The month
stamp in a code is the month on the voucher's own wall clock, even when an
offset places it in another UTC month. A Debit in March that follows
four earlier Debits gets ``...202403005`` even if it is the first Debit of
March. Codes already handed to partners rely on this numbering.

Equal occurrence times keep the upstream order by default. ``TieBreak.ID``
uses the voucher id as the secondary key instead; vouchers without an id keep
their input order behind the identified ones.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .logging_setup import get_logger
from .models import RawRecord, TieBreak, VoucherRecord, VoucherType, occurrence_key
from .normalizers import coerce_voucher

VOUCHER_CODE_PATTERN = r"VCH-[CD]-\d{6}\d{3,}"

_TYPE_LETTER: dict[VoucherType, str] = {
    VoucherType.CREDIT: "C",
    VoucherType.DEBIT: "D",
}

_logger = get_logger("passbook.sequencing")


def voucher_code(voucher_type: VoucherType, occurred_at: datetime, ordinal: int) -> str:
    """Format a voucher code; ``ordinal`` is 1-based and padded to three digits."""

    if ordinal < 1:
        raise ValueError(f"ordinal must be positive, got {ordinal}")
    letter = _TYPE_LETTER[voucher_type]
    return f"VCH-{letter}-{occurred_at.year:04d}{occurred_at.month:02d}{ordinal:03d}"


def sequence_order(
    vouchers: Sequence[VoucherRecord], *, tie_break: TieBreak = TieBreak.INPUT_ORDER
) -> list[int]:
    """Return input positions in the order ordinals are handed out."""

    positions = range(len(vouchers))
    if tie_break is TieBreak.ID:
        missing = sum(1 for v in vouchers if v.id is None)
        if missing:
            _logger.warning(
                "assign_voucher_codes:missing_id count=%d fallback=input_order", missing
            )
        return sorted(
            positions,
            key=lambda i: (
                occurrence_key(vouchers[i].date),
                vouchers[i].id is None,
                vouchers[i].id or 0,
            ),
        )
    # sorted() is stable: ties stay in the order the source returned them.
    return sorted(positions, key=lambda i: occurrence_key(vouchers[i].date))


def assign_voucher_codes(
    vouchers: Sequence[RawRecord | VoucherRecord],
    *,
    tie_break: TieBreak = TieBreak.INPUT_ORDER,
) -> list[str]:
    """Assign a reference code to every voucher; the result is parallel to the input.

    Ordinals are tracked by position, so vouchers without an id still get a
    code.
    """

    records = [coerce_voucher(v) for v in vouchers]
    counters: dict[VoucherType, int] = {vt: 0 for vt in VoucherType}
    codes: list[str] = [""] * len(records)
    for pos in sequence_order(records, tie_break=tie_break):
        record = records[pos]
        counters[record.voucher_type] += 1
        codes[pos] = voucher_code(record.voucher_type, record.date, counters[record.voucher_type])
    return codes


__all__ = [
    "VOUCHER_CODE_PATTERN",
    "assign_voucher_codes",
    "sequence_order",
    "voucher_code",
]
