"""Ledger assembly and summary totals.

:func:`assemble_ledger` merges the normalized challan and voucher streams into
one running-balance statement; :func:`summarize` reduces the same streams to
totals. Over identical inputs the summary balance always equals the running
balance of the most recent entry.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .models import ZERO, LedgerEntry, LedgerSummary, Transaction, occurrence_key


def assemble_ledger(
    challan_txns: Iterable[Transaction],
    voucher_txns: Iterable[Transaction],
) -> list[LedgerEntry]:
    """Return the passbook entries, most recent first.

    Transactions are concatenated (challans first), stably sorted by date
    ascending, and folded into a running balance (``balance += credit -
    debit``) before the list is reversed for display. Same-day transactions
    therefore keep their merge order during accumulation. No rounding is
    applied.
    """

    chronological = sorted(
        [*challan_txns, *voucher_txns], key=lambda tx: occurrence_key(tx.date)
    )
    entries: list[LedgerEntry] = []
    balance = ZERO
    for tx in chronological:
        balance += tx.credit - tx.debit
        entries.append(LedgerEntry.from_transaction(tx, balance=balance))
    entries.reverse()
    return entries


def summarize(
    challan_txns: Iterable[Transaction],
    voucher_txns: Iterable[Transaction],
) -> LedgerSummary:
    """Total credit, total debit and balance for a ledger.

    Production events only ever add to ``total_credit``; vouchers add to
    credit or debit according to their type.
    """

    total_credit = ZERO
    total_debit = ZERO
    for tx in challan_txns:
        total_credit += tx.credit
    for tx in voucher_txns:
        total_credit += tx.credit
        total_debit += tx.debit
    return LedgerSummary(
        total_credit=total_credit,
        total_debit=total_debit,
        balance=total_credit - total_debit,
    )


def closing_balance(entries: Sequence[LedgerEntry]) -> Decimal:
    """Balance after the most recent entry (zero for an empty ledger)."""

    return entries[0].balance if entries else ZERO


__all__ = ["assemble_ledger", "closing_balance", "summarize"]
