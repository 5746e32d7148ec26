"""Statement display and export.

The printed statement has one row per ledger entry, most recent first::

    S.NO | DATE | DETAIL | REMARK | CREDIT | DEBIT | BALANCE

followed by the three summary totals. Amounts are shown with two decimals
(half-up); a zero credit or debit cell is shown as ``-`` on screen. CSV
export keeps the same columns with plain two-decimal numbers.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TextIO

from rich.table import Table

from .models import LedgerEntry, LedgerSummary

STATEMENT_COLUMNS = ("S.NO", "DATE", "DETAIL", "REMARK", "CREDIT", "DEBIT", "BALANCE")

_CENTS = Decimal("0.01")


def format_amount(value: Decimal) -> str:
    return f"{value.quantize(_CENTS, rounding=ROUND_HALF_UP):,.2f}"


def format_date(value: datetime) -> str:
    return value.date().isoformat()


def _cell(value: Decimal) -> str:
    return "-" if value == 0 else format_amount(value)


def statement_rows(entries: Iterable[LedgerEntry], start: int = 1) -> Iterator[tuple[str, ...]]:
    """Yield display rows for ``entries``; ``start`` is the S.NO of the first one."""

    for n, e in enumerate(entries, start=start):
        yield (
            str(n),
            format_date(e.date),
            e.detail,
            e.remark,
            _cell(e.credit),
            _cell(e.debit),
            format_amount(e.balance),
        )


def build_statement_table(
    entries: Iterable[LedgerEntry], *, start: int = 1, title: str | None = None
) -> Table:
    table = Table(title=title, show_lines=False)
    for name in STATEMENT_COLUMNS:
        numeric = name in {"S.NO", "CREDIT", "DEBIT", "BALANCE"}
        table.add_column(name, justify="right" if numeric else "left", no_wrap=numeric)
    for row in statement_rows(entries, start=start):
        table.add_row(*row)
    return table


def build_summary_table(summary: LedgerSummary, *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Total", style="bold")
    table.add_column("Amount", justify="right")
    table.add_row("Total Credit", format_amount(summary.total_credit))
    table.add_row("Total Debit", format_amount(summary.total_debit))
    table.add_row("Balance", format_amount(summary.balance))
    return table


def write_statement_csv(entries: Iterable[LedgerEntry], stream: TextIO) -> int:
    """Write the statement as CSV to ``stream``; returns the number of data rows."""

    w = csv.writer(stream)
    w.writerow(STATEMENT_COLUMNS)
    count = 0
    for n, e in enumerate(entries, start=1):
        w.writerow(
            [
                n,
                format_date(e.date),
                e.detail,
                e.remark,
                f"{e.credit.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}",
                f"{e.debit.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}",
                f"{e.balance.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}",
            ]
        )
        count += 1
    return count


__all__ = [
    "STATEMENT_COLUMNS",
    "build_statement_table",
    "build_summary_table",
    "format_amount",
    "format_date",
    "statement_rows",
    "write_statement_csv",
]
