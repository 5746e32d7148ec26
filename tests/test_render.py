# ruff: noqa: E501
import csv
import io
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from rich.console import Console

from passbook.models import LedgerEntry, LedgerSummary
from passbook.render import (
    STATEMENT_COLUMNS,
    build_statement_table,
    build_summary_table,
    format_amount,
    format_date,
    statement_rows,
    write_statement_csv,
)

ENTRIES = [
    LedgerEntry(
        date=datetime(2024, 1, 15),
        detail="Advance",
        remark="VCH-D-202401001",
        credit=Decimal("0"),
        debit=Decimal("200"),
        balance=Decimal("300.005"),
    ),
    LedgerEntry(
        date=datetime(2024, 1, 10, 9, 30),
        detail="Weaver Challan",
        remark="WC-1",
        credit=Decimal("500.005"),
        debit=Decimal("0"),
        balance=Decimal("500.005"),
    ),
]


def _render(renderable) -> str:
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def test_format_amount_rounds_half_up_with_grouping():
    assert format_amount(Decimal("1234567.125")) == "1,234,567.13"
    assert format_amount(Decimal("-0.005")) == "-0.01"
    assert format_amount(Decimal("0")) == "0.00"


def test_format_date_drops_time():
    assert format_date(datetime(2024, 1, 10, 23, 59)) == "2024-01-10"


def test_format_date_uses_recorded_wall_clock():
    ist = timezone(timedelta(hours=5, minutes=30))
    assert format_date(datetime(2024, 2, 1, 1, 0, tzinfo=ist)) == "2024-02-01"


def test_statement_rows_numbering_and_dashes():
    rows = list(statement_rows(ENTRIES, start=26))
    assert rows[0] == ("26", "2024-01-15", "Advance", "VCH-D-202401001", "-", "200.00", "300.01")
    assert rows[1] == ("27", "2024-01-10", "Weaver Challan", "WC-1", "500.01", "-", "500.01")


def test_statement_table_has_all_columns():
    table = build_statement_table(ENTRIES, title="Acme Weavers (L1)")
    assert [c.header for c in table.columns] == list(STATEMENT_COLUMNS)
    assert table.row_count == 2
    out = _render(table)
    assert "Acme Weavers (L1)" in out
    assert "VCH-D-202401001" in out


def test_summary_table():
    out = _render(build_summary_table(LedgerSummary(Decimal("500"), Decimal("200"), Decimal("300"))))
    assert "Total Credit" in out and "500.00" in out
    assert "Total Debit" in out and "200.00" in out
    assert "Balance" in out and "300.00" in out


def test_write_statement_csv():
    buf = io.StringIO()
    assert write_statement_csv(ENTRIES, buf) == 2
    rows = list(csv.reader(io.StringIO(buf.getvalue())))
    assert rows[0] == list(STATEMENT_COLUMNS)
    assert rows[1] == ["1", "2024-01-15", "Advance", "VCH-D-202401001", "0.00", "200.00", "300.01"]
    assert rows[2] == ["2", "2024-01-10", "Weaver Challan", "WC-1", "500.01", "0.00", "500.01"]


def test_write_statement_csv_empty():
    buf = io.StringIO()
    assert write_statement_csv([], buf) == 0
    assert buf.getvalue().strip() == ",".join(STATEMENT_COLUMNS)
