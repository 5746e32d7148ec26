# ruff: noqa: E501
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from passbook import compute_passbook, passbook_page
from passbook.models import LedgerEntry
from passbook.pagination import DEFAULT_PAGE_SIZE, paginate, total_pages_for


def _entries(n: int) -> list[LedgerEntry]:
    start = datetime(2024, 1, 1)
    return [
        LedgerEntry(
            date=start + timedelta(days=n - i),
            detail="Weaver Challan",
            remark=f"WC-{n - i}",
            credit=Decimal("1"),
            debit=Decimal("0"),
            balance=Decimal(n - i),
        )
        for i in range(n)
    ]


def test_default_page_size():
    page = paginate(_entries(30))
    assert DEFAULT_PAGE_SIZE == 25
    assert len(page.items) == 25
    assert page.total_pages == 2
    assert page.has_next


def test_last_page_is_partial():
    entries = _entries(30)
    page = paginate(entries, page=2, page_size=25)
    assert page.items == tuple(entries[25:])
    assert page.first_index == 26
    assert not page.has_next


def test_page_past_end_is_empty():
    page = paginate(_entries(3), page=5, page_size=2)
    assert page.items == ()
    assert page.total_items == 3
    assert page.total_pages == 2


def test_empty_ledger_has_zero_pages():
    page = paginate([], page=1)
    assert page.items == ()
    assert page.total_pages == 0
    assert not page.has_next


@pytest.mark.parametrize("page,page_size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_invalid_arguments(page, page_size):
    with pytest.raises(ValueError):
        paginate(_entries(3), page=page, page_size=page_size)


@pytest.mark.parametrize("total,size,expected", [(0, 25, 0), (1, 25, 1), (25, 25, 1), (26, 25, 2)])
def test_total_pages_for(total, size, expected):
    assert total_pages_for(total, page_size=size) == expected


def test_passbook_page_keeps_most_recent_first():
    challans = [
        {"date": f"2024-01-{d:02d}", "reference": f"WC-{d}", "quantity": 1, "quality_spec": [{"rate": 1}]}
        for d in range(1, 8)
    ]
    pb = compute_passbook(challans, [])
    first = passbook_page(pb, page=1, page_size=3)
    assert [e.remark for e in first.items] == ["WC-7", "WC-6", "WC-5"]
    third = passbook_page(pb, page=3, page_size=3)
    assert [e.remark for e in third.items] == ["WC-1"]
