"""Public API for building a ledger passbook.

Pipeline, recomputed on every call:

1. fetch challans and vouchers (concurrently, via an injected repository);
2. assign voucher codes (:mod:`passbook.sequencing`);
3. normalize both streams (:mod:`passbook.normalizers`);
4. assemble the running-balance ledger and its summary (:mod:`passbook.ledger`).

Nothing is cached between calls and inputs are never mutated, so concurrent
callers need no coordination.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ledger import assemble_ledger, summarize
from .logging_setup import get_logger
from .models import (
    ChallanRecord,
    CreditBasis,
    LedgerAccount,
    Page,
    Passbook,
    RawRecord,
    TieBreak,
    VoucherRecord,
)
from .normalizers import coerce_challan, coerce_voucher, normalize_challans, normalize_vouchers
from .pagination import DEFAULT_PAGE_SIZE, paginate
from .repository import LedgerSourceRepository, fetch_account, fetch_sources
from .sequencing import assign_voucher_codes

_logger = get_logger("passbook.api")


def compute_passbook(
    challans: Iterable[RawRecord | ChallanRecord],
    vouchers: Iterable[RawRecord | VoucherRecord],
    *,
    account_id: str = "",
    basis: CreditBasis = CreditBasis.QUALITY_RATE,
    tie_break: TieBreak = TieBreak.INPUT_ORDER,
    account: LedgerAccount | None = None,
) -> Passbook:
    """Build a passbook from explicit record lists (no repository involved)."""

    challan_records = [coerce_challan(c) for c in challans]
    voucher_records = [coerce_voucher(v) for v in vouchers]

    codes = assign_voucher_codes(voucher_records, tie_break=tie_break)
    challan_txns = normalize_challans(challan_records, basis=basis)
    voucher_txns = normalize_vouchers(voucher_records, codes)

    entries = assemble_ledger(challan_txns, voucher_txns)
    summary = summarize(challan_txns, voucher_txns)
    return Passbook(
        account_id=account_id,
        entries=tuple(entries),
        summary=summary,
        account=account,
    )


def build_passbook(
    repository: LedgerSourceRepository,
    account_id: str,
    *,
    basis: CreditBasis = CreditBasis.QUALITY_RATE,
    tie_break: TieBreak = TieBreak.INPUT_ORDER,
    include_account: bool = False,
) -> Passbook:
    """Fetch both sources for ``account_id`` and build its passbook.

    Raises :class:`~passbook.exceptions.UpstreamFetchFailure` when either
    source cannot be read; no partial ledger is produced. With
    ``include_account`` the account is looked up too (repositories that cannot
    resolve accounts leave it as ``None``).
    """

    sources = fetch_sources(repository, account_id)
    account = fetch_account(repository, account_id) if include_account else None
    passbook = compute_passbook(
        sources.challans,
        sources.vouchers,
        account_id=account_id,
        basis=basis,
        tie_break=tie_break,
        account=account,
    )
    _logger.info(
        "build_passbook:done account_id=%s challans=%d vouchers=%d balance=%s",
        account_id,
        len(sources.challans),
        len(sources.vouchers),
        passbook.summary.balance,
    )
    return passbook


def passbook_page(
    passbook: Passbook, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> Page:
    """Page ``page`` of the passbook's entries (most recent first)."""

    return paginate(passbook.entries, page=page, page_size=page_size)


__all__ = ["build_passbook", "compute_passbook", "passbook_page"]
