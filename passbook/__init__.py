"""Public interface for the ``passbook`` package.

This module exposes the package's API functions, errors and public
models/types as the stable import surface. There is no runtime logic here,
only symbol re-exports.
"""

from .api import build_passbook, compute_passbook, passbook_page
from .exceptions import (
    AccountNotFound,
    MalformedRecordError,
    PassbookError,
    UpstreamFetchFailure,
)
from .ledger import assemble_ledger, closing_balance, summarize
from .models import (
    ChallanRecord,
    CreditBasis,
    LedgerAccount,
    LedgerEntry,
    LedgerSummary,
    Page,
    Passbook,
    TieBreak,
    Transaction,
    VoucherRecord,
    VoucherType,
)
from .normalizers import normalize_challans, normalize_vouchers
from .pagination import paginate
from .repository import LedgerSourceRepository, fetch_sources
from .sequencing import assign_voucher_codes

__all__ = [
    # API
    "build_passbook",
    "compute_passbook",
    "passbook_page",
    # Pipeline stages
    "assemble_ledger",
    "assign_voucher_codes",
    "closing_balance",
    "fetch_sources",
    "normalize_challans",
    "normalize_vouchers",
    "paginate",
    "summarize",
    # Errors
    "AccountNotFound",
    "MalformedRecordError",
    "PassbookError",
    "UpstreamFetchFailure",
    # Models / types
    "ChallanRecord",
    "CreditBasis",
    "LedgerAccount",
    "LedgerEntry",
    "LedgerSourceRepository",
    "LedgerSummary",
    "Page",
    "Passbook",
    "TieBreak",
    "Transaction",
    "VoucherRecord",
    "VoucherType",
]
