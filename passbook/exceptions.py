"""Domain errors raised by the passbook engine.

Only upstream reads are expected to fail at runtime; normalization and
aggregation are total over well-formed records. Malformed quality
specifications and vouchers without an id are recovered locally and never
surface here.
"""

from __future__ import annotations


class PassbookError(Exception):
    """Base exception for all passbook failures."""


class UpstreamFetchFailure(PassbookError):
    """Raised when one of the ledger's upstream sources cannot be read.

    The computation is abandoned as a whole: no partial ledger is produced.
    Callers may retry the request.
    """

    retryable = True

    def __init__(self, *, source: str, account_id: str, message: str | None = None) -> None:
        self.source = source
        self.account_id = account_id
        super().__init__(message or f"failed to fetch {source} for ledger {account_id!r}")


class MalformedRecordError(PassbookError, ValueError):
    """Raised when a raw challan or voucher record cannot be interpreted.

    Numeric gaps default to zero and never raise; this covers fields the ledger
    cannot do without (occurrence date, voucher type) and negative amounts.
    """

    def __init__(self, message: str, *, kind: str, reference: str | None = None) -> None:
        self.kind = kind
        self.reference = reference
        super().__init__(message)


class AccountNotFound(PassbookError, LookupError):
    """Raised when a ledger account id is unknown to the source."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"ledger not found: {account_id!r}")


__all__ = [
    "AccountNotFound",
    "MalformedRecordError",
    "PassbookError",
    "UpstreamFetchFailure",
]
