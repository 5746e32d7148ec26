"""Upstream source interface and the concurrent two-source fetch.

The engine never reaches for a database client on its own. Callers inject a
:class:`LedgerSourceRepository`; :func:`fetch_sources` issues its two reads
at the same time and only returns once both have succeeded. Any failure is
raised as :class:`~passbook.exceptions.UpstreamFetchFailure` and no partial
result is returned.

Implementations: :class:`passbook.persistence.SqlLedgerRepository` (SQL
store) and :class:`passbook.ingest.JsonSnapshotRepository` (exported file).
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .exceptions import AccountNotFound, UpstreamFetchFailure
from .logging_setup import get_logger
from .models import LedgerAccount, RawRecord

_logger = get_logger("passbook.repository")


class LedgerSourceRepository(Protocol):
    """Read access to the two event sources of a ledger account."""

    def fetch_credit_sources(self, account_id: str) -> Sequence[RawRecord]:
        """Return the weaver challans recorded against ``account_id``."""
        ...

    def fetch_vouchers(self, account_id: str) -> Sequence[RawRecord]:
        """Return the payment vouchers recorded against ``account_id``."""
        ...


@runtime_checkable
class AccountDirectory(Protocol):
    def fetch_account(self, account_id: str) -> LedgerAccount: ...


@dataclass(frozen=True, slots=True)
class LedgerSources:
    """Raw records of both sources for one account, in fetch order."""

    account_id: str
    challans: tuple[RawRecord, ...]
    vouchers: tuple[RawRecord, ...]


def fetch_sources(repository: LedgerSourceRepository, account_id: str) -> LedgerSources:
    """Fetch challans and vouchers concurrently and wait for both."""

    readers: dict[str, Callable[[str], Sequence[RawRecord]]] = {
        "challans": repository.fetch_credit_sources,
        "vouchers": repository.fetch_vouchers,
    }
    results: dict[str, tuple[RawRecord, ...]] = {}
    t0 = time.perf_counter()
    with ThreadPoolExecutor(max_workers=len(readers), thread_name_prefix="passbook-fetch") as ex:
        fut_to_source: dict[Future[Sequence[RawRecord]], str] = {
            ex.submit(reader, account_id): source for source, reader in readers.items()
        }
        for fut in as_completed(fut_to_source):
            source = fut_to_source[fut]
            try:
                results[source] = tuple(fut.result())
            except UpstreamFetchFailure:
                raise
            except Exception as e:
                _logger.error(
                    "fetch_sources:failed account_id=%s source=%s error=%s",
                    account_id,
                    source,
                    e.__class__.__name__,
                )
                raise UpstreamFetchFailure(
                    source=source,
                    account_id=account_id,
                    message=f"failed to fetch {source} for ledger {account_id!r}: {e}",
                ) from e

    _logger.debug(
        "fetch_sources:done account_id=%s challans=%d vouchers=%d latency_ms=%.2f",
        account_id,
        len(results["challans"]),
        len(results["vouchers"]),
        (time.perf_counter() - t0) * 1000.0,
    )
    return LedgerSources(
        account_id=account_id,
        challans=results["challans"],
        vouchers=results["vouchers"],
    )


def fetch_account(repository: object, account_id: str) -> LedgerAccount | None:
    """Look up the account when the repository can; ``None`` otherwise.

    :class:`~passbook.exceptions.AccountNotFound` propagates; any other error
    is reported as an upstream failure of the ``account`` source.
    """

    if not isinstance(repository, AccountDirectory):
        return None
    try:
        return repository.fetch_account(account_id)
    except (AccountNotFound, UpstreamFetchFailure):
        raise
    except Exception as e:
        raise UpstreamFetchFailure(
            source="account",
            account_id=account_id,
            message=f"failed to fetch ledger {account_id!r}: {e}",
        ) from e


__all__ = [
    "AccountDirectory",
    "LedgerSourceRepository",
    "LedgerSources",
    "fetch_account",
    "fetch_sources",
]
