"""Runtime settings read from the environment.

Variables (the CLI loads a local ``.env`` first without overriding what is
already set):

- ``DATABASE_URL``: SQLAlchemy URL of the store holding challans and vouchers.
- ``PASSBOOK_PAGE_SIZE``: default page size for statement display (25).
- ``PASSBOOK_CREDIT_BASIS``: ``quality_rate`` (default) or ``vendor_invoice``.
- ``PASSBOOK_VOUCHER_TIE_BREAK``: ``input_order`` (default) or ``id``.
- ``PASSBOOK_LOG_LEVEL``: read by :mod:`passbook.logging_setup`.

Invalid values fall back to the defaults with a warning rather than failing
at startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from .logging_setup import get_logger
from .models import CreditBasis, TieBreak
from .pagination import DEFAULT_PAGE_SIZE

_logger = get_logger("passbook.config")


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    credit_basis: CreditBasis = CreditBasis.QUALITY_RATE
    tie_break: TieBreak = TieBreak.INPUT_ORDER


def _env_page_size(raw: str | None) -> int:
    if not raw:
        return DEFAULT_PAGE_SIZE
    try:
        size = int(raw)
        if size <= 0:
            raise ValueError
    except ValueError:
        _logger.warning("config:invalid_page_size value=%r default=%d", raw, DEFAULT_PAGE_SIZE)
        return DEFAULT_PAGE_SIZE
    return size


def _env_choice[E: StrEnum](name: str, raw: str | None, enum: type[E], default: E) -> E:
    if not raw or not raw.strip():
        return default
    try:
        return enum(raw.strip().lower())
    except ValueError:
        _logger.warning("config:invalid_choice name=%s value=%r default=%s", name, raw, default)
        return default


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``env`` (``os.environ`` by default)."""

    env = os.environ if env is None else env
    database_url = (env.get("DATABASE_URL") or "").strip() or None
    return Settings(
        database_url=database_url,
        page_size=_env_page_size(env.get("PASSBOOK_PAGE_SIZE")),
        credit_basis=_env_choice(
            "PASSBOOK_CREDIT_BASIS",
            env.get("PASSBOOK_CREDIT_BASIS"),
            CreditBasis,
            CreditBasis.QUALITY_RATE,
        ),
        tie_break=_env_choice(
            "PASSBOOK_VOUCHER_TIE_BREAK",
            env.get("PASSBOOK_VOUCHER_TIE_BREAK"),
            TieBreak,
            TieBreak.INPUT_ORDER,
        ),
    )


__all__ = ["Settings", "load_settings"]
