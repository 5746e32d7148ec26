"""db: read-side mapping of the ledger store (SQLAlchemy).

Public exports
--------------
- ``Base`` and ``metadata`` (test fixtures create the tables from it)
- ORM models in ``passbook.db.models``
- Engine/session helpers in ``passbook.db.client``
"""

from __future__ import annotations

from .client import dispose_engines, get_engine, get_session, session_scope
from .models import Base, Ledger, PaymentVoucher, WeaverChallan

metadata = Base.metadata

__all__ = [
    "Base",
    "Ledger",
    "PaymentVoucher",
    "WeaverChallan",
    "dispose_engines",
    "get_engine",
    "get_session",
    "metadata",
    "session_scope",
]
