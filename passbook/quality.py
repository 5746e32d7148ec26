"""Parsing for the variable-shape quality specification attached to a challan.

The store keeps ``quality_details`` as loosely typed JSON: usually a list of
``{"quality_name": ..., "rate": ..., "grey_mtr": ...}`` objects, but rows in
the wild hold ``null``, a bare object, a JSON-encoded string, or elements
whose ``rate`` is missing or not numeric. :func:`parse_quality_spec` turns any
of those into a typed list; nothing here raises.

Only the first element's rate prices a challan (:func:`resolve_rate`). A bare
object is not treated as a one-element list: the rate for such rows has
always resolved to zero and previously printed statements depend on it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .models import ZERO, to_decimal


@dataclass(frozen=True, slots=True)
class QualityDetail:
    """One parsed quality entry; ``rate`` is ``None`` when not a usable number."""

    quality_name: str | None = None
    rate: Decimal | None = None


def _decode(raw: Any) -> Any:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return None
        try:
            return json.loads(s, parse_float=Decimal)
        except json.JSONDecodeError:
            return None
    return raw


def _parse_rate(raw: Any) -> Decimal | None:
    rate = to_decimal(raw)
    if rate is None or rate < 0:
        return None
    return rate


def _parse_item(item: Any) -> QualityDetail:
    if not isinstance(item, Mapping):
        return QualityDetail()
    name = item.get("quality_name", item.get("qualityName"))
    name_s = str(name).strip() if name is not None else ""
    return QualityDetail(quality_name=name_s or None, rate=_parse_rate(item.get("rate")))


def parse_quality_spec(raw: Any) -> list[QualityDetail]:
    """Return the typed entries of a quality specification, or ``[]``.

    - ``None``, empty or undecodable strings, and non-list values -> ``[]``.
    - JSON strings are decoded first (floats kept as ``Decimal``).
    - Non-object list elements keep their position as an empty entry.
    """

    decoded = _decode(raw)
    if not isinstance(decoded, (list, tuple)):
        return []
    return [_parse_item(item) for item in decoded]


def resolve_rate(details: Sequence[QualityDetail]) -> Decimal:
    """Rate of the first quality entry, or zero when absent or not numeric."""

    if not details:
        return ZERO
    rate = details[0].rate
    return rate if rate is not None else ZERO


def has_usable_rate(details: Sequence[QualityDetail]) -> bool:
    return bool(details) and details[0].rate is not None


__all__ = ["QualityDetail", "has_usable_rate", "parse_quality_spec", "resolve_rate"]
