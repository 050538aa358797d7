"""Fallback readers for ledger entries written before structured fields existed.

Older entries only carry their facts inside the ``details`` text. These
helpers recover them; the write path never depends on them.
"""

from __future__ import annotations

import re

from src.domain.models.history_event import HistoryEvent

_INSEMINATED_WITH = re.compile(r"Inseminated with (.*)")
_SEMEN_OR_SIRE = re.compile(r"(?:Semen/Sire|Semen|Sire)\s*:\s*([^|\n]+)")
_CALF_TAG = re.compile(r"Tag: ([^)]+)")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def inseminated_with(details: str | None) -> str | None:
    if not details or "Inseminated with" not in details:
        return None
    match = _INSEMINATED_WITH.search(details)
    return _clean(match.group(1)) if match else None


def semen_or_sire(details: str | None) -> str | None:
    if not details:
        return None
    match = _SEMEN_OR_SIRE.search(details)
    return _clean(match.group(1)) if match else None


def calf_tag(details: str | None) -> str | None:
    if not details or "Tag:" not in details:
        return None
    match = _CALF_TAG.search(details)
    return _clean(match.group(1)) if match else None


def event_semen(event: HistoryEvent) -> str | None:
    """Semen for display: the structured field first, then the legacy wording."""
    return event.semen or inseminated_with(event.details) or semen_or_sire(event.details)
