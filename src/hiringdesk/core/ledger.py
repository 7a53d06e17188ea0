"""Shortlist and selection ledgers.

Ledgers are read-only mappings keyed by candidate id. Every operation returns
a new mapping and leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Literal, Mapping

from ..schemas import SelectionEntry, ShortlistEntry
from ..schemas.review import DiversityFactor, Priority

TEAM_SIZE = 5

LedgerError = Literal["team_full", "unknown_candidate"]

ShortlistLedger = Mapping[str, ShortlistEntry]
SelectionLedger = Mapping[str, SelectionEntry]


@dataclass(frozen=True, slots=True)
class LedgerUpdate:
    """Outcome of a selection attempt; ``ledger`` is unchanged when rejected."""

    ledger: SelectionLedger
    accepted: bool
    error: LedgerError | None = None


def empty_ledger() -> Mapping:
    return MappingProxyType({})


def shortlist(
    ledger: ShortlistLedger,
    candidate_id: str,
    *,
    reason: str,
    priority: Priority,
    at: datetime,
) -> ShortlistLedger:
    updated = dict(ledger)
    updated[candidate_id] = ShortlistEntry(
        candidate_id=candidate_id,
        shortlisted_at=at,
        reason=reason,
        priority=priority,
    )
    return MappingProxyType(updated)


def unshortlist(ledger: ShortlistLedger, candidate_id: str) -> ShortlistLedger:
    if candidate_id not in ledger:
        return ledger
    updated = dict(ledger)
    del updated[candidate_id]
    return MappingProxyType(updated)


def select(
    ledger: SelectionLedger,
    candidate_id: str,
    *,
    position: str,
    reason: str,
    at: datetime,
    diversity_factor: DiversityFactor | None = None,
    capacity: int = TEAM_SIZE,
) -> LedgerUpdate:
    """Add or replace a selection, refusing new ids once the team is full."""
    if candidate_id not in ledger and len(ledger) >= capacity:
        return LedgerUpdate(ledger=ledger, accepted=False, error="team_full")

    updated = dict(ledger)
    updated[candidate_id] = SelectionEntry(
        candidate_id=candidate_id,
        selected_at=at,
        position=position,
        reason=reason,
        diversity_factor=diversity_factor,
    )
    return LedgerUpdate(ledger=MappingProxyType(updated), accepted=True)


def unselect(ledger: SelectionLedger, candidate_id: str) -> SelectionLedger:
    if candidate_id not in ledger:
        return ledger
    updated = dict(ledger)
    del updated[candidate_id]
    return MappingProxyType(updated)


def clear_selection(ledger: SelectionLedger) -> SelectionLedger:
    return empty_ledger()


__all__ = [
    "LedgerError",
    "LedgerUpdate",
    "SelectionLedger",
    "ShortlistLedger",
    "TEAM_SIZE",
    "clear_selection",
    "empty_ledger",
    "select",
    "shortlist",
    "unselect",
    "unshortlist",
]
