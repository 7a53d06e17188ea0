"""Session state container with reducer-style transitions.

``HiringState`` is immutable. ``HiringReducer.reduce`` maps a state and an
action to the next state; ``HiringSession`` wraps the reducer behind a small
command API, which is the only way reviewer state changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

import pendulum
import structlog

from .core import ledger
from .core.diversity import DiversityAnalyzer
from .core.filtering import FilterEngine, FilterOptions, extract_filter_options
from .core.normalization import normalize_salaries, normalize_skills
from .core.scoring import ScoringEngine
from .core.validation import CandidateValidator, ValidationReport
from .schemas import (
    BiasAnalysis,
    Candidate,
    CandidateScore,
    DiversityMetrics,
    FilterState,
    LedgerAction,
    SortConfig,
    TeamComposition,
)
from .schemas.review import DiversityFactor, Priority


@dataclass(frozen=True)
class HiringState:
    pool: tuple[Candidate, ...] = ()
    by_id: Mapping[str, Candidate] = field(default_factory=ledger.empty_ledger)
    scores: Mapping[str, CandidateScore] = field(default_factory=ledger.empty_ledger)
    shortlisted: ledger.ShortlistLedger = field(default_factory=ledger.empty_ledger)
    selected: ledger.SelectionLedger = field(default_factory=ledger.empty_ledger)
    filters: FilterState = field(default_factory=FilterState)
    sorting: SortConfig = field(default_factory=SortConfig)
    visible: tuple[Candidate, ...] = ()
    diversity: DiversityMetrics = field(default_factory=DiversityMetrics)
    load_error: str | None = None
    history: tuple[LedgerAction, ...] = ()


@dataclass(frozen=True)
class LoadPool:
    candidates: tuple[Candidate, ...]


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class UpdateFilters:
    updates: Mapping[str, Any]


@dataclass(frozen=True)
class UpdateSorting:
    sorting: SortConfig


@dataclass(frozen=True)
class Shortlist:
    candidate_id: str
    reason: str = ""
    priority: Priority = "medium"


@dataclass(frozen=True)
class Unshortlist:
    candidate_id: str


@dataclass(frozen=True)
class Select:
    candidate_id: str
    position: str = ""
    reason: str = ""
    diversity_factor: DiversityFactor | None = None


@dataclass(frozen=True)
class Unselect:
    candidate_id: str


@dataclass(frozen=True)
class ClearSelection:
    pass


Action = (
    LoadPool
    | LoadFailed
    | UpdateFilters
    | UpdateSorting
    | Shortlist
    | Unshortlist
    | Select
    | Unselect
    | ClearSelection
)


@dataclass(frozen=True)
class Transition:
    state: HiringState
    error: str | None = None

    @property
    def accepted(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CommandResult:
    accepted: bool
    error: str | None = None


class HiringReducer:
    """Pure state transitions for a review session.

    A returned state is always consistent: a new pool is scored before it is
    returned, and the visible list and its diversity metrics are rebuilt
    whenever filters, sorting, the pool or a ledger changes. Filter and sort
    changes reuse the existing score map.
    """

    def __init__(
        self,
        *,
        scoring_engine: ScoringEngine,
        filter_engine: FilterEngine,
        analyzer: DiversityAnalyzer,
        team_size: int | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._scoring = scoring_engine
        self._filtering = filter_engine
        self._analyzer = analyzer
        self._team_size = team_size or ledger.TEAM_SIZE
        self._now_provider = now_provider or pendulum.now
        self._handlers: dict[type, Callable[[HiringState, Any], Transition]] = {
            LoadPool: self._load_pool,
            LoadFailed: self._load_failed,
            UpdateFilters: self._update_filters,
            UpdateSorting: self._update_sorting,
            Shortlist: self._shortlist,
            Unshortlist: self._unshortlist,
            Select: self._select,
            Unselect: self._unselect,
            ClearSelection: self._clear_selection,
        }

    @property
    def team_size(self) -> int:
        return self._team_size

    @property
    def analyzer(self) -> DiversityAnalyzer:
        return self._analyzer

    def reduce(self, state: HiringState, action: Action) -> Transition:
        try:
            handler = self._handlers[type(action)]
        except KeyError as exc:
            raise TypeError(f"Unsupported action: {type(action).__name__}") from exc
        return handler(state, action)

    def _load_pool(self, state: HiringState, action: LoadPool) -> Transition:
        pool = tuple(action.candidates)
        by_id = MappingProxyType({candidate.id: candidate for candidate in pool})
        scores = MappingProxyType(self._scoring.score_pool(pool))
        # Decisions about candidates that left the pool are dropped with them.
        shortlisted = MappingProxyType(
            {key: entry for key, entry in state.shortlisted.items() if key in by_id}
        )
        selected = MappingProxyType(
            {key: entry for key, entry in state.selected.items() if key in by_id}
        )
        loaded = replace(
            state,
            pool=pool,
            by_id=by_id,
            scores=scores,
            shortlisted=shortlisted,
            selected=selected,
            load_error=None,
        )
        return Transition(self._refresh(loaded))

    def _load_failed(self, state: HiringState, action: LoadFailed) -> Transition:
        return Transition(HiringState(load_error=action.message))

    def _update_filters(self, state: HiringState, action: UpdateFilters) -> Transition:
        filters = state.filters.merge(dict(action.updates))
        return Transition(self._refresh(replace(state, filters=filters)))

    def _update_sorting(self, state: HiringState, action: UpdateSorting) -> Transition:
        return Transition(self._refresh(replace(state, sorting=action.sorting)))

    def _shortlist(self, state: HiringState, action: Shortlist) -> Transition:
        if action.candidate_id not in state.by_id:
            return Transition(state, error="unknown_candidate")
        now = self._now_provider()
        shortlisted = ledger.shortlist(
            state.shortlisted,
            action.candidate_id,
            reason=action.reason,
            priority=action.priority,
            at=now,
        )
        return Transition(
            self._refresh(
                replace(
                    state,
                    shortlisted=shortlisted,
                    history=self._record(state, action.candidate_id, "shortlist", now),
                )
            )
        )

    def _unshortlist(self, state: HiringState, action: Unshortlist) -> Transition:
        if action.candidate_id not in state.shortlisted:
            return Transition(state)
        now = self._now_provider()
        return Transition(
            self._refresh(
                replace(
                    state,
                    shortlisted=ledger.unshortlist(state.shortlisted, action.candidate_id),
                    history=self._record(state, action.candidate_id, "unshortlist", now),
                )
            )
        )

    def _select(self, state: HiringState, action: Select) -> Transition:
        if action.candidate_id not in state.by_id:
            return Transition(state, error="unknown_candidate")
        now = self._now_provider()
        update = ledger.select(
            state.selected,
            action.candidate_id,
            position=action.position,
            reason=action.reason,
            at=now,
            diversity_factor=action.diversity_factor,
            capacity=self._team_size,
        )
        if not update.accepted:
            return Transition(state, error=update.error)
        return Transition(
            self._refresh(
                replace(
                    state,
                    selected=update.ledger,
                    history=self._record(state, action.candidate_id, "select", now),
                )
            )
        )

    def _unselect(self, state: HiringState, action: Unselect) -> Transition:
        if action.candidate_id not in state.selected:
            return Transition(state)
        now = self._now_provider()
        return Transition(
            self._refresh(
                replace(
                    state,
                    selected=ledger.unselect(state.selected, action.candidate_id),
                    history=self._record(state, action.candidate_id, "unselect", now),
                )
            )
        )

    def _clear_selection(self, state: HiringState, action: ClearSelection) -> Transition:
        now = self._now_provider()
        return Transition(
            self._refresh(
                replace(
                    state,
                    selected=ledger.clear_selection(state.selected),
                    history=self._record(state, None, "clear_selection", now),
                )
            )
        )

    def _refresh(self, state: HiringState) -> HiringState:
        visible = tuple(
            self._filtering.apply(
                state.pool,
                state.scores,
                state.filters,
                state.sorting,
                state.shortlisted,
                state.selected,
            )
        )
        return replace(state, visible=visible, diversity=self._analyzer.metrics(visible))

    @staticmethod
    def _record(
        state: HiringState,
        candidate_id: str | None,
        action: str,
        at: datetime,
    ) -> tuple[LedgerAction, ...]:
        entry = LedgerAction(candidate_id=candidate_id, action=action, timestamp=at)
        return (*state.history, entry)


class HiringSession:
    """Command API over a single review session."""

    def __init__(
        self,
        *,
        reducer: HiringReducer,
        validator: CandidateValidator | None = None,
        state: HiringState | None = None,
    ) -> None:
        self._reducer = reducer
        self._validator = validator or CandidateValidator()
        self._state = state or HiringState()
        self._logger = structlog.get_logger(__name__)

    @property
    def state(self) -> HiringState:
        return self._state

    @property
    def team_size(self) -> int:
        return self._reducer.team_size

    def dispatch(self, action: Action) -> Transition:
        transition = self._reducer.reduce(self._state, action)
        self._state = transition.state
        return transition

    # Commands

    def load_records(self, records: Sequence[Any]) -> ValidationReport:
        """Validate, normalize and load a raw record batch as the new pool."""
        report = self._validator.validate(records)
        candidates = normalize_salaries(normalize_skills(report.candidates))
        self.load_candidates(candidates)
        return report

    def load_candidates(self, candidates: Sequence[Candidate]) -> None:
        self.dispatch(LoadPool(candidates=tuple(candidates)))
        self._logger.info(
            "pool.loaded",
            candidates=len(self._state.pool),
            visible=len(self._state.visible),
        )

    def fail_load(self, message: str) -> None:
        self.dispatch(LoadFailed(message=message))
        self._logger.error("pool.load_failed", message=message)

    def update_filters(self, updates: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        merged = {**(updates or {}), **kwargs}
        unknown = sorted(set(merged) - set(FilterState.model_fields))
        if unknown:
            self._logger.warning("filters.unknown_keys", keys=unknown)
        self.dispatch(UpdateFilters(updates=merged))

    def update_sorting(self, sorting: SortConfig | Mapping[str, Any]) -> None:
        if not isinstance(sorting, SortConfig):
            sorting = SortConfig.model_validate(dict(sorting))
        self.dispatch(UpdateSorting(sorting=sorting))

    def shortlist(
        self,
        candidate_id: str,
        reason: str = "",
        priority: Priority = "medium",
    ) -> CommandResult:
        return self._command(
            Shortlist(candidate_id=candidate_id, reason=reason, priority=priority),
            "shortlist",
        )

    def unshortlist(self, candidate_id: str) -> CommandResult:
        return self._command(Unshortlist(candidate_id=candidate_id), "unshortlist")

    def select(
        self,
        candidate_id: str,
        position: str = "",
        reason: str = "",
        diversity_factor: DiversityFactor | None = None,
    ) -> CommandResult:
        return self._command(
            Select(
                candidate_id=candidate_id,
                position=position,
                reason=reason,
                diversity_factor=diversity_factor,
            ),
            "selection",
        )

    def unselect(self, candidate_id: str) -> CommandResult:
        return self._command(Unselect(candidate_id=candidate_id), "unselect")

    def clear_selection(self) -> CommandResult:
        return self._command(ClearSelection(), "selection_clear")

    # Readers

    def get_candidate(self, candidate_id: str) -> Candidate | None:
        return self._state.by_id.get(candidate_id)

    def get_score(self, candidate_id: str) -> CandidateScore | None:
        return self._state.scores.get(candidate_id)

    def is_shortlisted(self, candidate_id: str) -> bool:
        return candidate_id in self._state.shortlisted

    def is_selected(self, candidate_id: str) -> bool:
        return candidate_id in self._state.selected

    def shortlist_count(self) -> int:
        return len(self._state.shortlisted)

    def selected_count(self) -> int:
        return len(self._state.selected)

    def selected_candidates(self) -> list[Candidate]:
        return [c for c in self._state.pool if c.id in self._state.selected]

    def shortlisted_candidates(self) -> list[Candidate]:
        return [c for c in self._state.pool if c.id in self._state.shortlisted]

    def filter_options(self) -> FilterOptions:
        return extract_filter_options(self._state.pool)

    def bias_analysis(self, candidates: Sequence[Candidate] | None = None) -> BiasAnalysis:
        target = self._state.visible if candidates is None else candidates
        return self._reducer.analyzer.analyze_bias(target, self._state.scores)

    def team_composition(self) -> TeamComposition:
        return self._reducer.analyzer.team_composition(
            self.selected_candidates(), self.team_size
        )

    def history_for(self, candidate_id: str) -> list[LedgerAction]:
        return [item for item in self._state.history if item.candidate_id == candidate_id]

    def _command(self, action: Action, event: str) -> CommandResult:
        transition = self.dispatch(action)
        candidate_id = getattr(action, "candidate_id", None)
        if transition.accepted:
            self._logger.info(f"{event}.applied", candidate_id=candidate_id)
            return CommandResult(accepted=True)
        self._logger.info(
            f"{event}.rejected",
            candidate_id=candidate_id,
            error=transition.error,
        )
        return CommandResult(accepted=False, error=transition.error)


__all__ = [
    "Action",
    "ClearSelection",
    "CommandResult",
    "HiringReducer",
    "HiringSession",
    "HiringState",
    "LoadFailed",
    "LoadPool",
    "Select",
    "Shortlist",
    "Transition",
    "UpdateFilters",
    "UpdateSorting",
    "Unselect",
    "Unshortlist",
]
