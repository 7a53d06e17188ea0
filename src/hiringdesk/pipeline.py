"""Review pipeline assembly and execution."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Callable, Mapping

import pendulum
import structlog

from . import __version__
from .core.score_analysis import ScoreAnalyzer
from .core.skills import SkillCategorizer
from .core.validation import ValidationReport
from .report import export_candidates_csv, generate_hiring_report
from .session import HiringSession


class PoolLoadError(ValueError):
    """Raised when the source document as a whole cannot be used."""


class PoolLoader:
    """Load the raw applicant array from a JSON file."""

    def load(self, path: Path) -> list[Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PoolLoadError(f"Cannot read candidate source {path}: {exc}") from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PoolLoadError(f"Invalid candidate JSON: {exc}") from exc
        if not isinstance(data, list):
            raise PoolLoadError(
                f"Candidate source must be a JSON array, got {type(data).__name__}"
            )
        return data


class OutputWriter:
    """Persist review outputs."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )

    def write_csv(self, path: Path, rows: list[list[str]]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            csv.writer(handle, quoting=csv.QUOTE_ALL).writerows(rows)


class ReviewPipeline:
    """Load a source file into a fresh session and report on it."""

    def __init__(
        self,
        *,
        session_factory: Callable[[], HiringSession],
        loader: PoolLoader | None = None,
        writer: OutputWriter | None = None,
        score_analyzer: ScoreAnalyzer | None = None,
        skill_categorizer: SkillCategorizer | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._score_analyzer = score_analyzer
        self._skill_categorizer = skill_categorizer
        self._loader = loader or PoolLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def load(self, source_path: Path) -> tuple[HiringSession, ValidationReport | None]:
        """Return a session over ``source_path``.

        A source that is not a JSON array leaves the session empty with its
        ``load_error`` set and no validation report.
        """
        session = self._session_factory()
        try:
            records = self._loader.load(source_path)
        except PoolLoadError as exc:
            session.fail_load(str(exc))
            return session, None

        report = session.load_records(records)
        if report.errors:
            self._logger.warning(
                "candidates.partial_load",
                errors=[{"index": e.index, "message": e.message} for e in report.errors],
            )
        return session, report

    def run(
        self,
        *,
        source_path: Path,
        output_path: Path,
        csv_path: Path | None = None,
        filters: Mapping[str, Any] | None = None,
        top: int = 10,
    ) -> dict[str, Any]:
        session, report = self.load(source_path)
        if session.state.load_error:
            raise PoolLoadError(session.state.load_error)

        if filters:
            session.update_filters(filters)

        payload = generate_hiring_report(
            session,
            top=top,
            score_analyzer=self._score_analyzer,
            categorizer=self._skill_categorizer,
        )
        payload["metadata"] = {
            "source": str(source_path),
            "candidate_count": len(session.state.pool),
            "visible_count": len(session.state.visible),
            "errors": [
                {"index": issue.index, "message": issue.message}
                for issue in (report.errors if report else [])
            ],
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, payload)

        if csv_path is not None:
            self._writer.write_csv(
                csv_path,
                export_candidates_csv(
                    session.state.visible,
                    session.state.scores,
                    session.state.shortlisted,
                    session.state.selected,
                ),
            )

        self._logger.info(
            "review.completed",
            candidates=len(session.state.pool),
            visible=len(session.state.visible),
            output=str(output_path),
        )
        return payload


def _json_default(value):  # type: ignore[override]
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
