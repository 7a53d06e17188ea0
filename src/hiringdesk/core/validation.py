"""Two-stage validation of raw applicant records into pool candidates."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

import pendulum
import structlog
from pydantic import ValidationError

from ..schemas import Candidate, RawCandidate

DEFAULT_DEGREE_START = "2020"
DEFAULT_DEGREE_END = "2024"
DEFAULT_AVAILABILITY = ("full-time",)


@dataclass(slots=True)
class ValidationIssue:
    """A record that could not be turned into a candidate."""

    index: int
    message: str
    raw_record: Any


@dataclass(slots=True)
class ValidationReport:
    candidates: list[Candidate] = field(default_factory=list)
    errors: list[ValidationIssue] = field(default_factory=list)


@dataclass(slots=True)
class ConversionSuccess:
    candidate: Candidate


@dataclass(slots=True)
class ConversionFailure:
    message: str


ConversionResult = ConversionSuccess | ConversionFailure


class CandidateValidator:
    """Convert untyped records into validated candidates, one record at a time.

    Each record goes through a lenient parse, a defaulting step that fills in
    missing required fields, and a strict parse. Failures are collected in the
    report rather than raised, so one bad record never aborts the batch.
    """

    def __init__(
        self,
        *,
        now_provider: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._now_provider = now_provider or pendulum.now
        self._id_factory = id_factory or self._generate_id
        self._logger = structlog.get_logger(__name__)

    def validate(self, raw_records: Sequence[Any]) -> ValidationReport:
        report = ValidationReport()
        seen_ids: set[str] = set()

        for index, raw in enumerate(raw_records):
            result = self.convert(raw, index, seen_ids=seen_ids)
            if isinstance(result, ConversionFailure):
                report.errors.append(
                    ValidationIssue(index=index, message=result.message, raw_record=raw)
                )
                self._logger.warning(
                    "candidate.validation_failed",
                    index=index,
                    message=result.message,
                )
                continue
            seen_ids.add(result.candidate.id)
            report.candidates.append(result.candidate)

        self._logger.info(
            "candidates.validated",
            accepted=len(report.candidates),
            rejected=len(report.errors),
        )
        return report

    def convert(
        self,
        raw: Any,
        index: int,
        *,
        seen_ids: set[str] | None = None,
    ) -> ConversionResult:
        seen = seen_ids if seen_ids is not None else set()
        try:
            lenient = RawCandidate.model_validate(raw)
        except ValidationError as exc:
            return ConversionFailure(message=str(exc))

        if lenient.id and lenient.id in seen:
            return ConversionFailure(message=f"duplicate candidate id: {lenient.id!r}")

        payload = self.apply_defaults(lenient, index, seen_ids=seen)

        try:
            candidate = Candidate.model_validate(payload)
        except ValidationError as exc:
            return ConversionFailure(message=str(exc))
        return ConversionSuccess(candidate=candidate)

    def apply_defaults(
        self,
        raw: RawCandidate,
        index: int,
        *,
        seen_ids: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Return a strict-shaped payload with missing fields filled in."""
        education = raw.education
        degrees = education.degrees if education and education.degrees else []
        availability = [
            kind.strip().lower() for kind in raw.work_availability or [] if kind.strip()
        ]

        return {
            "id": raw.id or self._unique_id(set(seen_ids)),
            "name": raw.name or f"Unknown Applicant {index}",
            "email": raw.email or f"unknown{index}@example.com",
            "phone": raw.phone or "",
            "location": raw.location or "Unknown",
            "submitted_at": _coerce_datetime(raw.submitted_at) or self._now_provider(),
            "work_availability": availability or list(DEFAULT_AVAILABILITY),
            "salary_expectation": dict(raw.annual_salary_expectation or {}),
            "work_experiences": [
                {
                    "company": experience.company or "Unknown Company",
                    "role_name": experience.role_name or "Unknown Role",
                }
                for experience in raw.work_experiences or []
            ],
            "education": {
                "highest_level": (education.highest_level if education else None)
                or "Unknown",
                "degrees": [
                    {
                        "degree": degree.degree or "Unknown Degree",
                        "subject": degree.subject or "Unknown Subject",
                        "school": degree.school or "Unknown School",
                        "gpa": degree.gpa or "Unknown",
                        "start_date": _coerce_datetime(
                            degree.start_date or DEFAULT_DEGREE_START
                        ),
                        "end_date": _coerce_datetime(
                            degree.end_date or DEFAULT_DEGREE_END
                        ),
                        "original_school": degree.original_school
                        or degree.school
                        or "Unknown School",
                        "is_top50": bool(degree.is_top50),
                        "is_top25": degree.is_top25,
                    }
                    for degree in degrees
                ],
            },
            "skills": list(raw.skills or []),
        }

    def _unique_id(self, taken: set[str]) -> str:
        candidate_id = self._id_factory()
        while candidate_id in taken:
            candidate_id = self._id_factory()
        return candidate_id

    def _generate_id(self) -> str:
        timestamp = self._now_provider().timestamp()
        return f"applicant_{int(timestamp)}_{uuid.uuid4().hex[:9]}"


def deduplicate_by_email(
    candidates: Iterable[Candidate],
) -> tuple[list[Candidate], list[Candidate]]:
    """Split candidates into first occurrences and later repeats of an email."""
    seen: set[str] = set()
    unique: list[Candidate] = []
    duplicates: list[Candidate] = []
    for candidate in candidates:
        key = candidate.email.lower()
        if key in seen:
            duplicates.append(candidate)
            continue
        seen.add(key)
        unique.append(candidate)
    return unique, duplicates


def _coerce_datetime(value: str | None) -> Any:
    """Parse a loose date string; unparseable input is returned unchanged."""
    if not value or not value.strip():
        return None
    value = value.strip()
    try:
        if len(value) == 4 and value.isdigit():
            return pendulum.datetime(int(value), 1, 1)
        if len(value) == 7 and value[4] == "-":
            return pendulum.datetime(int(value[:4]), int(value[5:7]), 1)
        parsed = pendulum.parse(value, strict=False)
    except (ValueError, OverflowError, pendulum.parsing.exceptions.ParserError):
        return value
    if isinstance(parsed, datetime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day)
    return value


__all__ = [
    "CandidateValidator",
    "ConversionFailure",
    "ConversionResult",
    "ConversionSuccess",
    "ValidationIssue",
    "ValidationReport",
    "deduplicate_by_email",
]
