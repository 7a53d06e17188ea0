"""Salary expectation evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import Candidate
from ..normalization import parse_salary_amount


@dataclass
class SalaryConfig:
    """Score bands keyed by exclusive upper bound of the expected salary."""

    bands: tuple[tuple[int, int], ...] = (
        (50_000, 100),
        (80_000, 80),
        (120_000, 60),
        (150_000, 40),
    )
    above_band_points: int = 20
    missing_points: int = 50


class SalaryEvaluator:
    """Band the candidate's full-time salary expectation.

    A missing figure (absent, unparseable or zero) scores neutrally rather
    than as a penalty.
    """

    method = "salary"

    def __init__(self, *, config: SalaryConfig | None = None) -> None:
        self._config = config or SalaryConfig()

    def evaluate(self, candidate: Candidate, context: dict[str, Any]) -> dict[str, Any]:
        amount = parse_salary_amount(candidate.full_time_salary)

        if not amount:
            return self._build_response(
                score=self._config.missing_points,
                amount=None,
                status="insufficient_data",
            )

        for upper_bound, points in self._config.bands:
            if amount < upper_bound:
                return self._build_response(
                    score=points,
                    amount=amount,
                    status="banded",
                    band_upper_bound=upper_bound,
                )

        return self._build_response(
            score=self._config.above_band_points,
            amount=amount,
            status="above_bands",
        )

    def _build_response(
        self,
        *,
        score: int,
        amount: int | None,
        status: str,
        band_upper_bound: int | None = None,
    ) -> dict[str, Any]:
        return {
            "method": self.method,
            "scores": {"salary": score},
            "metadata": {
                "full_time_amount": amount,
                "band_upper_bound": band_upper_bound,
                "status": status,
            },
        }
