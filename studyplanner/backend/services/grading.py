"""
Grading.

Pure functions that turn a percentage score into a letter grade and
grade-point value, and reduce grade records into a credit-weighted GPA.
Nothing here touches the database.

Usage:
    from studyplanner.backend.services.grading import cumulative_gpa, letter_grade

    letter_grade(90)          # "A+"
    grade_point(84.999)       # 3.75
    cumulative_gpa(records)   # GpaSummary(gpa=3.63, credit_total=4.0)
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol


@dataclass(frozen=True)
class GradeBand:
    """A score range starting at ``min_score`` (inclusive)."""

    min_score: float
    letter: str
    points: float


# Highest band first; the first band whose lower bound the score reaches wins.
GRADE_BANDS: tuple[GradeBand, ...] = (
    GradeBand(85, "A+", 4.00),
    GradeBand(75, "A", 3.75),
    GradeBand(70, "B+", 3.50),
    GradeBand(65, "B", 3.00),
    GradeBand(60, "C+", 2.50),
    GradeBand(50, "C", 2.00),
)

FAILING_BAND = GradeBand(-math.inf, "F", 0.00)

GPA_PRECISION = Decimal("0.01")


def grade_band(score: float) -> GradeBand:
    """
    Find the band a score falls in.

    Scores are not range checked: anything below 50 (including negative
    values) is F, anything from 85 up (including above 100) is A+.
    """
    for band in GRADE_BANDS:
        if score >= band.min_score:
            return band
    return FAILING_BAND


def letter_grade(score: float) -> str:
    """Letter grade for a score."""
    return grade_band(score).letter


def grade_point(score: float) -> float:
    """Grade-point value for a score."""
    return grade_band(score).points


class WeightedGrade(Protocol):
    """Anything carrying a grade-point value and a credit weight."""

    gpa: float
    credit_hours: float


@dataclass(frozen=True)
class GpaSummary:
    """Cumulative GPA rounded for presentation, plus the raw credit total."""

    gpa: float
    credit_total: float


def round_half_up(value: float, precision: Decimal = GPA_PRECISION) -> float:
    """Round to ``precision`` with halves going away from zero (3.625 -> 3.63)."""
    return float(Decimal(repr(value)).quantize(precision, rounding=ROUND_HALF_UP))


def cumulative_gpa(records: Iterable[WeightedGrade]) -> GpaSummary:
    """
    Credit-weighted GPA over a set of grade records.

    ``gpa = sum(gpa_i * credit_i) / sum(credit_i)``, or 0 when there are
    no credits. The input is only read. ``math.fsum`` keeps the result
    independent of record order.
    """
    weights: list[float] = []
    weighted_points: list[float] = []
    for record in records:
        weights.append(record.credit_hours)
        weighted_points.append(record.gpa * record.credit_hours)

    credit_total = math.fsum(weights)
    if credit_total <= 0:
        return GpaSummary(gpa=0.0, credit_total=credit_total)

    return GpaSummary(
        gpa=round_half_up(math.fsum(weighted_points) / credit_total),
        credit_total=credit_total,
    )
