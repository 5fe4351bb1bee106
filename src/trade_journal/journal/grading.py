"""Monthly performance grade.

A month is scored out of 100 from three weighted components and the
score is mapped to a letter grade:

    Component            Max points
    ─────────────────────────────────
    Monthly P&L%             40
    Profit factor            30
    Expectancy %             30

A month that lost money in currency terms drops one letter (A->B,
B->C, C->D).  D and F are left as they are.

Usage::

    result = grade_month(
        monthly_pnl_percent=120.0,
        profit_factor=1.6,
        expectancy_percent=6.0,
        total_pnl=50.0,
    )
    print(result.grade)   # Grade.B
    print(result.score)   # 65
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Grade


# (minimum value, points), first match wins
_PNL_PERCENT_TIERS: list[tuple[float, int]] = [
    (300.0, 40),
    (200.0, 35),
    (150.0, 30),
    (100.0, 25),
    (50.0, 15),
    (0.0, 8),
]

_PROFIT_FACTOR_TIERS: list[tuple[float, int]] = [
    (2.5, 30),
    (2.0, 26),
    (1.5, 22),
    (1.2, 16),
    (1.0, 10),
    (0.8, 5),
]

_EXPECTANCY_TIERS: list[tuple[float, int]] = [
    (12.0, 30),
    (8.0, 24),
    (5.0, 18),
    (3.0, 14),
    (0.0, 8),
]
# Small negative expectancy still earns something (strictly above -5).
_EXPECTANCY_FLOOR = (-5.0, 4)

# Minimum score for each grade
_GRADE_THRESHOLDS: list[tuple[float, Grade]] = [
    (85.0, Grade.A),
    (65.0, Grade.B),
    (50.0, Grade.C),
    (35.0, Grade.D),
]

_DOWNGRADE: dict[Grade, Grade] = {
    Grade.A: Grade.B,
    Grade.B: Grade.C,
    Grade.C: Grade.D,
}


@dataclass(frozen=True)
class GradeResult:
    grade: Grade
    score: int
    downgraded: bool = False


def _tier_points(value: float, tiers: list[tuple[float, int]]) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def pnl_percent_points(monthly_pnl_percent: float) -> int:
    return _tier_points(monthly_pnl_percent, _PNL_PERCENT_TIERS)


def profit_factor_points(profit_factor: float) -> int:
    return _tier_points(profit_factor, _PROFIT_FACTOR_TIERS)


def expectancy_points(expectancy_percent: float) -> int:
    points = _tier_points(expectancy_percent, _EXPECTANCY_TIERS)
    if points:
        return points
    floor, floor_points = _EXPECTANCY_FLOOR
    return floor_points if expectancy_percent > floor else 0


def score_month(
    monthly_pnl_percent: float,
    profit_factor: float,
    expectancy_percent: float,
) -> int:
    """Additive 0-100 score."""
    return (
        pnl_percent_points(monthly_pnl_percent)
        + profit_factor_points(profit_factor)
        + expectancy_points(expectancy_percent)
    )


def score_to_grade(score: float) -> Grade:
    """Convert a numeric score (0-100) to a letter grade."""
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F


def downgrade(grade: Grade) -> Grade:
    """One letter lower; D and F stay put."""
    return _DOWNGRADE.get(grade, grade)


def grade_month(
    monthly_pnl_percent: float,
    profit_factor: float,
    expectancy_percent: float,
    total_pnl: float,
) -> GradeResult:
    """Grade a month from its aggregate return, profit factor and expectancy.

    ``total_pnl`` is in currency; a negative value costs one letter.
    """
    score = score_month(monthly_pnl_percent, profit_factor, expectancy_percent)
    grade = score_to_grade(score)
    if total_pnl < 0:
        lowered = downgrade(grade)
        return GradeResult(grade=lowered, score=score, downgraded=lowered != grade)
    return GradeResult(grade=grade, score=score)
