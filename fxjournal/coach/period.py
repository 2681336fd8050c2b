"""
Periodic (weekly/monthly) review of a set of trades.

Computes:
- Win rate, average R:R, net pips
- Best strategy / session (by win rate) and best pair (by pips)
- Execution trend and risk management grade
- Recurring mistakes and psychological weaknesses from stored feedback
- Up to 3 prioritized recommendations
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Hashable, Optional, Sequence, Union
import logging

import numpy as np

from fxjournal.journal.models import (
    NOT_AVAILABLE,
    EmotionalState,
    ExecutionTrend,
    Outcome,
    PeriodReview,
    RankedLabel,
    ReviewPeriod,
    RiskGrade,
    TradeRecord,
    round_half_up,
)

logger = logging.getLogger(__name__)

DEFAULT_EXECUTION_SCORE = 5
MAX_COMMON_MISTAKES = 3
MAX_WEAKNESSES = 2
MAX_RECOMMENDATIONS = 3
MIN_RECOMMENDATIONS = 2

NEGATIVE_STATES = (
    EmotionalState.FEARFUL,
    EmotionalState.GREEDY,
    EmotionalState.IMPULSIVE,
    EmotionalState.REVENGE,
)

EMPTY_SUMMARY = "No trades recorded in this period"
START_LOGGING = "Start logging your trades to unlock AI insights"
QUALITY_OVER_QUANTITY = (
    "Focus on quality over quantity. Review your entry criteria and wait for "
    "high-probability setups."
)
LET_WINNERS_RUN = (
    "Strong win rate! Ensure you're not exiting winners too early. Let profits run."
)
RAISE_RR = (
    "Improve your R:R ratio by targeting at least 2:1 on all trades. "
    "Skip setups with poor risk-reward."
)
REDUCE_SIZING = "⚠️ Reduce position sizing to 1-2% risk per trade. This is your #1 priority."
ADDRESS_MISTAKE = "Address your most common mistake: {mistake}"
EMOTIONAL_DISCIPLINE = "Work on emotional discipline. Detected: {weakness}"
BUILD_CONSISTENCY = (
    "Continue building your trading journal. Consistency is key to improvement."
)


@dataclass
class PeriodStats:
    """Aggregate statistics for a period."""

    trade_count: int
    win_count: int
    loss_count: int
    win_rate: float  # percent, one decimal
    avg_rr: float
    net_pips: float
    best_strategy: RankedLabel
    best_session: RankedLabel
    best_pair: RankedLabel
    avg_execution_score: float
    execution_trend: ExecutionTrend
    avg_risk_pct: float
    risk_grade: RiskGrade


@dataclass
class PeriodPatterns:
    """Recurring mistakes and emotional weaknesses for a period."""

    common_mistakes: list[str] = field(default_factory=list)
    psychological_weaknesses: list[str] = field(default_factory=list)
    mistake_counts: Counter = field(default_factory=Counter)
    emotion_counts: Counter = field(default_factory=Counter)


def _group(trades: Sequence[TradeRecord], key: Callable[[TradeRecord], Hashable]) -> dict:
    """Group trades by key, keeping first-appearance order of the keys."""
    groups: dict = {}
    for t in trades:
        groups.setdefault(key(t), []).append(t)
    return groups


def _label(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


def best_by_win_rate(
    trades: Sequence[TradeRecord],
    key: Callable[[TradeRecord], Hashable],
) -> RankedLabel:
    """
    Group with the highest win rate.

    Only a strictly higher rate replaces the current best, so ties go to the
    group seen first. Groups without any wins never qualify (N/A).
    """
    best = NOT_AVAILABLE
    best_rate = 0.0
    for name, group in _group(trades, key).items():
        wins = sum(1 for t in group if t.outcome == Outcome.WIN)
        rate = wins / len(group) * 100
        if rate > best_rate:
            best_rate = rate
            best = RankedLabel(name=_label(name), metric=round_half_up(rate, 1), unit="win_rate")
    return best


def best_by_pips(
    trades: Sequence[TradeRecord],
    key: Callable[[TradeRecord], Hashable],
) -> RankedLabel:
    """Group with the largest summed pips; ties go to the group seen first."""
    best = NOT_AVAILABLE
    best_pips = float("-inf")
    for name, group in _group(trades, key).items():
        pips = sum(t.pips for t in group)
        if pips > best_pips:
            best_pips = pips
            best = RankedLabel(name=_label(name), metric=round_half_up(pips, 1), unit="pips")
    return best


def execution_trend_for(avg_score: float) -> ExecutionTrend:
    if avg_score >= 7:
        return ExecutionTrend.IMPROVING
    if avg_score >= 5:
        return ExecutionTrend.STABLE
    return ExecutionTrend.NEEDS_ATTENTION


def risk_grade_for(avg_risk_pct: float) -> RiskGrade:
    if avg_risk_pct <= 1:
        return RiskGrade.A
    if avg_risk_pct <= 2:
        return RiskGrade.B
    if avg_risk_pct <= 3:
        return RiskGrade.C
    return RiskGrade.D


def calculate_period_stats(trades: Sequence[TradeRecord]) -> PeriodStats:
    """
    Calculate period statistics.

    Args:
        trades: Non-empty list of trades in the period

    Returns:
        PeriodStats
    """
    if not trades:
        raise ValueError("calculate_period_stats needs at least one trade")

    total = len(trades)
    wins = [t for t in trades if t.outcome == Outcome.WIN]
    losses = [t for t in trades if t.outcome == Outcome.LOSS]

    scores = [
        t.ai_feedback.execution_score if t.ai_feedback else DEFAULT_EXECUTION_SCORE
        for t in trades
    ]
    avg_score = float(np.mean(scores))
    avg_risk = float(np.mean([t.risk_percentage for t in trades]))

    return PeriodStats(
        trade_count=total,
        win_count=len(wins),
        loss_count=len(losses),
        win_rate=round_half_up(len(wins) / total * 100, 1),
        avg_rr=round_half_up(np.mean([t.rr_ratio for t in trades]), 2),
        net_pips=round_half_up(sum(t.pips for t in trades), 1),
        best_strategy=best_by_win_rate(trades, lambda t: t.strategy_name),
        best_session=best_by_win_rate(trades, lambda t: t.session),
        best_pair=best_by_pips(trades, lambda t: t.currency_pair),
        avg_execution_score=round_half_up(avg_score, 2),
        execution_trend=execution_trend_for(avg_score),
        avg_risk_pct=round_half_up(avg_risk, 2),
        risk_grade=risk_grade_for(avg_risk),
    )


def _top(counts: Counter, limit: int) -> list[tuple]:
    # sorted() is stable, so equal counts keep first-encountered order
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]


def analyze_period_patterns(trades: Sequence[TradeRecord]) -> PeriodPatterns:
    """
    Tally recurring mistakes and emotional states from stored feedback.

    Trades without feedback are skipped.
    """
    mistake_counts: Counter = Counter()
    emotion_counts: Counter = Counter()

    for trade in trades:
        feedback = trade.ai_feedback
        if feedback is None:
            continue
        for mistake in feedback.mistakes:
            mistake_counts[mistake] += 1
        emotion_counts[feedback.emotional_state] += 1

    common_mistakes = [
        f"{mistake} ({count}x)" for mistake, count in _top(mistake_counts, MAX_COMMON_MISTAKES)
    ]

    negative = Counter(
        {state: count for state, count in emotion_counts.items() if state in NEGATIVE_STATES}
    )
    weaknesses = [
        f"{state.value} trading ({count}x)" for state, count in _top(negative, MAX_WEAKNESSES)
    ]

    return PeriodPatterns(
        common_mistakes=common_mistakes,
        psychological_weaknesses=weaknesses,
        mistake_counts=mistake_counts,
        emotion_counts=emotion_counts,
    )


def generate_period_recommendations(
    stats: PeriodStats,
    patterns: PeriodPatterns,
) -> list[str]:
    """
    Build up to 3 recommendations in priority order.

    Each check runs independently; the list keeps check order and is padded
    with a generic recommendation when fewer than 2 fired.
    """
    recommendations = []

    if stats.win_rate < 40:
        recommendations.append(QUALITY_OVER_QUANTITY)
    elif stats.win_rate > 60:
        recommendations.append(LET_WINNERS_RUN)

    if stats.avg_rr < 1.5:
        recommendations.append(RAISE_RR)

    if stats.risk_grade in (RiskGrade.C, RiskGrade.D):
        recommendations.append(REDUCE_SIZING)

    if patterns.common_mistakes:
        recommendations.append(ADDRESS_MISTAKE.format(mistake=patterns.common_mistakes[0]))

    if patterns.psychological_weaknesses:
        recommendations.append(
            EMOTIONAL_DISCIPLINE.format(weakness=patterns.psychological_weaknesses[0])
        )

    if len(recommendations) < MIN_RECOMMENDATIONS:
        recommendations.append(BUILD_CONSISTENCY)

    return recommendations[:MAX_RECOMMENDATIONS]


def empty_period_review(period: ReviewPeriod) -> PeriodReview:
    """Review stub for a period without trades."""
    return PeriodReview(
        period=period,
        trade_count=0,
        summary=EMPTY_SUMMARY,
        recommendations=[START_LOGGING],
    )


def generate_period_review(
    trades: Sequence[TradeRecord],
    period: Union[ReviewPeriod, str] = ReviewPeriod.WEEKLY,
) -> PeriodReview:
    """
    Generate a weekly or monthly review.

    Args:
        trades: Trades already filtered to the period's date window
        period: "weekly" or "monthly"

    Returns:
        PeriodReview
    """
    period = ReviewPeriod(period)

    if not trades:
        return empty_period_review(period)

    stats = calculate_period_stats(trades)
    patterns = analyze_period_patterns(trades)
    recommendations = generate_period_recommendations(stats, patterns)

    logger.debug(
        f"{period.value} review: {stats.trade_count} trades, win rate {stats.win_rate}%, "
        f"grade {stats.risk_grade.value}"
    )

    return PeriodReview(
        period=period,
        trade_count=stats.trade_count,
        win_rate=stats.win_rate,
        avg_rr=stats.avg_rr,
        net_pips=stats.net_pips,
        best_strategy=stats.best_strategy,
        best_session=stats.best_session,
        best_pair=stats.best_pair,
        common_mistakes=patterns.common_mistakes,
        psychological_weaknesses=patterns.psychological_weaknesses,
        recommendations=recommendations,
        execution_trend=stats.execution_trend,
        risk_management_grade=stats.risk_grade,
    )
