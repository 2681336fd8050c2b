"""
Execution quality scoring for a single trade.

Score starts at BASE_SCORE and moves up or down per rule:
- Reward:risk ratio (+2 to -1)
- Risk per trade (+1 to -2)
- Outcome quality (+2 to -1)
- Stop loss discipline (+1)
- Emotional discipline (-2)

The final score is rounded and clamped to [MIN_SCORE, MAX_SCORE].
"""

import logging
import math

from fxjournal.coach.signals import has_negative_emotions
from fxjournal.coach.thresholds import DEFAULT_THRESHOLDS, Thresholds
from fxjournal.journal.models import Outcome, RiskAssessment, TradeRecord

logger = logging.getLogger(__name__)

BASE_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10


def _rr_points(rr_ratio: float) -> int:
    if rr_ratio >= 3:
        return 2
    if rr_ratio >= 2:
        return 1
    if rr_ratio < 1:
        return -1
    return 0


def _risk_points(risk_pct: float) -> int:
    if risk_pct <= 1:
        return 1
    if risk_pct > 3:
        return -2
    if risk_pct > 2:
        return -1
    return 0


def _outcome_points(trade: TradeRecord, thresholds: Thresholds) -> int:
    if trade.outcome == Outcome.WIN:
        return 2 if trade.pips > thresholds.big_win_pips else 1
    if trade.outcome == Outcome.LOSS and abs(trade.pips) > thresholds.big_loss_pips:
        return -1
    return 0


def _stop_points(trade: TradeRecord) -> int:
    # Upstream validation keeps entry and stop distinct, so this is normally +1.
    distance = abs(trade.entry_price - trade.stop_loss)
    if distance > 0 and trade.stop_loss != trade.entry_price:
        return 1
    return 0


def clamp_score(score: float) -> int:
    """Round half-up and clamp to the valid score range."""
    rounded = math.floor(score + 0.5)
    return max(MIN_SCORE, min(MAX_SCORE, rounded))


def calculate_execution_score(
    trade: TradeRecord,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> int:
    """
    Calculate execution quality score (1-10).

    Args:
        trade: Trade to score
        thresholds: Pip cut-offs for the outcome rules

    Returns:
        Integer score in [1, 10]
    """
    score = BASE_SCORE
    score += _rr_points(trade.rr_ratio)
    score += _risk_points(trade.risk_percentage)
    score += _outcome_points(trade, thresholds)
    score += _stop_points(trade)

    if has_negative_emotions(trade):
        score -= 2

    final = clamp_score(score)
    logger.debug(f"Execution score {trade.currency_pair} {trade.date}: raw={score} final={final}")
    return final


def assess_risk(
    trade: TradeRecord,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    score: int | None = None,
) -> RiskAssessment:
    """
    Grade the risk management of a trade.

    Args:
        trade: Trade to grade
        thresholds: Passed through to the execution score
        score: Precomputed execution score, if the caller already has it

    Returns:
        RiskAssessment
    """
    if score is None:
        score = calculate_execution_score(trade, thresholds)

    risk = trade.risk_percentage
    rr = trade.rr_ratio

    if score >= 8 and risk <= 1 and rr >= 2:
        return RiskAssessment.EXCELLENT
    if score >= 6 and risk <= 2:
        return RiskAssessment.GOOD
    if risk <= 3 and rr >= 1:
        return RiskAssessment.ACCEPTABLE
    if risk > 3 or rr < 1:
        return RiskAssessment.POOR
    # Only reachable for non-comparable inputs (e.g. NaN) the validation layer rejects.
    return RiskAssessment.DANGEROUS
