"""Single prioritized improvement suggestion for a trade."""

from typing import Optional

from fxjournal.coach.findings import identify_mistakes
from fxjournal.coach.signals import has_fomo_indicators, has_revenge_emotions
from fxjournal.coach.thresholds import DEFAULT_THRESHOLDS, Thresholds
from fxjournal.journal.models import Outcome, TradeRecord

REDUCE_RISK = (
    "Focus on reducing position size to 1-2% risk per trade. "
    "This is critical for capital preservation."
)
MINIMUM_RR = (
    "Never enter trades with R:R below 1:1. "
    "Wait for setups with at least 2:1 reward potential."
)
COOL_DOWN = (
    "Take a break after losses. "
    "Wait at least 30 minutes before analyzing the next setup."
)
USE_CHECKLIST = (
    "Use entry checklists to avoid FOMO. The market always provides opportunities."
)
FOLLOW_PLAN = (
    "Review your trading plan rules. Stick to your strategy even during drawdowns."
)
REPEAT_SETUP = (
    "Excellent trade! Document what made this setup high-probability and repeat it."
)
KEEP_JOURNALING = (
    "Continue journaling trades. Pattern recognition improves with consistent data."
)


def generate_suggestion(
    trade: TradeRecord,
    mistakes: Optional[list[str]] = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> str:
    """
    Pick the single most important suggestion for a trade.

    Checks run in priority order and the first match wins: oversized risk,
    poor R:R, revenge emotions, FOMO, losing trade with mistakes, good winner.

    Args:
        trade: Trade to advise on
        mistakes: Mistakes already identified for this trade (computed if None)
        thresholds: Passed to mistake identification

    Returns:
        Suggestion text
    """
    if mistakes is None:
        mistakes = identify_mistakes(trade, thresholds)

    if trade.risk_percentage > 3:
        return REDUCE_RISK

    if trade.rr_ratio < 1:
        return MINIMUM_RR

    if has_revenge_emotions(trade):
        return COOL_DOWN

    if has_fomo_indicators(trade):
        return USE_CHECKLIST

    if trade.outcome == Outcome.LOSS and mistakes:
        return FOLLOW_PLAN

    if trade.outcome == Outcome.WIN and trade.rr_ratio >= 2:
        return REPEAT_SETUP

    return KEEP_JOURNALING
