"""
Behavioural pattern detection.

Per-trade tags come from the trade itself; historical tags compare it against
the most recent entries of the trader's history (caller supplies the history
most-recent-first).
"""

from typing import Sequence
import logging

from fxjournal.coach.signals import (
    has_fomo_indicators,
    has_negative_emotions,
    has_revenge_emotions,
)
from fxjournal.coach.thresholds import DEFAULT_THRESHOLDS, Thresholds
from fxjournal.journal.models import Outcome, TradeRecord

logger = logging.getLogger(__name__)

GOOD_DISCIPLINE = "good_discipline"
REVENGE_TRADING = "revenge_trading"
FOMO = "FOMO"
EMOTIONAL_TRADING = "emotional_trading"
OVER_TRADING = "over_trading"
EARLY_EXIT = "early_exit"
LATE_ENTRY = "late_entry"


def _trade_patterns(trade: TradeRecord) -> list[str]:
    patterns = []

    if trade.risk_percentage <= 1 and trade.rr_ratio >= 2:
        patterns.append(GOOD_DISCIPLINE)

    if has_revenge_emotions(trade):
        patterns.append(REVENGE_TRADING)

    if has_fomo_indicators(trade):
        patterns.append(FOMO)

    if has_negative_emotions(trade):
        patterns.append(EMOTIONAL_TRADING)

    return patterns


def _history_patterns(
    trade: TradeRecord,
    history: Sequence[TradeRecord],
    thresholds: Thresholds,
) -> list[str]:
    if len(history) < thresholds.min_history:
        return []

    recent = history[: thresholds.recent_window]
    patterns = []

    same_day = [t for t in recent if t.date == trade.date]
    if len(same_day) >= thresholds.over_trading_same_day:
        patterns.append(OVER_TRADING)

    recent_wins = [t for t in recent if t.outcome == Outcome.WIN]
    if len(recent_wins) >= thresholds.early_exit_min_wins and all(
        t.pips < thresholds.early_exit_max_pips for t in recent_wins
    ):
        patterns.append(EARLY_EXIT)

    recent_losses = [t for t in recent if t.outcome == Outcome.LOSS]
    if len(recent_losses) >= thresholds.late_entry_min_losses:
        patterns.append(LATE_ENTRY)

    return patterns


def detect_patterns(
    trade: TradeRecord,
    history: Sequence[TradeRecord] = (),
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    """
    Detect behavioural patterns for a trade.

    Args:
        trade: Trade being analyzed
        history: Prior trades, most-recent-first
        thresholds: Window sizes and cut-offs

    Returns:
        Pattern tags in detection order (may be empty)
    """
    patterns = _trade_patterns(trade) + _history_patterns(trade, history, thresholds)
    if patterns:
        logger.debug(f"Patterns for {trade.currency_pair} {trade.date}: {patterns}")
    return patterns
