"""Strengths and mistakes found in a single trade."""

from fxjournal.coach.signals import (
    PANIC_KEYWORDS,
    POSITIVE_MINDSET_KEYWORDS,
    IMPULSIVE_KEYWORD,
    contains_any,
    emotion_text,
    has_fomo_indicators,
    has_negative_emotions,
    has_revenge_emotions,
)
from fxjournal.coach.thresholds import DEFAULT_THRESHOLDS, Thresholds
from fxjournal.journal.models import Outcome, TradeRecord

# Strengths
GOOD_RR = "Good risk-to-reward ratio"
CONSERVATIVE_SIZING = "Conservative position sizing"
STRONG_TARGET = "Strong profit target execution"
EMOTIONAL_DISCIPLINE = "Maintained emotional discipline"
SL_TP_SET = "Proper risk management with SL/TP"
POSITIVE_MINDSET = "Entered trade with positive mindset"
NEUTRAL_STRENGTH = "Trade logged for analysis"

# Mistakes
POOR_RR = "Risk-to-reward ratio below 1:1 - risking more than potential gain"
HIGH_RISK_TEMPLATE = "High risk percentage ({risk}%) - exceeds recommended 1-2%"
REVENGE_TRADE = "Possible revenge trading detected from emotional state"
FOMO_PRESENT = "FOMO (Fear of Missing Out) indicators present"
PANIC_DURING = "Emotional panic during trade execution"
WIDE_STOP = "Stop loss may have been too wide or not honored"
SELF_IMPULSIVE = "Self-identified impulsive entry"


def identify_strengths(
    trade: TradeRecord,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    """Identify trade strengths. Never empty."""
    strengths = []

    if trade.rr_ratio >= 2:
        strengths.append(GOOD_RR)

    if trade.risk_percentage <= 1:
        strengths.append(CONSERVATIVE_SIZING)

    if trade.outcome == Outcome.WIN and trade.pips > thresholds.strong_win_pips:
        strengths.append(STRONG_TARGET)

    if not has_negative_emotions(trade):
        strengths.append(EMOTIONAL_DISCIPLINE)

    if trade.stop_loss and trade.take_profit:
        strengths.append(SL_TP_SET)

    if contains_any(emotion_text(trade.emotions_before), POSITIVE_MINDSET_KEYWORDS):
        strengths.append(POSITIVE_MINDSET)

    if not strengths:
        strengths.append(NEUTRAL_STRENGTH)

    return strengths


def identify_mistakes(
    trade: TradeRecord,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    """Identify mistakes and rule violations. May be empty."""
    mistakes = []

    if trade.rr_ratio < 1:
        mistakes.append(POOR_RR)

    if trade.risk_percentage > 2:
        mistakes.append(HIGH_RISK_TEMPLATE.format(risk=f"{trade.risk_percentage:g}"))

    if trade.outcome == Outcome.LOSS and has_revenge_emotions(trade):
        mistakes.append(REVENGE_TRADE)

    if has_fomo_indicators(trade):
        mistakes.append(FOMO_PRESENT)

    if contains_any(emotion_text(trade.emotions_during), PANIC_KEYWORDS):
        mistakes.append(PANIC_DURING)

    wide_stop_pips = trade.rr_ratio * thresholds.wide_stop_pips_per_rr
    if trade.outcome == Outcome.LOSS and abs(trade.pips) > wide_stop_pips:
        mistakes.append(WIDE_STOP)

    if IMPULSIVE_KEYWORD in emotion_text(trade.notes):
        mistakes.append(SELF_IMPULSIVE)

    return mistakes
