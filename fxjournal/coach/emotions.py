"""
Emotional state classification from journal text.

The table is checked top to bottom and the first match wins, so risk-relevant
states (revenge, greed, fear, impulsiveness) always beat the positive ones.
"""

from typing import Optional

from fxjournal.coach.signals import contains_any, emotion_text
from fxjournal.journal.models import EmotionalState, TradeRecord

OVERCONFIDENCE_PHRASES = ("over-confident", "overconfident", "over confident")

# (state, keywords that trigger it), in priority order
EMOTION_TABLE: tuple[tuple[EmotionalState, tuple[str, ...]], ...] = (
    (EmotionalState.REVENGE, ("revenge", "angry")),
    (EmotionalState.GREEDY, ("fomo", "missing out")),
    (EmotionalState.FEARFUL, ("fear", "panic")),
    (EmotionalState.IMPULSIVE, ("impulsive", "rushed")),
    (EmotionalState.CONFIDENT, ("confident",)),
    (EmotionalState.CALM, ("calm", "patient")),
)


def classify_emotions(*texts: Optional[str]) -> EmotionalState:
    """
    Map free-text emotion fields to a single emotional state.

    Args:
        texts: Zero or more free-text fields (None treated as empty)

    Returns:
        The highest-priority matching EmotionalState, or MIXED if nothing matches
    """
    text = emotion_text(*texts)

    for state, keywords in EMOTION_TABLE:
        if not contains_any(text, keywords):
            continue
        if state is EmotionalState.CONFIDENT and contains_any(text, OVERCONFIDENCE_PHRASES):
            continue
        return state

    return EmotionalState.MIXED


def analyze_emotions(trade: TradeRecord) -> EmotionalState:
    """Classify the before/during/after emotions of a trade."""
    return classify_emotions(trade.emotions_before, trade.emotions_during, trade.emotions_after)
