"""
Keyword signals read from a trade's free-text fields.

Matching is plain lower-cased substring presence; the keyword lists are the
contract, not the meaning of the text.
"""

from typing import Iterable, Optional

from fxjournal.journal.models import TradeRecord

NEGATIVE_EMOTION_KEYWORDS = (
    "fear",
    "panic",
    "revenge",
    "angry",
    "frustrated",
    "anxious",
    "stressed",
)
REVENGE_KEYWORDS = ("revenge", "angry", "frustrated")
FOMO_KEYWORDS = ("fomo", "missing out", "rushed")
IMPULSIVE_KEYWORD = "impulsive"
PANIC_KEYWORDS = ("panic", "fear")
POSITIVE_MINDSET_KEYWORDS = ("calm", "confident")

# FOMO via "impulsive" only counts when sizing is above this risk %
FOMO_IMPULSIVE_RISK_PCT = 2.0


def emotion_text(*parts: Optional[str]) -> str:
    """Join free-text fields into one lower-cased string; missing fields are empty."""
    return " ".join(p or "" for p in parts).lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(word in text for word in keywords)


def has_negative_emotions(trade: TradeRecord) -> bool:
    """Any negative-emotion keyword before, during or after the trade."""
    text = emotion_text(trade.emotions_before, trade.emotions_during, trade.emotions_after)
    return contains_any(text, NEGATIVE_EMOTION_KEYWORDS)


def has_revenge_emotions(trade: TradeRecord) -> bool:
    """Revenge/anger keywords during or after the trade."""
    text = emotion_text(trade.emotions_after, trade.emotions_during)
    return contains_any(text, REVENGE_KEYWORDS)


def has_fomo_indicators(trade: TradeRecord) -> bool:
    """
    FOMO keywords in pre-trade emotions or notes.

    "impulsive" also counts, but only for trades sized above
    FOMO_IMPULSIVE_RISK_PCT.
    """
    text = emotion_text(trade.emotions_before, trade.notes)
    if contains_any(text, FOMO_KEYWORDS):
        return True
    return trade.risk_percentage > FOMO_IMPULSIVE_RISK_PCT and IMPULSIVE_KEYWORD in text
