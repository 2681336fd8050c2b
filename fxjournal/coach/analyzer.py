"""
Trade analyzer: turns one trade plus recent history into coaching feedback.

The rule-based implementation below is the default. Callers depend only on
the TradeAnalyzer protocol, so a learned model can be dropped in later
without changing them.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol, Sequence, Union
import logging

from fxjournal.coach.emotions import analyze_emotions
from fxjournal.coach.findings import identify_mistakes, identify_strengths
from fxjournal.coach.patterns import detect_patterns
from fxjournal.coach.period import generate_period_review
from fxjournal.coach.scoring import assess_risk, calculate_execution_score
from fxjournal.coach.suggestions import generate_suggestion
from fxjournal.coach.thresholds import DEFAULT_THRESHOLDS, Thresholds
from fxjournal.journal.models import (
    AnalysisFeedback,
    PeriodReview,
    ReviewPeriod,
    TradeRecord,
)

logger = logging.getLogger(__name__)


def analyze_trade(
    trade: TradeRecord,
    history: Iterable[TradeRecord] = (),
    now: Optional[datetime] = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> AnalysisFeedback:
    """
    Analyze a single trade and generate feedback.

    Args:
        trade: Trade being created or re-analyzed after an edit
        history: The trader's prior trades, most-recent-first (capped at
            thresholds.history_limit)
        now: Timestamp for analyzed_at (defaults to current UTC time)
        thresholds: Tunable cut-offs

    Returns:
        AnalysisFeedback
    """
    recent = list(history)[: thresholds.history_limit]

    score = calculate_execution_score(trade, thresholds)
    mistakes = identify_mistakes(trade, thresholds)

    feedback = AnalysisFeedback(
        execution_score=score,
        strengths=identify_strengths(trade, thresholds),
        mistakes=mistakes,
        suggestion=generate_suggestion(trade, mistakes, thresholds),
        patterns=detect_patterns(trade, recent, thresholds),
        risk_assessment=assess_risk(trade, thresholds, score=score),
        emotional_state=analyze_emotions(trade),
        analyzed_at=now or datetime.now(timezone.utc),
    )

    logger.debug(
        f"Analyzed {trade.currency_pair} {trade.date}: score={feedback.execution_score} "
        f"mistakes={len(feedback.mistakes)} patterns={feedback.patterns}"
    )
    return feedback


class TradeAnalyzer(Protocol):
    """Interface every analyzer backend implements."""

    def analyze_trade(
        self, trade: TradeRecord, history: Sequence[TradeRecord] = ()
    ) -> AnalysisFeedback:
        ...

    def generate_period_review(
        self, trades: Sequence[TradeRecord], period: Union[ReviewPeriod, str] = ReviewPeriod.WEEKLY
    ) -> PeriodReview:
        ...


class RuleBasedAnalyzer:
    """
    Deterministic, keyword and threshold driven analyzer.

    Holds only its (immutable) thresholds, so one instance can be shared
    across concurrent requests.
    """

    name = "rule_based"

    def __init__(self, thresholds: Thresholds = DEFAULT_THRESHOLDS):
        self.thresholds = thresholds

    def analyze_trade(
        self, trade: TradeRecord, history: Sequence[TradeRecord] = ()
    ) -> AnalysisFeedback:
        return analyze_trade(trade, history, thresholds=self.thresholds)

    def generate_period_review(
        self, trades: Sequence[TradeRecord], period: Union[ReviewPeriod, str] = ReviewPeriod.WEEKLY
    ) -> PeriodReview:
        return generate_period_review(trades, period)


def annotate_journal(
    trades: Sequence[TradeRecord],
    analyzer: Optional[TradeAnalyzer] = None,
    overwrite: bool = False,
) -> list[TradeRecord]:
    """
    Attach feedback to every trade in a journal.

    Each trade is analyzed against the trades logged before it, mirroring
    what it would have received when it was first recorded.

    Args:
        trades: Journal, most-recent-first
        analyzer: Analyzer to use (defaults to the global one)
        overwrite: Re-analyze trades that already carry feedback

    Returns:
        New list of trades, same order
    """
    analyzer = analyzer or get_analyzer()
    annotated = []
    for i, trade in enumerate(trades):
        if trade.ai_feedback is not None and not overwrite:
            annotated.append(trade)
            continue
        feedback = analyzer.analyze_trade(trade, list(trades[i + 1:]))
        annotated.append(trade.with_feedback(feedback))
    logger.info(f"Annotated {len(annotated)} trades")
    return annotated


_analyzer: Optional[TradeAnalyzer] = None


def get_analyzer() -> TradeAnalyzer:
    """Get the global analyzer instance, configured from settings."""
    global _analyzer
    if _analyzer is None:
        from fxjournal.config import settings

        analyzer = RuleBasedAnalyzer(settings.thresholds)
        logger.info(f"Using {analyzer.name} trade analyzer")
        _analyzer = analyzer
    return _analyzer
