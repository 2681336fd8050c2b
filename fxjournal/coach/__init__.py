"""Rule-based trade coach: per-trade feedback and periodic reviews."""

from fxjournal.coach.analyzer import (
    RuleBasedAnalyzer,
    TradeAnalyzer,
    analyze_trade,
    annotate_journal,
    get_analyzer,
)
from fxjournal.coach.emotions import analyze_emotions, classify_emotions
from fxjournal.coach.findings import identify_mistakes, identify_strengths
from fxjournal.coach.patterns import detect_patterns
from fxjournal.coach.period import (
    analyze_period_patterns,
    calculate_period_stats,
    generate_period_recommendations,
    generate_period_review,
)
from fxjournal.coach.scoring import assess_risk, calculate_execution_score
from fxjournal.coach.suggestions import generate_suggestion
from fxjournal.coach.thresholds import DEFAULT_THRESHOLDS, Thresholds

__all__ = [
    "RuleBasedAnalyzer",
    "TradeAnalyzer",
    "analyze_trade",
    "annotate_journal",
    "get_analyzer",
    "analyze_emotions",
    "classify_emotions",
    "identify_mistakes",
    "identify_strengths",
    "detect_patterns",
    "analyze_period_patterns",
    "calculate_period_stats",
    "generate_period_recommendations",
    "generate_period_review",
    "assess_risk",
    "calculate_execution_score",
    "generate_suggestion",
    "DEFAULT_THRESHOLDS",
    "Thresholds",
]
