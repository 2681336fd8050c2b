"""Trade journal: models, ingestion, analytics and export."""

from fxjournal.journal.models import (
    AnalysisFeedback,
    PeriodReview,
    TradeRecord,
    TradeValidationError,
    parse_trade,
)
from fxjournal.journal.ingest import history_for, load_trades, save_trades
from fxjournal.journal.analytics import JournalSummary, summarize_journal, weekly_trends
from fxjournal.journal.export import NoTradesError, export_trades_csv

__all__ = [
    "AnalysisFeedback",
    "PeriodReview",
    "TradeRecord",
    "TradeValidationError",
    "parse_trade",
    "history_for",
    "load_trades",
    "save_trades",
    "JournalSummary",
    "summarize_journal",
    "weekly_trends",
    "NoTradesError",
    "export_trades_csv",
]
