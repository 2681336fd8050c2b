"""CSV export of the trade journal."""

from pathlib import Path
from typing import Optional, Sequence
import logging

import pandas as pd

from fxjournal.journal.models import TradeRecord

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Date",
    "Session",
    "Pair",
    "Timeframe",
    "Direction",
    "Entry",
    "Stop Loss",
    "Take Profit",
    "Lot Size",
    "Risk %",
    "R:R",
    "Strategy",
    "Outcome",
    "Pips",
    "Execution Score",
    "AI Suggestion",
    "Strengths",
    "Mistakes",
    "Emotions Before",
    "Emotions During",
    "Emotions After",
    "Notes",
]

MISSING = "N/A"
LIST_SEPARATOR = "; "


class NoTradesError(Exception):
    """Raised when there is nothing to export."""

    def __init__(self, message: str = "No trades to export"):
        super().__init__(message)


def _row(trade: TradeRecord) -> list:
    feedback = trade.ai_feedback
    return [
        trade.date.isoformat(),
        trade.session.value,
        trade.currency_pair,
        trade.timeframe.value,
        trade.direction.value,
        trade.entry_price,
        trade.stop_loss,
        trade.take_profit,
        trade.lot_size,
        trade.risk_percentage,
        trade.rr_ratio,
        trade.strategy_name,
        trade.outcome.value,
        trade.pips,
        feedback.execution_score if feedback else MISSING,
        feedback.suggestion if feedback else MISSING,
        LIST_SEPARATOR.join(feedback.strengths) if feedback else MISSING,
        (LIST_SEPARATOR.join(feedback.mistakes) or MISSING) if feedback else MISSING,
        trade.emotions_before,
        trade.emotions_during,
        trade.emotions_after,
        trade.notes,
    ]


def export_trades_csv(
    trades: Sequence[TradeRecord],
    path: Optional[Path | str] = None,
) -> str:
    """
    Export trades to CSV.

    Args:
        trades: Trades in the order they should appear
        path: Optional file to write

    Returns:
        The CSV text

    Raises:
        NoTradesError: If trades is empty
    """
    if not trades:
        raise NoTradesError()

    df = pd.DataFrame([_row(t) for t in trades], columns=EXPORT_COLUMNS)
    csv_text = df.to_csv(index=False, lineterminator="\n")

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(csv_text, encoding="utf-8")
        logger.info(f"Exported {len(trades)} trades to {path}")

    return csv_text
