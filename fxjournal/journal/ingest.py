"""
Trade ingestion for the FX trade journal.

Supports:
- JSON journal files (a list of trades, or {"trades": [...]})
- CSV journal files with camelCase, snake_case or export-style headers
- Selecting a trade's history slice for analysis
- Writing annotated journals back to JSON

The CSV export is one-way for feedback: its Execution Score, AI Suggestion,
Strengths and Mistakes columns are dropped (with a warning) on re-import.
Use the JSON journal to keep feedback.
"""

from pathlib import Path
from typing import Any, Optional, Sequence
import json
import logging

import pandas as pd

from fxjournal.journal.models import TradeRecord, parse_trade

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20

# Headers written by journal.export, mapped back to field names
EXPORT_COLUMN_MAP = {
    "Date": "date",
    "Session": "session",
    "Pair": "currency_pair",
    "Timeframe": "timeframe",
    "Direction": "direction",
    "Entry": "entry_price",
    "Stop Loss": "stop_loss",
    "Take Profit": "take_profit",
    "Lot Size": "lot_size",
    "Risk %": "risk_percentage",
    "R:R": "rr_ratio",
    "Strategy": "strategy_name",
    "Outcome": "outcome",
    "Pips": "pips",
    "Emotions Before": "emotions_before",
    "Emotions During": "emotions_during",
    "Emotions After": "emotions_after",
    "Notes": "notes",
}

FEEDBACK_COLUMNS = ("aiFeedback", "ai_feedback")

# Export columns that cannot be turned back into AnalysisFeedback
EXPORT_FEEDBACK_COLUMNS = ("Execution Score", "AI Suggestion", "Strengths", "Mistakes")


def _clean_row(row: dict[str, Any]) -> dict[str, Any]:
    """Drop NaN cells and decode a JSON feedback column."""
    cleaned = {}
    for key, value in row.items():
        if value is None or (isinstance(value, float) and pd.isna(value)):
            continue
        if key in FEEDBACK_COLUMNS and isinstance(value, str):
            value = json.loads(value) if value.strip() else None
            if value is None:
                continue
        cleaned[key] = value
    return cleaned


def _read_csv(path: Path) -> list[dict[str, Any]]:
    df = pd.read_csv(path)
    if "Date" in df.columns:
        dropped = [c for c in EXPORT_FEEDBACK_COLUMNS if c in df.columns]
        if dropped:
            logger.warning(
                f"Ignoring export-only feedback columns in {path}: {', '.join(dropped)}"
            )
            df = df.drop(columns=dropped)
        df = df.rename(columns=EXPORT_COLUMN_MAP)
    return df.to_dict(orient="records")


def _read_json(path: Path) -> list[dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("trades", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of trades in {path}")
    return data


def order_most_recent_first(trades: Sequence[TradeRecord]) -> list[TradeRecord]:
    """Sort by date descending; trades on the same date keep their file order."""
    return sorted(trades, key=lambda t: t.date, reverse=True)


def load_trades(path: Path | str) -> list[TradeRecord]:
    """
    Load and validate trades from a journal file.

    Args:
        path: .csv or .json journal file

    Returns:
        Trades, most-recent-first

    Raises:
        TradeValidationError: If a row fails validation
        ValueError: For unsupported file types
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        rows = _read_csv(path)
    elif suffix == ".json":
        rows = _read_json(path)
    else:
        raise ValueError(f"Unsupported journal file type: {path.suffix}")

    trades = [parse_trade(_clean_row(row), row=i + 1) for i, row in enumerate(rows)]
    logger.info(f"Loaded {len(trades)} trades from {path}")
    return order_most_recent_first(trades)


def history_for(
    trade: TradeRecord,
    journal: Sequence[TradeRecord],
    limit: Optional[int] = DEFAULT_HISTORY_LIMIT,
) -> list[TradeRecord]:
    """
    History slice for analyzing a trade: the entries logged before it,
    most-recent-first, capped at limit.

    A trade that is not in the journal yet (being created) gets the whole
    journal as its history.
    """
    ordered = order_most_recent_first(journal)
    position = next((i for i, t in enumerate(ordered) if t is trade), None)
    prior = ordered if position is None else ordered[position + 1:]
    return prior[:limit] if limit is not None else prior


def trades_between(trades: Sequence[TradeRecord], start, end) -> list[TradeRecord]:
    """Trades whose date falls within [start, end]."""
    return [t for t in trades if start <= t.date <= end]


def save_trades(trades: Sequence[TradeRecord], path: Path | str) -> Path:
    """Write trades (with any feedback) to a JSON journal file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([t.to_dict() for t in trades], f, indent=2, ensure_ascii=False)
    logger.info(f"Saved {len(trades)} trades to {path}")
    return path
