"""
Journal analytics for the FX trade journal.

Computes:
- Win / loss / break-even rates, net pips, average R:R
- Average execution score from stored feedback
- Best strategy and most common mistake
- Per-session and per-strategy breakdowns
- Weekly performance trends
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence
import logging

import numpy as np
import pandas as pd

from fxjournal.journal.ingest import order_most_recent_first
from fxjournal.journal.models import Outcome, TradeRecord, round_half_up

logger = logging.getLogger(__name__)

NO_TRADES_MESSAGE = "No trades found. Start logging your trades!"
DEFAULT_RECENT_TRADES = 10


@dataclass
class GroupPerformance:
    """Performance of one session or strategy."""

    name: str
    trades: int
    win_rate: float
    total_pips: float


@dataclass
class WeeklyTrend:
    """Performance for one Monday-start week."""

    week: date
    trades: int
    win_rate: float
    total_pips: float


@dataclass
class JournalSummary:
    """Dashboard statistics for a whole journal."""

    # Basic counts
    total_trades: int = 0
    win_count: int = 0
    loss_count: int = 0
    breakeven_count: int = 0

    # Rates (percent, one decimal)
    win_rate: float = 0.0
    loss_rate: float = 0.0
    breakeven_rate: float = 0.0
    recent_win_rate: float = 0.0

    # Pips / R:R
    net_pips: float = 0.0
    avg_rr: float = 0.0
    avg_execution_score: Optional[float] = None

    best_strategy: str = "N/A"
    common_mistake: str = "N/A"

    session_performance: list[GroupPerformance] = field(default_factory=list)
    strategy_breakdown: list[GroupPerformance] = field(default_factory=list)

    message: Optional[str] = None


def _percent(part: float, whole: float) -> float:
    return round_half_up(part / whole * 100, 1) if whole else 0.0


def trades_to_frame(trades: Sequence[TradeRecord]) -> pd.DataFrame:
    """Flatten trades into a DataFrame for grouping."""
    return pd.DataFrame(
        [
            {
                "date": t.date,
                "session": t.session.value,
                "strategy": t.strategy_name,
                "pair": t.currency_pair,
                "is_win": t.outcome == Outcome.WIN,
                "pips": t.pips,
                "rr_ratio": t.rr_ratio,
            }
            for t in trades
        ]
    )


def _group_performance(df: pd.DataFrame, column: str) -> list[GroupPerformance]:
    grouped = df.groupby(column, sort=False).agg(
        trades=("is_win", "size"),
        wins=("is_win", "sum"),
        total_pips=("pips", "sum"),
    )
    return [
        GroupPerformance(
            name=str(name),
            trades=int(row.trades),
            win_rate=_percent(row.wins, row.trades),
            total_pips=round_half_up(row.total_pips, 1),
        )
        for name, row in grouped.iterrows()
    ]


def _best_strategy(breakdown: list[GroupPerformance]) -> str:
    best: Optional[GroupPerformance] = None
    for group in breakdown:
        if best is None or group.win_rate > best.win_rate:
            best = group
    if best is None:
        return "N/A"
    win_rate = round_half_up(best.win_rate)
    pips = round_half_up(best.total_pips)
    return f"{best.name} ({win_rate:.0f}% WR, {pips:.0f} pips)"


def _common_mistake(trades: Sequence[TradeRecord]) -> str:
    counts: Counter = Counter()
    for t in trades:
        if t.ai_feedback is not None:
            counts.update(t.ai_feedback.mistakes)
    if not counts:
        return "N/A"
    return counts.most_common(1)[0][0]


def summarize_journal(
    trades: Sequence[TradeRecord],
    recent_trades: int = DEFAULT_RECENT_TRADES,
) -> JournalSummary:
    """
    Compute dashboard statistics for a journal.

    Args:
        trades: All logged trades
        recent_trades: Window for the recent win rate

    Returns:
        JournalSummary (zeroed with a message for an empty journal)
    """
    if not trades:
        return JournalSummary(message=NO_TRADES_MESSAGE)

    trades = order_most_recent_first(trades)
    total = len(trades)
    wins = sum(1 for t in trades if t.outcome == Outcome.WIN)
    losses = sum(1 for t in trades if t.outcome == Outcome.LOSS)
    breakeven = sum(1 for t in trades if t.outcome == Outcome.BREAKEVEN)

    scores = [t.ai_feedback.execution_score for t in trades if t.ai_feedback is not None]
    recent = trades[:recent_trades]
    recent_wins = sum(1 for t in recent if t.outcome == Outcome.WIN)

    df = trades_to_frame(trades)
    strategy_breakdown = _group_performance(df, "strategy")

    return JournalSummary(
        total_trades=total,
        win_count=wins,
        loss_count=losses,
        breakeven_count=breakeven,
        win_rate=_percent(wins, total),
        loss_rate=_percent(losses, total),
        breakeven_rate=_percent(breakeven, total),
        recent_win_rate=_percent(recent_wins, len(recent)),
        net_pips=round_half_up(df["pips"].sum(), 1),
        avg_rr=round_half_up(np.mean(df["rr_ratio"]), 2),
        avg_execution_score=round_half_up(np.mean(scores), 1) if scores else None,
        best_strategy=_best_strategy(strategy_breakdown),
        common_mistake=_common_mistake(trades),
        session_performance=_group_performance(df, "session"),
        strategy_breakdown=strategy_breakdown,
    )


def week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def weekly_trends(trades: Sequence[TradeRecord]) -> list[WeeklyTrend]:
    """Per-week trade count, win rate and pips, oldest week first."""
    if not trades:
        return []

    df = trades_to_frame(trades)
    df["week"] = df["date"].map(week_start)
    grouped = df.groupby("week", sort=True).agg(
        trades=("is_win", "size"),
        wins=("is_win", "sum"),
        total_pips=("pips", "sum"),
    )

    trends = [
        WeeklyTrend(
            week=week,
            trades=int(row.trades),
            win_rate=_percent(row.wins, row.trades),
            total_pips=round_half_up(row.total_pips, 1),
        )
        for week, row in grouped.iterrows()
    ]
    logger.debug(f"Computed trends for {len(trends)} weeks")
    return trends
