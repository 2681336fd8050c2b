"""
Periodic Review Report.

Generates a weekly or monthly review with:
- Performance summary (win rate, R:R, net pips)
- Best strategy / session / pair
- Recurring mistakes and psychological weaknesses
- Prioritized recommendations
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional, Sequence, Union
import logging

import pandas as pd

from fxjournal.coach.analyzer import TradeAnalyzer, get_analyzer
from fxjournal.config import settings
from fxjournal.journal.export import export_trades_csv
from fxjournal.journal.ingest import order_most_recent_first, trades_between
from fxjournal.journal.models import PeriodReview, ReviewPeriod, TradeRecord

logger = logging.getLogger(__name__)


def parse_period(period: Union[ReviewPeriod, str]) -> ReviewPeriod:
    """Validate a review period name."""
    try:
        return ReviewPeriod(period)
    except ValueError as e:
        raise ValueError('Period must be "weekly" or "monthly"') from e


def period_date_range(
    period: Union[ReviewPeriod, str],
    today: Optional[date] = None,
) -> tuple[date, date]:
    """
    Date window covered by a review.

    Weekly covers the last 7 days. Monthly starts on the same day one month
    earlier, clamped to the end of a shorter month (Mar 31 -> Feb 28).

    Returns:
        (start_date, end_date), both inclusive
    """
    period = parse_period(period)
    today = today or date.today()

    if period == ReviewPeriod.WEEKLY:
        start = today - timedelta(days=7)
    else:
        start = (pd.Timestamp(today) - pd.DateOffset(months=1)).date()
    return start, today


@dataclass
class PeriodReportData:
    """Review plus the window and trades it was built from."""

    period: ReviewPeriod
    start_date: date
    end_date: date
    review: PeriodReview
    trades: list[TradeRecord] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)


class PeriodReport:
    """
    Generate weekly/monthly reviews from a trade journal.
    """

    def __init__(
        self,
        analyzer: Optional[TradeAnalyzer] = None,
        outputs_dir: Optional[Path] = None,
    ):
        self.analyzer = analyzer or get_analyzer()
        self.outputs_dir = Path(outputs_dir) if outputs_dir else settings.outputs_dir

    def generate_report(
        self,
        journal: Sequence[TradeRecord],
        period: Union[ReviewPeriod, str] = ReviewPeriod.WEEKLY,
        today: Optional[date] = None,
    ) -> PeriodReportData:
        """
        Generate a review for the period ending today.

        Args:
            journal: All logged trades
            period: "weekly" or "monthly"
            today: End of the window (defaults to the current date)

        Returns:
            PeriodReportData
        """
        period = parse_period(period)
        start_date, end_date = period_date_range(period, today)
        logger.info(f"Generating {period.value} review for {start_date} to {end_date}")

        trades = order_most_recent_first(trades_between(journal, start_date, end_date))
        review = self.analyzer.generate_period_review(trades, period)

        return PeriodReportData(
            period=period,
            start_date=start_date,
            end_date=end_date,
            review=review,
            trades=trades,
        )

    def format_report(self, report: PeriodReportData) -> str:
        """Format a review as markdown."""
        review = report.review
        title = report.period.value.capitalize()

        lines = [
            f"# {title} Review",
            f"**Period**: {report.start_date} to {report.end_date}",
            "",
        ]

        if review.is_empty:
            lines.extend([
                review.summary or "",
                "",
                "## Recommendations",
                "",
            ])
            lines.extend(f"{i}. {rec}" for i, rec in enumerate(review.recommendations, 1))
            return "\n".join(lines)

        emoji = "🟢" if (review.net_pips or 0) >= 0 else "🔴"
        lines.extend([
            f"## Performance Summary {emoji}",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Trades | {review.trade_count} |",
            f"| Win Rate | {review.win_rate:.1f}% |",
            f"| Avg R:R | {review.avg_rr:.2f} |",
            f"| **Net Pips** | **{review.net_pips:+.1f}** |",
            f"| Best Strategy | {review.best_strategy} |",
            f"| Best Session | {review.best_session} |",
            f"| Best Pair | {review.best_pair} |",
            f"| Execution Trend | {review.execution_trend.value} |",
            f"| Risk Management Grade | {review.risk_management_grade.value} |",
            "",
            "---",
            "",
            "## Common Mistakes",
        ])
        if review.common_mistakes:
            lines.extend(f"- {m}" for m in review.common_mistakes)
        else:
            lines.append("- None recorded")

        lines.extend([
            "",
            "## Psychological Weaknesses",
        ])
        if review.psychological_weaknesses:
            lines.extend(f"- {w}" for w in review.psychological_weaknesses)
        else:
            lines.append("- None detected")

        lines.extend([
            "",
            "---",
            "",
            "## Recommendations",
            "",
        ])
        lines.extend(f"{i}. {rec}" for i, rec in enumerate(review.recommendations, 1))

        lines.append("")
        lines.append("---")
        lines.append(f"*Report generated: {report.generated_at.strftime('%Y-%m-%d %H:%M:%S')}*")

        return "\n".join(lines)

    def save_report(self, report: PeriodReportData) -> Path:
        """
        Save a review to disk.

        Writes the markdown review and, when the period has trades, the
        trades as CSV next to it.

        Returns:
            Path to the markdown file
        """
        output_dir = self.outputs_dir / f"{report.period.value}-{report.end_date.isoformat()}"
        output_dir.mkdir(parents=True, exist_ok=True)

        file_path = output_dir / "review.md"
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(self.format_report(report))

        logger.info(f"Saved {report.period.value} review: {file_path}")

        if report.trades:
            export_trades_csv(report.trades, output_dir / "trades.csv")

        return file_path
