"""Tests for the periodic review report."""

from datetime import date

import pytest


@pytest.fixture
def generator(tmp_path):
    from fxjournal.coach.analyzer import RuleBasedAnalyzer
    from fxjournal.reports.period import PeriodReport

    return PeriodReport(analyzer=RuleBasedAnalyzer(), outputs_dir=tmp_path / "outputs")


class TestPeriodDateRange:
    """Tests for period_date_range."""

    def test_weekly_is_last_seven_days(self):
        from fxjournal.reports.period import period_date_range

        assert period_date_range("weekly", date(2024, 3, 15)) == (
            date(2024, 3, 8),
            date(2024, 3, 15),
        )

    def test_monthly_same_day_last_month(self):
        from fxjournal.reports.period import period_date_range

        start, end = period_date_range("monthly", date(2024, 3, 15))
        assert start == date(2024, 2, 15)
        assert end == date(2024, 3, 15)

    def test_monthly_clamps_to_month_end(self):
        from fxjournal.reports.period import period_date_range

        assert period_date_range("monthly", date(2024, 3, 31))[0] == date(2024, 2, 29)
        assert period_date_range("monthly", date(2023, 3, 31))[0] == date(2023, 2, 28)

    def test_unknown_period(self):
        from fxjournal.reports.period import period_date_range

        with pytest.raises(ValueError, match="weekly"):
            period_date_range("yearly", date(2024, 3, 15))


class TestPeriodReport:
    """Tests for PeriodReport."""

    def test_filters_to_window(self, generator, sample_journal):
        report = generator.generate_report(sample_journal, "weekly", date(2024, 3, 15))

        assert report.start_date == date(2024, 3, 8)
        assert [t.date for t in report.trades] == [
            date(2024, 3, 15),
            date(2024, 3, 14),
            date(2024, 3, 12),
        ]
        assert report.review.trade_count == 3

    def test_markdown(self, generator, sample_journal):
        report = generator.generate_report(sample_journal, "monthly", date(2024, 3, 15))
        markdown = generator.format_report(report)

        assert markdown.startswith("# Monthly Review")
        assert "**Period**: 2024-02-15 to 2024-03-15" in markdown
        assert "| Total Trades | 4 |" in markdown
        assert "| Best Pair | EURUSD (+42.0 pips) |" in markdown
        assert "## Recommendations" in markdown

    def test_empty_window(self, generator, sample_journal):
        report = generator.generate_report(sample_journal, "weekly", date(2025, 1, 1))
        markdown = generator.format_report(report)

        assert report.review.is_empty
        assert "No trades recorded in this period" in markdown
        assert "1. Start logging your trades to unlock AI insights" in markdown

    def test_save_report(self, generator, sample_journal, tmp_path):
        report = generator.generate_report(sample_journal, "weekly", date(2024, 3, 15))
        path = generator.save_report(report)

        assert path == tmp_path / "outputs" / "weekly-2024-03-15" / "review.md"
        assert path.read_text(encoding="utf-8").startswith("# Weekly Review")
        assert (path.parent / "trades.csv").exists()

    def test_save_empty_report_has_no_csv(self, generator, tmp_path):
        report = generator.generate_report([], "weekly", date(2024, 3, 15))
        path = generator.save_report(report)

        assert path.exists()
        assert not (path.parent / "trades.csv").exists()

    def test_default_outputs_dir_from_settings(self):
        from fxjournal.config import settings
        from fxjournal.reports.period import PeriodReport

        assert PeriodReport().outputs_dir == settings.outputs_dir
