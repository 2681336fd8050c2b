"""Report generation for the FX trade journal."""

from fxjournal.reports.period import PeriodReport, PeriodReportData, period_date_range

__all__ = ["PeriodReport", "PeriodReportData", "period_date_range"]
