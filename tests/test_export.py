"""Tests for CSV export."""

import csv
import io

import pytest


def _rows(csv_text: str) -> list[dict]:
    return list(csv.DictReader(io.StringIO(csv_text)))


class TestExportTradesCsv:
    """Tests for export_trades_csv."""

    def test_header_layout(self, sample_journal):
        from fxjournal.journal.export import EXPORT_COLUMNS, export_trades_csv

        csv_text = export_trades_csv(sample_journal)
        assert csv_text.splitlines()[0] == ",".join(EXPORT_COLUMNS)
        assert EXPORT_COLUMNS[0] == "Date"
        assert EXPORT_COLUMNS[-1] == "Notes"
        assert len(_rows(csv_text)) == len(sample_journal)

    def test_missing_feedback_is_na(self, sample_journal):
        from fxjournal.journal.export import export_trades_csv

        row = _rows(export_trades_csv(sample_journal))[0]
        assert row["Date"] == "2024-03-15"
        assert row["Pair"] == "EURUSD"
        assert row["Outcome"] == "Win"
        for column in ("Execution Score", "AI Suggestion", "Strengths", "Mistakes"):
            assert row[column] == "N/A"

    def test_feedback_lists_are_joined(self, make_trade, make_feedback):
        from fxjournal.journal.export import export_trades_csv

        trade = make_trade().with_feedback(
            make_feedback(
                execution_score=8,
                strengths=["Good risk-to-reward ratio", "Conservative position sizing"],
                mistakes=[],
            )
        )
        row = _rows(export_trades_csv([trade]))[0]

        assert row["Execution Score"] == "8"
        assert row["Strengths"] == "Good risk-to-reward ratio; Conservative position sizing"
        assert row["Mistakes"] == "N/A"

    def test_free_text_is_quoted(self, make_trade):
        from fxjournal.journal.export import export_trades_csv

        trade = make_trade(notes='Waited, then "sniped" the retest')
        row = _rows(export_trades_csv([trade]))[0]
        assert row["Notes"] == 'Waited, then "sniped" the retest'

    def test_writes_file(self, tmp_path, sample_journal):
        from fxjournal.journal.export import export_trades_csv

        path = tmp_path / "exports" / "trades.csv"
        csv_text = export_trades_csv(sample_journal, path)

        assert path.exists()
        assert path.read_text(encoding="utf-8") == csv_text

    def test_empty_journal(self):
        from fxjournal.journal.export import NoTradesError, export_trades_csv

        with pytest.raises(NoTradesError, match="No trades to export"):
            export_trades_csv([])
