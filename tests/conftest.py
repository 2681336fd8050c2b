"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Keep the developer's config.yaml and outputs/ out of the test run
_TMP = tempfile.mkdtemp(prefix="fxjournal-tests-")
os.environ["FXJOURNAL_CONFIG"] = str(Path(_TMP) / "config.yaml")
os.environ["FXJOURNAL_OUTPUTS_DIR"] = str(Path(_TMP) / "outputs")
os.environ.setdefault("FXJOURNAL_LOG_LEVEL", "WARNING")

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def trade_data(**overrides) -> dict:
    """A clean, disciplined winning trade (snake_case keys)."""
    data = {
        "date": date(2024, 3, 15),
        "session": "London",
        "currency_pair": "EURUSD",
        "timeframe": "H1",
        "direction": "Buy",
        "entry_price": 1.1000,
        "stop_loss": 1.0950,
        "take_profit": 1.1150,
        "lot_size": 0.5,
        "risk_percentage": 1.0,
        "rr_ratio": 3.0,
        "strategy_name": "Breakout",
        "outcome": "Win",
        "pips": 30,
        "notes": "",
        "emotions_before": "",
        "emotions_during": "",
        "emotions_after": "",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_trade():
    """Factory for validated TradeRecords with overridable fields."""
    from fxjournal.journal.models import TradeRecord

    def _make(**overrides):
        return TradeRecord.model_validate(trade_data(**overrides))

    return _make


@pytest.fixture
def make_feedback():
    """Factory for AnalysisFeedback with overridable fields."""
    from fxjournal.journal.models import AnalysisFeedback

    def _make(**overrides):
        data = {
            "execution_score": 7,
            "strengths": ["Good risk-to-reward ratio"],
            "mistakes": [],
            "suggestion": "Continue journaling trades.",
            "patterns": [],
            "risk_assessment": "good",
            "emotional_state": "calm",
            "analyzed_at": FIXED_NOW,
        }
        data.update(overrides)
        return AnalysisFeedback.model_validate(data)

    return _make


@pytest.fixture
def sample_journal(make_trade):
    """Small journal, most-recent-first, spanning two weeks."""
    return [
        make_trade(date=date(2024, 3, 15), pips=30, strategy_name="Breakout"),
        make_trade(
            date=date(2024, 3, 14),
            session="NY",
            currency_pair="GBPUSD",
            outcome="Loss",
            pips=-20,
            rr_ratio=1.5,
            strategy_name="Pullback",
        ),
        make_trade(
            date=date(2024, 3, 12),
            session="Asia",
            currency_pair="USDJPY",
            outcome="BE",
            pips=0,
            rr_ratio=2.0,
            strategy_name="Pullback",
        ),
        make_trade(
            date=date(2024, 3, 6),
            outcome="Win",
            pips=12,
            rr_ratio=2.0,
            strategy_name="Breakout",
        ),
    ]


@pytest.fixture
def journal_csv(tmp_path):
    """CSV journal with camelCase headers, written in file order."""
    content = (
        "date,session,currencyPair,timeframe,direction,entryPrice,stopLoss,takeProfit,"
        "lotSize,riskPercentage,rrRatio,strategyName,outcome,pips,notes,"
        "emotionsBefore,emotionsDuring,emotionsAfter\n"
        "2024-03-12,London,eurusd,H1,Buy,1.1,1.095,1.115,0.5,1,3,Breakout,Win,30,,calm,,\n"
        "2024-03-14,NY,GBPUSD,M15,Sell,1.27,1.275,1.26,0.3,2.5,2,Pullback,Loss,-25,"
        "felt impulsive,fomo,,frustrated\n"
        "2024-03-14,Asia,USDJPY,H4,Buy,150.1,149.6,151.1,0.2,1,2,Breakout,BE,0,,,,\n"
    )
    path = tmp_path / "journal.csv"
    path.write_text(content)
    return path
