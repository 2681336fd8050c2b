"""Tests for execution scoring and risk assessment."""

from hypothesis import given, settings, strategies as st
import pytest

from fxjournal.journal.models import RiskAssessment, TradeRecord

EMOTION_WORDS = ["", "panic", "calm", "frustrated", "fomo", "confident", "anxious"]


@st.composite
def valid_trades(draw, rr_ratio=st.floats(min_value=0.1, max_value=5)):
    """Any trade that passes journal validation."""
    outcome = draw(st.sampled_from(["Win", "Loss", "BE"]))
    if outcome == "Win":
        pips = draw(st.floats(min_value=0, max_value=80))
    elif outcome == "Loss":
        pips = -draw(st.floats(min_value=0, max_value=80))
    else:
        pips = 0.0
    return TradeRecord.model_validate(
        {
            "date": "2024-03-15",
            "session": draw(st.sampled_from(["London", "NY", "Asia", "Sydney"])),
            "currency_pair": "EURUSD",
            "timeframe": "H1",
            "direction": draw(st.sampled_from(["Buy", "Sell"])),
            "entry_price": 1.1000,
            "stop_loss": draw(st.sampled_from([1.0950, 1.1000])),
            "take_profit": 1.1150,
            "lot_size": 0.5,
            "risk_percentage": draw(st.floats(min_value=0.1, max_value=10)),
            "rr_ratio": draw(rr_ratio),
            "strategy_name": "Breakout",
            "outcome": outcome,
            "pips": pips,
            "emotions_before": draw(st.sampled_from(EMOTION_WORDS)),
            "emotions_during": draw(st.sampled_from(EMOTION_WORDS)),
            "notes": draw(st.sampled_from(["", "impulsive entry", "waited for the retest"])),
        }
    )


class TestExecutionScore:
    """Tests for calculate_execution_score."""

    def test_textbook_trade_scores_ten(self, make_trade):
        """Base 5 +2 R:R +1 risk +2 outcome +1 stop, clamped to 10."""
        from fxjournal.coach.scoring import calculate_execution_score

        assert calculate_execution_score(make_trade()) == 10

    def test_neutral_trade(self, make_trade):
        """Middling R:R and risk on a break-even only earns the stop point."""
        from fxjournal.coach.scoring import calculate_execution_score

        trade = make_trade(rr_ratio=1.5, risk_percentage=1.5, outcome="BE", pips=0)
        assert calculate_execution_score(trade) == 6

    def test_stop_at_entry_earns_nothing(self, make_trade):
        """A stop equal to the entry price gets no stop-loss point."""
        from fxjournal.coach.scoring import calculate_execution_score

        trade = make_trade(
            rr_ratio=1.5, risk_percentage=1.5, outcome="BE", pips=0, stop_loss=1.1000
        )
        assert calculate_execution_score(trade) == 5

    def test_worst_case_clamps_to_one(self, make_trade):
        """Every penalty at once cannot go below 1."""
        from fxjournal.coach.scoring import calculate_execution_score

        trade = make_trade(
            rr_ratio=0.5,
            risk_percentage=5,
            outcome="Loss",
            pips=-40,
            emotions_during="panic",
        )
        assert calculate_execution_score(trade) == 1

    @pytest.mark.parametrize(
        "pips,expected",
        [(20, 7), (20.5, 8)],
    )
    def test_big_win_threshold(self, make_trade, pips, expected):
        """Only wins strictly above 20 pips get the larger bonus."""
        from fxjournal.coach.scoring import calculate_execution_score

        trade = make_trade(rr_ratio=1.5, risk_percentage=1.5, pips=pips)
        assert calculate_execution_score(trade) == expected

    @pytest.mark.parametrize(
        "pips,expected",
        [(-30, 6), (-31, 5)],
    )
    def test_big_loss_threshold(self, make_trade, pips, expected):
        """Only losses strictly above 30 pips are penalised."""
        from fxjournal.coach.scoring import calculate_execution_score

        trade = make_trade(rr_ratio=1.5, risk_percentage=1.5, outcome="Loss", pips=pips)
        assert calculate_execution_score(trade) == expected

    @pytest.mark.parametrize(
        "risk,points",
        [(0.5, 1), (1, 1), (1.5, 0), (2, 0), (2.5, -1), (3, -1), (3.1, -2), (10, -2)],
    )
    def test_risk_points(self, risk, points):
        """Risk bands: <=1 rewarded, >2 and >3 penalised."""
        from fxjournal.coach.scoring import _risk_points

        assert _risk_points(risk) == points

    @pytest.mark.parametrize(
        "rr,points",
        [(0.5, -1), (0.99, -1), (1, 0), (1.99, 0), (2, 1), (2.99, 1), (3, 2), (5, 2)],
    )
    def test_rr_points(self, rr, points):
        """R:R bands: <1 penalised, >=2 and >=3 rewarded."""
        from fxjournal.coach.scoring import _rr_points

        assert _rr_points(rr) == points

    def test_negative_emotion_costs_two(self, make_trade):
        """Any negative emotion keyword subtracts two points."""
        from fxjournal.coach.scoring import calculate_execution_score

        calm = make_trade(rr_ratio=1.5, risk_percentage=1.5, outcome="BE", pips=0)
        anxious = make_trade(
            rr_ratio=1.5, risk_percentage=1.5, outcome="BE", pips=0, emotions_before="anxious"
        )
        assert calculate_execution_score(calm) - calculate_execution_score(anxious) == 2

    @given(trade=valid_trades())
    @settings(max_examples=200)
    def test_score_always_in_range(self, trade):
        """Any valid trade scores an integer in [1, 10]."""
        from fxjournal.coach.scoring import calculate_execution_score

        score = calculate_execution_score(trade)
        assert isinstance(score, int)
        assert 1 <= score <= 10

    @given(
        trade=valid_trades(),
        rr_a=st.floats(min_value=0.1, max_value=5),
        rr_b=st.floats(min_value=0.1, max_value=5),
    )
    @settings(max_examples=200)
    def test_score_non_decreasing_in_rr(self, trade, rr_a, rr_b):
        """Raising R:R with everything else fixed never lowers the score."""
        from fxjournal.coach.scoring import calculate_execution_score

        low = trade.model_copy(update={"rr_ratio": min(rr_a, rr_b)})
        high = trade.model_copy(update={"rr_ratio": max(rr_a, rr_b)})
        assert calculate_execution_score(low) <= calculate_execution_score(high)


class TestClampScore:
    """Tests for rounding and clamping."""

    def test_rounds_half_up(self):
        from fxjournal.coach.scoring import clamp_score

        assert clamp_score(4.5) == 5
        assert clamp_score(4.49) == 4

    def test_clamps(self):
        from fxjournal.coach.scoring import clamp_score

        assert clamp_score(-3) == 1
        assert clamp_score(12) == 10


class TestAssessRisk:
    """Tests for assess_risk."""

    def test_excellent(self, make_trade):
        """High score, low risk and good R:R."""
        from fxjournal.coach.scoring import assess_risk

        assert assess_risk(make_trade()) == RiskAssessment.EXCELLENT

    def test_good(self, make_trade):
        """Score >= 6 with risk <= 2."""
        from fxjournal.coach.scoring import assess_risk

        trade = make_trade(rr_ratio=1.5, risk_percentage=2, pips=30)
        assert assess_risk(trade) == RiskAssessment.GOOD

    def test_acceptable(self, make_trade):
        """Risk up to 3 with R:R of at least 1."""
        from fxjournal.coach.scoring import assess_risk

        trade = make_trade(rr_ratio=1.5, risk_percentage=2.5, outcome="BE", pips=0)
        assert assess_risk(trade) == RiskAssessment.ACCEPTABLE

    def test_poor_high_risk(self, make_trade):
        from fxjournal.coach.scoring import assess_risk

        trade = make_trade(risk_percentage=4)
        assert assess_risk(trade) == RiskAssessment.POOR

    def test_poor_low_rr(self, make_trade):
        from fxjournal.coach.scoring import assess_risk

        trade = make_trade(rr_ratio=0.5, risk_percentage=1.5, outcome="BE", pips=0)
        assert assess_risk(trade) == RiskAssessment.POOR

    def test_uses_given_score(self, make_trade):
        """A precomputed score is used instead of recomputing."""
        from fxjournal.coach.scoring import assess_risk

        trade = make_trade(rr_ratio=2, risk_percentage=1)
        assert assess_risk(trade, score=5) == RiskAssessment.ACCEPTABLE
        assert assess_risk(trade, score=8) == RiskAssessment.EXCELLENT

    @given(trade=valid_trades())
    @settings(max_examples=200)
    def test_valid_trades_never_dangerous(self, trade):
        """Validated inputs never reach the dangerous grade."""
        from fxjournal.coach.scoring import assess_risk

        assert assess_risk(trade) != RiskAssessment.DANGEROUS
