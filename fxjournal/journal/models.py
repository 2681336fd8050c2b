"""
Pydantic models for the trade journal.

Models:
- TradeRecord: A validated forex trade as logged by the trader
- AnalysisFeedback: Per-trade coaching feedback stored alongside the trade
- RankedLabel: A "best of" label with its backing metric
- PeriodReview: Weekly/monthly performance review
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def round_half_up(value: float, places: int = 0) -> float:
    """Round to a number of decimal places, halves away from zero (31.25 -> 31.3)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class Session(str, Enum):
    """Market session the trade was taken in."""

    LONDON = "London"
    NY = "NY"
    ASIA = "Asia"
    SYDNEY = "Sydney"


class Direction(str, Enum):
    """Trade direction enum."""

    BUY = "Buy"
    SELL = "Sell"


class Outcome(str, Enum):
    """Trade outcome enum."""

    WIN = "Win"
    LOSS = "Loss"
    BREAKEVEN = "BE"


class Timeframe(str, Enum):
    """Chart timeframe the trade was planned on."""

    M1 = "M1"
    M5 = "M5"
    M15 = "M15"
    M30 = "M30"
    H1 = "H1"
    H4 = "H4"
    D1 = "D1"
    W1 = "W1"
    MN = "MN"


class RiskAssessment(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"
    DANGEROUS = "dangerous"


class EmotionalState(str, Enum):
    CALM = "calm"
    CONFIDENT = "confident"
    FEARFUL = "fearful"
    GREEDY = "greedy"
    IMPULSIVE = "impulsive"
    REVENGE = "revenge"
    MIXED = "mixed"


class ReviewPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ExecutionTrend(str, Enum):
    IMPROVING = "Improving"
    STABLE = "Stable"
    NEEDS_ATTENTION = "Needs attention"


class RiskGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class TradeValidationError(ValueError):
    """Raised when a journal row cannot be turned into a TradeRecord."""

    def __init__(self, row: Any, error: ValidationError):
        self.row = row
        self.error = error
        fields = ", ".join(
            ".".join(str(p) for p in e["loc"]) or "<root>" for e in error.errors()
        )
        super().__init__(f"Invalid trade at row {row}: {fields}")


class JournalModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to JSON-compatible dict with the journal's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class AnalysisFeedback(JournalModel):
    """Coaching feedback for a single trade."""

    model_config = ConfigDict(frozen=True)

    execution_score: int = Field(ge=1, le=10)
    strengths: list[str] = Field(min_length=1)
    mistakes: list[str] = Field(default_factory=list)
    suggestion: str
    patterns: list[str] = Field(default_factory=list)
    risk_assessment: RiskAssessment
    emotional_state: EmotionalState
    analyzed_at: datetime


class TradeRecord(JournalModel):
    """A single logged forex trade."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: date
    session: Session
    currency_pair: str = Field(min_length=1)
    timeframe: Timeframe
    direction: Direction
    entry_price: float = Field(ge=0)
    stop_loss: float = Field(ge=0)
    take_profit: float = Field(ge=0)
    lot_size: float = Field(ge=0.01)
    risk_percentage: float = Field(ge=0.1, le=10)
    rr_ratio: float = Field(ge=0.1)
    strategy_name: str = Field(min_length=1)
    outcome: Outcome
    pips: float
    notes: str = ""
    emotions_before: str = ""
    emotions_during: str = ""
    emotions_after: str = ""
    ai_feedback: Optional[AnalysisFeedback] = None

    @field_validator("currency_pair")
    @classmethod
    def _upper_pair(cls, v: str) -> str:
        return v.upper()

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, v: Any) -> Any:
        # Journal exports carry full timestamps; only the calendar date matters.
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @field_validator("notes", "emotions_before", "emotions_during", "emotions_after", mode="before")
    @classmethod
    def _blank_text(cls, v: Any) -> Any:
        return "" if v is None else v

    def with_feedback(self, feedback: AnalysisFeedback) -> "TradeRecord":
        """Return a copy of this trade carrying the given feedback."""
        return self.model_copy(update={"ai_feedback": feedback})


class RankedLabel(JournalModel):
    """Best strategy/session/pair label with the metric that ranked it."""

    model_config = ConfigDict(frozen=True)

    name: str
    metric: Optional[float] = None
    unit: str = "win_rate"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display(self) -> str:
        if self.metric is None:
            return self.name
        if self.unit == "pips":
            return f"{self.name} ({round_half_up(self.metric, 1):+.1f} pips)"
        return f"{self.name} ({round_half_up(self.metric):.0f}% WR)"

    def __str__(self) -> str:
        return self.display


NOT_AVAILABLE = RankedLabel(name="N/A")


class PeriodReview(JournalModel):
    """Weekly or monthly performance review."""

    model_config = ConfigDict(frozen=True)

    period: ReviewPeriod
    trade_count: int = 0
    win_rate: Optional[float] = None
    avg_rr: Optional[float] = Field(default=None, alias="avgRR")
    net_pips: Optional[float] = None
    best_strategy: Optional[RankedLabel] = None
    best_session: Optional[RankedLabel] = None
    best_pair: Optional[RankedLabel] = None
    common_mistakes: list[str] = Field(default_factory=list)
    psychological_weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(min_length=1, max_length=3)
    execution_trend: Optional[ExecutionTrend] = None
    risk_management_grade: Optional[RiskGrade] = None
    summary: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.trade_count == 0


def parse_trade(data: dict[str, Any], row: Any = None) -> TradeRecord:
    """
    Validate a raw journal row into a TradeRecord.

    Args:
        data: Mapping with camelCase or snake_case keys
        row: Row identifier used in the error message

    Returns:
        TradeRecord

    Raises:
        TradeValidationError: If the row fails validation
    """
    try:
        return TradeRecord.model_validate(data)
    except ValidationError as e:
        raise TradeValidationError(row, e) from e
