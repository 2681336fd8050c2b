"""
Tunable cut-offs for the trade coach.

These are empirically chosen values, not derived ones. They are grouped here
so they can be overridden from config.yaml (``coach.thresholds``) instead of
being edited in the rules.
"""

from dataclasses import dataclass, fields, replace
from typing import Any
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Thresholds:
    """Heuristic thresholds used by scoring, findings and pattern detection."""

    # Execution score
    big_win_pips: float = 20.0  # Win above this earns the larger outcome bonus
    big_loss_pips: float = 30.0  # Loss above this (absolute) is penalised

    # Strengths / mistakes
    strong_win_pips: float = 30.0
    wide_stop_pips_per_rr: float = 20.0  # Loss > rr * this => stop too wide / not honored

    # History window
    history_limit: int = 20
    min_history: int = 3
    recent_window: int = 5

    # Historical patterns
    over_trading_same_day: int = 3
    early_exit_min_wins: int = 2
    early_exit_max_pips: float = 15.0
    late_entry_min_losses: int = 2

    @classmethod
    def from_mapping(cls, overrides: dict[str, Any] | None) -> "Thresholds":
        """Build thresholds from a config mapping, ignoring unknown keys."""
        if not overrides:
            return cls()
        known = {f.name: f.type for f in fields(cls)}
        values = {}
        for key, value in overrides.items():
            if key not in known:
                logger.warning(f"Ignoring unknown coach threshold: {key}")
                continue
            if value is None:
                logger.warning(f"Ignoring empty coach threshold: {key}")
                continue
            values[key] = int(value) if known[key] in (int, "int") else float(value)
        return replace(cls(), **values)


DEFAULT_THRESHOLDS = Thresholds()
