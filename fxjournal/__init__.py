"""
FX Trade Journal Coach

Rule-based coaching for a forex trade journal: per-trade feedback
(execution score, strengths, mistakes, patterns, emotional state) and
weekly/monthly performance reviews.

Advisory only. It never places or manages trades.
"""

__version__ = "0.1.0"
