"""Audition Judging Platform: score aggregation and deliberation transfer."""

__version__ = "1.0.0"
