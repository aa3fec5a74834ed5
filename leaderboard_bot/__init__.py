"""Moderation-gated leaderboard submission bot."""

__version__ = "1.0.0"
