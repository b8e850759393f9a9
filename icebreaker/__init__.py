"""Icebreaker Question API: random team-building questions with ratings."""

__version__ = "0.1.0"
