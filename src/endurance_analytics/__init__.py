"""Endurance Analytics - training load and race performance analytics engine."""

__version__ = "0.1.0"
