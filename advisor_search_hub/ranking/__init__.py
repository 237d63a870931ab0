"""Advisor ranking helpers."""

from .composite import calculate_composite_score

__all__ = ["calculate_composite_score"]
