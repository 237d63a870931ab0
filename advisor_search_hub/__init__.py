"""Advisor Search Hub - filter validation and query monitoring for the advisor directory."""

__version__ = "0.1.0"
