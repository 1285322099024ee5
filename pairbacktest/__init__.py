"""Typed CSV price columns and timing tools for pair-trading backtests."""

__version__ = "0.1.0"

__all__ = ["cli", "csv_parser", "profiler", "rep_tester", "timer"]