"""Data model, event grouping and SQLite storage for scanning exchange pairs, tokens and swaps on an EVM chain."""

__version__ = "0.1.0"