"""Funding-rate mean-reversion signal desk."""

__version__ = "0.1.0"
