"""Segmented key-value store, its HTTP service and backend request reports."""

__version__ = "0.1.0"