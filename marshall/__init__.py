"""Threshold-gated command fan-out over SSH."""

__version__ = "0.1.0"
