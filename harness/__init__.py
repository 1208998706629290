"""Verification harness for the Utility Bill Pay API and UI."""

__version__ = "0.1.0"
