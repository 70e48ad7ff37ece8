"""Validated login/signup submission core for the e-voting client."""

__version__ = "0.1.0"
