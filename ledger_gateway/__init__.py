"""Ledger gateway: business network health endpoint with an Object Storage wallet."""

__version__ = "0.1.0"
