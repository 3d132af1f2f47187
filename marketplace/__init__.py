"""Marketplace service for sellers and products with a JSON HTTP API over SQL storage."""

__version__ = "0.1.0"