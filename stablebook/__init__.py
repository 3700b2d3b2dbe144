"""Stablebook: multi-tenant horse stable records service."""

__version__ = "0.1.0"
