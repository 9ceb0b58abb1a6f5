"""TRAXR - XRPL AMM pool snapshot normalization, caching and trends."""

__version__ = "0.1.0"
