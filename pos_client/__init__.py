"""Point-of-sale client: product catalog, cart aggregation and order submission."""

__version__ = "1.0.0"
