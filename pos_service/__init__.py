"""Reference POS backend: product list and order creation over HTTP."""

__version__ = "1.0.0"
