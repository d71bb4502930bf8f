"""Custom exceptions for the POS client."""

from typing import Optional


class PosClientError(Exception):
    """Base exception for all POS client errors."""

    pass


class CatalogLoadError(PosClientError):
    """Raised when the product list cannot be fetched or parsed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to load products: {reason}")


class UnknownProductError(PosClientError, LookupError):
    """Raised when a product id is not in the loaded catalog."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Unknown product: {product_id}")


class EmptyCartError(PosClientError):
    """Raised when submitting a cart with no lines."""

    def __init__(self):
        super().__init__("Your cart is empty!")


class SubmissionInProgressError(PosClientError):
    """Raised when a submit is triggered while another one is in flight."""

    def __init__(self):
        super().__init__("Submission already in progress.")


class OrderRejectedError(PosClientError):
    """Raised when the backend answers an order with a non-success status."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to submit order: {reason}")


class OrderTransportError(PosClientError):
    """Raised when the order call fails before a usable answer arrives."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Order request failed: {reason}")
