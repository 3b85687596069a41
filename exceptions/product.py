"""
Product-catalog exceptions.
"""

from .base import StorefrontException


class ProductException(StorefrontException):
    """Base exception for product-catalog errors."""
    pass


class ProductNotFoundException(ProductException):
    """Raised when a product id is not in the catalog."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} not found",
            details={'product_id': product_id}
        )
        self.product_id = product_id
