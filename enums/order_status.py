from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"          # Created, waiting for processing
    PROCESSING = "processing"    # Being prepared by staff
    SHIPPED = "shipped"          # Handed over to the carrier
    DELIVERED = "delivered"      # Received by the customer
    CANCELLED = "cancelled"      # Cancelled by admin or customer (excluded from revenue)
