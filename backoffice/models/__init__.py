"""Models package - exports all value objects."""
from backoffice.models.pricing import PricingResult
from backoffice.models.store import (
    PackagingTier, PackagingCostSettings, StoreDetails, DEFAULT_PACKAGING_TIERS
)
from backoffice.models.order import (
    PaymentStatus, OrderStatus, DeliveryMethod,
    normalize_payment_status, normalize_order_status, normalize_delivery_method,
    CustomerDetails, InvoiceLineItem, OrderSummary
)
from backoffice.models.invoice import InvoiceData, InvoiceFormat

__all__ = [
    # Catalog
    'PricingResult',
    # Store
    'PackagingTier', 'PackagingCostSettings', 'StoreDetails', 'DEFAULT_PACKAGING_TIERS',
    # Orders
    'PaymentStatus', 'OrderStatus', 'DeliveryMethod',
    'normalize_payment_status', 'normalize_order_status', 'normalize_delivery_method',
    'CustomerDetails', 'InvoiceLineItem', 'OrderSummary',
    # Invoices
    'InvoiceData', 'InvoiceFormat',
]
