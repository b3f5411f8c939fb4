"""Order snapshot models."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import enum


class PaymentStatus(str, enum.Enum):
    """Payment status of an order."""
    PENDING = 'pending'
    PAID = 'paid'
    FAILED = 'failed'
    REFUNDED = 'refunded'


class OrderStatus(str, enum.Enum):
    """Fulfilment status of an order."""
    PLACED = 'placed'
    CONFIRMED = 'confirmed'
    PROCESSING = 'processing'
    SHIPPED = 'shipped'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'


class DeliveryMethod(str, enum.Enum):
    TRANSPORT_OFFICE = 'transport_office'
    ON_THE_GO = 'on_the_go'
    HOME_DELIVERY = 'home_delivery'


def _parse_status(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or '').strip().lower())
    except ValueError:
        return default


def normalize_payment_status(value) -> PaymentStatus:
    """Map a stored payment status string to the enum (unknown values are pending)."""
    return _parse_status(PaymentStatus, value, PaymentStatus.PENDING)


def normalize_order_status(value) -> OrderStatus:
    """Unknown or missing order statuses read as placed."""
    return _parse_status(OrderStatus, value, OrderStatus.PLACED)


def normalize_delivery_method(value) -> DeliveryMethod:
    return _parse_status(DeliveryMethod, value, DeliveryMethod.TRANSPORT_OFFICE)


@dataclass(frozen=True)
class CustomerDetails:
    """Customer block already resolved to printable strings."""

    name: str
    address: str
    contact: str


@dataclass(frozen=True)
class InvoiceLineItem:
    """
    Line item frozen at order time.

    Never re-derived from the live product, so later price changes do not
    alter historical invoices.
    """

    product_code: str
    name: str
    quantity: int
    unit_rate: Decimal
    discount_percentage: Decimal
    base_price: Optional[Decimal] = None

    @property
    def actual_amount(self) -> Decimal:
        return self.quantity * self.unit_rate

    @property
    def discount_amount(self) -> Decimal:
        return self.actual_amount * self.discount_percentage / 100

    @property
    def line_total(self) -> Decimal:
        return self.actual_amount - self.discount_amount

    @property
    def unit_offer_price(self) -> Decimal:
        return self.unit_rate - self.unit_rate * self.discount_percentage / 100

    def __repr__(self):
        return f"<InvoiceLineItem(code='{self.product_code}', qty={self.quantity}, rate={self.unit_rate})>"


@dataclass(frozen=True)
class OrderSummary:
    """Pricing snapshot stored on the order when it was placed."""

    total_price: Optional[Decimal] = None
    total_savings: Optional[Decimal] = None
    total_offer_price: Optional[Decimal] = None
    packaging_price: Optional[Decimal] = None
    total_with_packaging: Optional[Decimal] = None
    total_items: Optional[int] = None
    total_profit: Optional[Decimal] = None

    def to_dict(self):
        return {
            'totalItems': self.total_items,
            'totalPrice': self.total_price,
            'totalOfferPrice': self.total_offer_price,
            'totalSavings': self.total_savings,
            'packagingPrice': self.packaging_price,
            'totalWithPackaging': self.total_with_packaging,
            'totalProfit': self.total_profit,
        }
