"""Invoice input models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from backoffice.models.order import (
    CustomerDetails, DeliveryMethod, InvoiceLineItem, OrderStatus, OrderSummary, PaymentStatus
)
from backoffice.models.store import StoreDetails


@dataclass(frozen=True)
class InvoiceFormat:
    """Formatting choices passed into every render call."""

    currency_label: str = 'Rs.'
    currency_words: str = 'Rupees'
    words_suffix: str = 'Only'
    date_format: str = '%d/%m/%Y'
    thank_you: str = 'Thank you for business with us!'

    @classmethod
    def from_config(cls, config) -> 'InvoiceFormat':
        return cls(
            currency_label=config.CURRENCY_LABEL,
            currency_words=config.CURRENCY_WORDS,
            date_format=config.INVOICE_DATE_FORMAT,
            thank_you=config.INVOICE_THANK_YOU,
        )


@dataclass(frozen=True)
class InvoiceData:
    """Everything the layout engine needs to render one invoice."""

    invoice_number: str
    order_id: str
    generated_at: Optional[datetime]
    customer: CustomerDetails
    items: Tuple[InvoiceLineItem, ...]
    store: StoreDetails
    order_summary: Optional[OrderSummary] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    order_status: OrderStatus = OrderStatus.PLACED
    delivery_method: DeliveryMethod = DeliveryMethod.TRANSPORT_OFFICE

    def __repr__(self):
        return f"<InvoiceData(invoice_number='{self.invoice_number}', items={len(self.items)})>"
