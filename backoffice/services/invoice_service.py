"""
Invoice service.

Maps stored order documents (camelCase keys, as persisted) into invoice value
objects, issues invoice numbers and produces checked PDF buffers.
"""
import logging
import re
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from typing import Any, Dict, Optional

from config import Config
from backoffice.exceptions import BusinessLogicError, NotFoundError, RenderFailureError
from backoffice.models import (
    CustomerDetails, InvoiceData, InvoiceFormat, InvoiceLineItem, OrderSummary,
    PackagingCostSettings, PaymentStatus, StoreDetails, normalize_payment_status,
    normalize_order_status, normalize_delivery_method
)
from backoffice.services.invoice_pdf import render_invoice
from backoffice.services.pricing_service import DEFAULT_DISCOUNT_PERCENTAGE
from backoffice.utils.formatters import customer_address, customer_contact
from backoffice.utils.invoice_ids import generate_invoice_number
from backoffice.utils.number_format import coerce_decimal, coerce_int

logger = logging.getLogger(__name__)

PDF_MAGIC = b'%PDF'
FIRST_PRODUCT_CODE = 100


def _first(*values):
    """First truthy value, mirroring how snapshot fields fall back to the live product."""
    return next((value for value in values if value), None)


def _first_present(*values):
    """First value actually stored; an explicit 0 counts as stored."""
    return next((value for value in values if value is not None and value != ''), None)


def _parse_datetime(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            logger.warning(f"Unparseable invoice date: {value!r}")
    return None


def _line_item(item: Dict[str, Any], index: int) -> InvoiceLineItem:
    snapshot = item.get('productSnapshot') or {}
    product = item.get('productId')
    if not isinstance(product, dict):
        product = {}

    name = _first(product.get('name'), snapshot.get('name')) or f"Product {index + 1}"
    code = _first(product.get('productCode'), snapshot.get('productCode')) or FIRST_PRODUCT_CODE + index

    rate = coerce_decimal(
        _first_present(item.get('price'), snapshot.get('price'), product.get('price')),
        Decimal('0'),
    )
    discount = coerce_decimal(
        _first_present(item.get('discountPercentage'), snapshot.get('discountPercentage'),
                       product.get('discountPercentage')),
        DEFAULT_DISCOUNT_PERCENTAGE,
    )

    return InvoiceLineItem(
        product_code=str(code),
        name=str(name),
        quantity=coerce_int(item.get('quantity'), 1),
        unit_rate=rate,
        discount_percentage=discount,
        base_price=coerce_decimal(snapshot.get('basePrice')),
    )


def _order_summary(data: Optional[Dict[str, Any]]) -> Optional[OrderSummary]:
    if not data:
        return None
    total_items = data.get('totalItems')
    return OrderSummary(
        total_price=coerce_decimal(data.get('totalPrice')),
        total_savings=coerce_decimal(data.get('totalSavings')),
        total_offer_price=coerce_decimal(data.get('totalOfferPrice')),
        packaging_price=coerce_decimal(data.get('packagingPrice')),
        total_with_packaging=coerce_decimal(data.get('totalWithPackaging')),
        total_items=coerce_int(total_items, 0) if total_items is not None else None,
        total_profit=coerce_decimal(data.get('totalProfit')),
    )


def _store_details(store: Optional[Dict[str, Any]], config) -> StoreDetails:
    """Store document values override the configured defaults."""
    defaults = StoreDetails.from_config(config)
    if not store:
        return defaults

    address = store.get('address')
    if isinstance(address, dict):
        address = customer_address(address, default=defaults.address)

    return StoreDetails(
        name=store.get('name') or defaults.name,
        website=store.get('website') or defaults.website,
        address=address or defaults.address,
        contact_email=store.get('contactEmail') or defaults.contact_email,
        contact_phone=store.get('contactPhone') or defaults.contact_phone,
        packaging=PackagingCostSettings.from_dict(store.get('packagingCostSettings')),
    )


def build_invoice_data(order: Dict[str, Any], store: Optional[Dict[str, Any]] = None,
                       config=Config) -> InvoiceData:
    """
    Map an order document into the invoice engine's input.

    Missing content never fails the mapping: every field resolves from the
    item, its snapshot or the live product, and otherwise takes a printable
    default ("Product 3", code 102, quantity 1, discount 81%, rate 0,
    "Customer Name").
    """
    customer = order.get('customerDetails') or {}
    invoice = order.get('invoice') or {}

    items = tuple(_line_item(item, index) for index, item in enumerate(order.get('items') or []))

    return InvoiceData(
        invoice_number=invoice.get('invoiceNumber') or '',
        order_id=order.get('orderId') or '',
        generated_at=_parse_datetime(invoice.get('generatedAt')),
        customer=CustomerDetails(
            name=(customer.get('name') or '').strip() or 'Customer Name',
            address=customer_address(customer.get('address')),
            contact=customer_contact(customer.get('mobile'), customer.get('deliveryContact')),
        ),
        items=items,
        store=_store_details(store, config),
        order_summary=_order_summary(order.get('orderSummary')),
        payment_status=normalize_payment_status(order.get('paymentStatus')),
        order_status=normalize_order_status(order.get('orderStatus')),
        delivery_method=normalize_delivery_method(order.get('deliveryMethod')),
    )


def validate_pdf_buffer(buffer: bytes, min_size: int = Config.MIN_INVOICE_PDF_SIZE) -> bytes:
    """
    Reject output that cannot be a usable invoice.

    Raises:
        RenderFailureError: empty buffer, smaller than min_size, or missing
        the %PDF header.
    """
    if not buffer:
        raise RenderFailureError('PDF buffer is empty')
    if len(buffer) < min_size:
        raise RenderFailureError(
            f'Generated PDF is too small ({len(buffer)} bytes)',
            payload={'size': len(buffer), 'min_size': min_size}
        )
    if not buffer.startswith(PDF_MAGIC):
        raise RenderFailureError('Generated content is not a valid PDF')
    return buffer


def generate_invoice_pdf(order: Dict[str, Any], store: Optional[Dict[str, Any]] = None,
                         config=Config) -> BytesIO:
    """Render the invoice of an order that already has an invoice number."""
    invoice = order.get('invoice') or {}
    if not invoice.get('invoiceNumber'):
        raise NotFoundError(f"Invoice not generated yet for order {order.get('orderId')}")

    invoice_data = build_invoice_data(order, store, config)
    logger.info(f"Starting PDF generation for order: {invoice_data.order_id}")

    pdf = render_invoice(invoice_data, InvoiceFormat.from_config(config))
    validate_pdf_buffer(pdf, config.MIN_INVOICE_PDF_SIZE)

    logger.info(f"PDF generated successfully for {invoice_data.invoice_number}, size: {len(pdf)} bytes")
    buffer = BytesIO(pdf)
    buffer.seek(0)
    return buffer


def issue_invoice(order: Dict[str, Any], issued_at: Optional[datetime] = None,
                  generated_by: str = 'system') -> Dict[str, Any]:
    """
    Invoice block for a paid order.

    Orders that already carry an invoice number get their existing block
    back unchanged. The caller persists the returned block on the order.
    """
    if normalize_payment_status(order.get('paymentStatus')) is not PaymentStatus.PAID:
        raise BusinessLogicError('Invoice can only be generated for paid orders')

    existing = order.get('invoice') or {}
    if existing.get('invoiceNumber'):
        return dict(existing)

    issued_at = issued_at or datetime.now()
    invoice_number = generate_invoice_number(order.get('orderId'), issued_at.date())
    logger.info(f"Invoice {invoice_number} issued for order {order.get('orderId')}")

    return {
        'invoiceNumber': invoice_number,
        'generatedAt': issued_at,
        'generatedBy': generated_by,
    }


def invoice_filename(order_id: str) -> str:
    """Download filename with everything but letters and digits stripped from the order id."""
    clean_order_id = re.sub(r'[^a-zA-Z0-9]', '', order_id or '')
    return f"invoice_{clean_order_id}.pdf"
