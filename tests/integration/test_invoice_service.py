"""
Integration tests for the invoice service (order document to PDF).
"""

import pytest
from datetime import datetime
from decimal import Decimal

from backoffice.exceptions import BusinessLogicError, InvalidInputError, NotFoundError, RenderFailureError
from backoffice.models import DeliveryMethod, OrderStatus, PaymentStatus
from backoffice.services.invoice_layout import build_invoice_layout
from backoffice.services.invoice_service import (
    build_invoice_data, generate_invoice_pdf, issue_invoice, validate_pdf_buffer, invoice_filename
)


class TestBuildInvoiceData:
    """Tests for mapping stored orders."""

    def test_maps_order_document(self, order_document, config):
        """Test a complete order."""
        invoice = build_invoice_data(order_document, config=config)

        assert invoice.invoice_number == 'INV-210725-001'
        assert invoice.order_id == 'ORD-210725-001'
        assert invoice.generated_at.strftime('%d/%m/%Y %H:%M') == '21/07/2025 10:30'
        assert invoice.payment_status is PaymentStatus.PAID
        assert invoice.customer.name == 'John Doe'
        assert invoice.customer.address == \
            '12/417, Jeyam Nagar, Near Main Market, Meenampatti, Sivakasi, Tamil Nadu, 626189'
        assert invoice.customer.contact == '9876543210, 9123456780'
        assert invoice.store.name == 'TEST CRACKERS'
        assert invoice.order_summary.total_with_packaging == Decimal('458.5')

        first, second = invoice.items
        assert (first.product_code, first.name, first.quantity) == ('SC-101', 'Flower Pots Big', 2)
        assert first.unit_rate == Decimal('868.42')
        assert first.base_price == Decimal('100')
        assert (second.product_code, second.name, second.quantity) == ('101', 'Sparklers 10cm', 3)
        assert second.unit_rate == Decimal('50')
        assert second.discount_percentage == Decimal('81')

    def test_defaults_for_missing_content(self, config):
        """Test placeholders when the order has almost nothing."""
        invoice = build_invoice_data({'items': [{}]}, config=config)

        item = invoice.items[0]
        assert (item.product_code, item.name, item.quantity) == ('100', 'Product 1', 1)
        assert item.unit_rate == Decimal('0')
        assert item.discount_percentage == Decimal('81')
        assert invoice.customer.name == 'Customer Name'
        assert invoice.customer.address == 'Customer Address'
        assert invoice.customer.contact == 'Contact Number'
        assert invoice.order_summary is None
        assert invoice.payment_status is PaymentStatus.PENDING
        assert invoice.order_status is OrderStatus.PLACED
        assert invoice.delivery_method is DeliveryMethod.TRANSPORT_OFFICE

    def test_explicit_zero_discount_kept(self, config):
        """Test an undiscounted item is not given the default discount."""
        order = {'items': [{
            'productSnapshot': {'name': 'Gift Box', 'price': 100, 'discountPercentage': 0},
            'price': 100,
            'discountPercentage': 0,
            'quantity': 1,
        }]}

        invoice = build_invoice_data(order, config=config)
        item = invoice.items[0]

        assert item.discount_percentage == Decimal('0')
        assert item.line_total == item.actual_amount == Decimal('100')
        assert build_invoice_layout(invoice).summary.final_amount == Decimal('100')

    def test_explicit_zero_rate_kept(self, config):
        """Test a stored rate of 0 wins over the snapshot price."""
        order = {'items': [{'productSnapshot': {'price': 50}, 'price': 0}]}

        assert build_invoice_data(order, config=config).items[0].unit_rate == Decimal('0')

    def test_order_lifecycle_fields(self, order_document, config):
        """Test order status and delivery method are read from the document."""
        order_document['orderStatus'] = 'Shipped'
        order_document['deliveryMethod'] = 'home_delivery'

        invoice = build_invoice_data(order_document, config=config)

        assert invoice.order_status is OrderStatus.SHIPPED
        assert invoice.delivery_method is DeliveryMethod.HOME_DELIVERY

    def test_item_price_before_snapshot_and_product(self, config):
        """Test resolution order for names and rates."""
        order = {'items': [{
            'productId': {'name': 'Live Name', 'productCode': 'L1', 'price': 10},
            'productSnapshot': {'name': 'Snapshot Name', 'price': 15},
            'price': 20,
            'quantity': '4',
        }]}

        item = build_invoice_data(order, config=config).items[0]

        assert item.name == 'Live Name'
        assert item.product_code == 'L1'
        assert item.unit_rate == Decimal('20')
        assert item.quantity == 4

    def test_store_document_overrides_config(self, order_document, config):
        """Test store values win over configured defaults."""
        store = {
            'contactPhone': '+91 9999999999',
            'minimumOrderValue': 2500,
            'packagingCostSettings': {
                'isActive': True,
                'tiers': [{'minAmount': 0, 'maxAmount': None, 'cost': 75}],
            },
        }

        details = build_invoice_data(order_document, store, config).store

        assert details.name == 'TEST CRACKERS'
        assert details.contact_phone == '+91 9999999999'
        assert details.contact_email == 'orders@testcrackers.example'
        assert details.packaging.calculate_packaging_cost(10) == Decimal('75')
        assert not hasattr(details, 'minimum_order_value')

    def test_store_is_active_must_be_boolean(self, order_document, config):
        """Test a stored string flag is rejected instead of read as true."""
        store = {'packagingCostSettings': {'isActive': 'false', 'tiers': []}}

        with pytest.raises(InvalidInputError, match='boolean'):
            build_invoice_data(order_document, store, config)


class TestGenerateInvoicePdf:
    """Tests for the checked PDF buffer."""

    def test_generates_pdf(self, order_document, config):
        """Test a paid, invoiced order renders."""
        buffer = generate_invoice_pdf(order_document, config=config)
        pdf = buffer.getvalue()

        assert buffer.tell() == 0
        assert pdf.startswith(b'%PDF')
        assert len(pdf) > 1000

    def test_requires_invoice_number(self, order_document, config):
        """Test orders without an issued invoice are refused."""
        del order_document['invoice']

        with pytest.raises(NotFoundError):
            generate_invoice_pdf(order_document, config=config)

    @pytest.mark.parametrize('buffer', [b'', b'%PDF-1.4', b'x' * 2000])
    def test_bad_buffers_rejected(self, buffer):
        """Test empty, tiny and non-PDF output."""
        with pytest.raises(RenderFailureError):
            validate_pdf_buffer(buffer, 1000)

    def test_valid_buffer_returned(self):
        """Test a plausible buffer passes."""
        pdf = b'%PDF-1.4' + b' ' * 2000

        assert validate_pdf_buffer(pdf, 1000) == pdf


class TestIssueInvoice:
    """Tests for invoice issuing."""

    def test_paid_order_gets_invoice(self, order_document):
        """Test the invoice block for a new invoice."""
        del order_document['invoice']
        issued_at = datetime(2025, 7, 22, 9, 0)

        block = issue_invoice(order_document, issued_at)

        assert block == {
            'invoiceNumber': 'INV-210725-001',
            'generatedAt': issued_at,
            'generatedBy': 'system',
        }

    def test_existing_invoice_kept(self, order_document):
        """Test issuing twice returns the first invoice."""
        block = issue_invoice(order_document, datetime(2026, 1, 1))

        assert block['invoiceNumber'] == 'INV-210725-001'
        assert block['generatedAt'] == '2025-07-21T10:30:00.000Z'

    def test_unpaid_order_rejected(self, order_document):
        """Test only paid orders are invoiced."""
        order_document['paymentStatus'] = 'pending'

        with pytest.raises(BusinessLogicError, match='paid'):
            issue_invoice(order_document)

    def test_filename(self):
        """Test special characters are stripped."""
        assert invoice_filename('ORD-210725-001') == 'invoice_ORD210725001.pdf'
