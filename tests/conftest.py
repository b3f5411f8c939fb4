import pytest
from datetime import datetime
from decimal import Decimal

from backoffice.models import (
    CustomerDetails, InvoiceData, InvoiceLineItem, OrderSummary, PackagingTier,
    PackagingCostSettings, PaymentStatus, StoreDetails, DEFAULT_PACKAGING_TIERS
)


class FixedConfig:
    """Configuration with fixed store details for rendering tests."""
    ENV = 'testing'
    LOG_LEVEL = 'DEBUG'
    STORE_NAME = 'TEST CRACKERS'
    STORE_WEBSITE = 'www.testcrackers.example'
    STORE_ADDRESS = '1, Test Street, Sivakasi-626123'
    STORE_CONTACT_EMAIL = 'orders@testcrackers.example'
    STORE_CONTACT_PHONE = '+91 9000000000'
    CURRENCY_LABEL = 'Rs.'
    CURRENCY_WORDS = 'Rupees'
    INVOICE_DATE_FORMAT = '%d/%m/%Y'
    INVOICE_THANK_YOU = 'Thank you for business with us!'
    MIN_INVOICE_PDF_SIZE = 1000
    DEFAULT_PROFIT_MARGIN_PERCENTAGE = '65'
    DEFAULT_DISCOUNT_PERCENTAGE = '81'


@pytest.fixture
def config():
    """Fixed configuration (no .env influence)."""
    return FixedConfig


@pytest.fixture
def store():
    """Store details with packaging charges switched on."""
    return StoreDetails(
        name='TEST CRACKERS',
        website='www.testcrackers.example',
        address='1, Test Street, Sivakasi-626123',
        contact_email='orders@testcrackers.example',
        contact_phone='+91 9000000000',
        packaging=PackagingCostSettings(is_active=True, tiers=DEFAULT_PACKAGING_TIERS),
    )


@pytest.fixture
def tiers():
    """Default packaging tier table, shuffled to exercise sorting."""
    return [DEFAULT_PACKAGING_TIERS[2], DEFAULT_PACKAGING_TIERS[0],
            DEFAULT_PACKAGING_TIERS[3], DEFAULT_PACKAGING_TIERS[1]]


@pytest.fixture
def make_items():
    """Factory for n line items with predictable values."""
    def _make(count, rate='100', discount='81'):
        return tuple(
            InvoiceLineItem(
                product_code=str(100 + i),
                name=f'Product {i + 1}',
                quantity=(i % 4) + 1,
                unit_rate=Decimal(rate),
                discount_percentage=Decimal(discount),
            )
            for i in range(count)
        )
    return _make


@pytest.fixture
def make_invoice(store, make_items):
    """Factory for InvoiceData with n items."""
    def _make(count, order_summary=None, items=None):
        return InvoiceData(
            invoice_number='INV-210725-001',
            order_id='ORD-210725-001',
            generated_at=datetime(2025, 7, 21, 10, 30),
            customer=CustomerDetails(
                name='John Doe',
                address='12/417, Jeyam Nagar, Sivakasi, Tamil Nadu, 626189',
                contact='9876543210, 9123456780',
            ),
            items=items if items is not None else make_items(count),
            store=store,
            order_summary=order_summary,
            payment_status=PaymentStatus.PAID,
        )
    return _make


@pytest.fixture
def order_document():
    """Paid order document as stored, with an issued invoice."""
    return {
        'orderId': 'ORD-210725-001',
        'paymentStatus': 'paid',
        'invoice': {
            'invoiceNumber': 'INV-210725-001',
            'generatedAt': '2025-07-21T10:30:00.000Z',
            'generatedBy': 'system',
        },
        'customerDetails': {
            'name': 'John Doe',
            'mobile': '9876543210',
            'deliveryContact': '9123456780',
            'address': {
                'street': '12/417, Jeyam Nagar',
                'landmark': 'Near Main Market',
                'nearestTown': 'Meenampatti',
                'district': 'Sivakasi',
                'state': 'Tamil Nadu',
                'pincode': '626189',
                'country': 'India',
            },
        },
        'items': [
            {
                'productSnapshot': {
                    'productCode': 'SC-101',
                    'name': 'Flower Pots Big',
                    'price': 868.42,
                    'basePrice': 100,
                    'discountPercentage': 81,
                },
                'quantity': 2,
                'price': 868.42,
                'discountPercentage': 81,
            },
            {
                'productSnapshot': {'name': 'Sparklers 10cm', 'price': 50},
                'quantity': 3,
            },
        ],
        'orderSummary': {
            'totalItems': 5,
            'totalPrice': 1886.84,
            'totalSavings': 1528.34,
            'totalOfferPrice': 358.50,
            'packagingPrice': 100,
            'totalWithPackaging': 458.50,
        },
    }
