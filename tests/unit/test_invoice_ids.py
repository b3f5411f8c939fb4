"""
Unit tests for order ids and invoice numbers.
"""

from datetime import date

from backoffice.utils.invoice_ids import generate_order_id, generate_invoice_number, parse_order_id


class TestOrderIds:
    """Tests for ORD-DDMMYY-NNN ids."""

    def test_generate(self):
        """Test sequence numbering per day."""
        assert generate_order_id(date(2025, 7, 21), 0) == 'ORD-210725-001'
        assert generate_order_id(date(2025, 7, 21), 41) == 'ORD-210725-042'

    def test_parse(self):
        """Test splitting a valid id."""
        parsed = parse_order_id('ORD-210725-042')

        assert parsed == {'day': 21, 'month': 7, 'year': 2025, 'order_number': 42, 'is_valid': True}

    def test_parse_invalid(self):
        """Test legacy ids are reported as invalid."""
        assert parse_order_id('ORD1234') == {'is_valid': False, 'original': 'ORD1234'}


class TestInvoiceNumbers:
    """Tests for invoice numbers derived from order ids."""

    def test_prefix_swapped(self):
        """Test new-style ids keep their date and sequence."""
        assert generate_invoice_number('ORD-210725-001') == 'INV-210725-001'

    def test_legacy_id(self):
        """Test legacy ids use today's date and their last three characters."""
        assert generate_invoice_number('LEGACY789', today=date(2025, 8, 1)) == 'INV-010825-789'
