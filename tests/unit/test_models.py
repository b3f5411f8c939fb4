"""
Unit tests for order and store value objects.
"""

import pytest
from decimal import Decimal

from backoffice.exceptions import InvalidInputError
from backoffice.models import (
    DeliveryMethod, OrderStatus, PaymentStatus, PackagingCostSettings,
    normalize_delivery_method, normalize_order_status, normalize_payment_status
)


class TestOrderEnums:
    """Tests for parsing stored status strings."""

    def test_payment_status(self):
        """Test known, mixed-case and unknown payment statuses."""
        assert normalize_payment_status('PAID') is PaymentStatus.PAID
        assert normalize_payment_status(' refunded ') is PaymentStatus.REFUNDED
        assert normalize_payment_status('bogus') is PaymentStatus.PENDING
        assert normalize_payment_status(None) is PaymentStatus.PENDING

    def test_order_status(self):
        """Test every stored order status and the placed default."""
        for status in ['placed', 'confirmed', 'processing', 'shipped', 'delivered', 'cancelled']:
            assert normalize_order_status(status).value == status
        assert normalize_order_status(OrderStatus.CANCELLED) is OrderStatus.CANCELLED
        assert normalize_order_status('lost') is OrderStatus.PLACED

    def test_delivery_method(self):
        """Test delivery methods and the transport office default."""
        assert normalize_delivery_method('on_the_go') is DeliveryMethod.ON_THE_GO
        assert normalize_delivery_method('Home_Delivery') is DeliveryMethod.HOME_DELIVERY
        assert normalize_delivery_method('') is DeliveryMethod.TRANSPORT_OFFICE

    def test_enums_compare_as_strings(self):
        """Test stored values compare equal to the enum members."""
        assert OrderStatus.SHIPPED == 'shipped'
        assert DeliveryMethod.HOME_DELIVERY == 'home_delivery'


class TestPackagingCostSettingsFromDict:
    """Tests for reading stored packaging settings."""

    def test_active_with_tiers(self):
        """Test a stored active tier table."""
        settings = PackagingCostSettings.from_dict({
            'isActive': True,
            'tiers': [{'minAmount': 0, 'maxAmount': 5000, 'cost': 100}],
        })

        assert settings.is_active is True
        assert settings.calculate_packaging_cost(100) == Decimal('100')

    def test_missing_flag_is_inactive(self):
        """Test documents without isActive, or with a null one."""
        assert PackagingCostSettings.from_dict({'tiers': []}).is_active is False
        assert PackagingCostSettings.from_dict({'isActive': None}).is_active is False
        assert PackagingCostSettings.from_dict(None) == PackagingCostSettings()

    @pytest.mark.parametrize('flag', ['false', 'true', 0, 1])
    def test_non_boolean_flag_rejected(self, flag):
        """Test that strings and numbers are not coerced to a boolean."""
        with pytest.raises(InvalidInputError, match='boolean'):
            PackagingCostSettings.from_dict({'isActive': flag, 'tiers': []})
