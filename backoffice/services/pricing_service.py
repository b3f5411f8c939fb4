"""Pricing service: product prices, packaging surcharge and order totals."""
import logging
import re
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from backoffice.exceptions import InvalidInputError
from backoffice.models import (
    PricingResult, PackagingTier, PackagingCostSettings, InvoiceLineItem, OrderSummary
)
from backoffice.utils.number_format import to_decimal

logger = logging.getLogger(__name__)

DEFAULT_PROFIT_MARGIN_PERCENTAGE = Decimal('65')
DEFAULT_DISCOUNT_PERCENTAGE = Decimal('81')
MAX_PROFIT_MARGIN_PERCENTAGE = Decimal('1000')
FALLBACK_COST_RATIO = Decimal('0.6')

ZERO = Decimal('0')
HUNDRED = Decimal('100')


def compute_pricing(base_price, profit_margin_percentage=DEFAULT_PROFIT_MARGIN_PERCENTAGE,
                    discount_percentage=DEFAULT_DISCOUNT_PERCENTAGE) -> PricingResult:
    """
    Derive customer-facing prices from the supplier cost.

    Flow:
    1. profit_margin_price = base_price * (1 + margin/100)
    2. calculated_original_price = profit_margin_price / (1 - discount/100)
    3. offer_price = profit_margin_price

    Example: base 100, margin 65%, discount 81% gives offer 165 and a
    crossed-out price of 868.42...

    No rounding happens here; rounding is a display concern.

    Raises:
        InvalidInputError: base_price <= 0, margin outside [0, 1000]
        or discount outside [0, 100).
    """
    base = to_decimal(base_price, 'basePrice')
    margin = to_decimal(profit_margin_percentage, 'profitMarginPercentage')
    discount = to_decimal(discount_percentage, 'discountPercentage')

    if base <= 0:
        raise InvalidInputError('Base price must be greater than 0')
    if margin < 0 or margin > MAX_PROFIT_MARGIN_PERCENTAGE:
        raise InvalidInputError('Profit margin percentage must be between 0 and 1000')
    if discount < 0 or discount >= HUNDRED:
        raise InvalidInputError('Discount percentage must be between 0 and 99.99')

    profit_margin_price = base * (1 + margin / HUNDRED)
    calculated_original_price = profit_margin_price / (1 - discount / HUNDRED)

    return PricingResult(
        base_price=base,
        profit_margin_percentage=margin,
        discount_percentage=discount,
        profit_margin_price=profit_margin_price,
        calculated_original_price=calculated_original_price,
        offer_price=profit_margin_price,
    )


def compute_packaging_cost(order_value, tiers: Iterable[PackagingTier], is_active: bool = True) -> Decimal:
    """
    Packaging surcharge for an order value.

    Tiers are re-sorted by min_amount even if the caller already sorted them;
    the first tier containing the value wins. Inactive packaging or an empty
    tier table costs 0 whatever the value; otherwise 0 when no tier matches.

    Raises:
        InvalidInputError: if an active lookup gets a value that is not a
        non-negative number.
    """
    tiers = tuple(tiers or ())
    if not is_active or not tiers:
        return ZERO

    value = to_decimal(order_value, 'orderValue')
    if value < 0:
        raise InvalidInputError('Please provide a valid order value')

    sorted_tiers = sorted(tiers, key=lambda tier: tier.min_amount)
    for tier in sorted_tiers:
        if tier.contains(value):
            return tier.cost
    return ZERO


def validate_packaging_tiers(tiers: Sequence[PackagingTier]) -> List[PackagingTier]:
    """
    Validate an admin-supplied tier table and return it sorted by min_amount.

    Raises:
        InvalidInputError: on negative bounds or cost, an empty range,
        or overlapping tiers.
    """
    for index, tier in enumerate(tiers, start=1):
        if tier.min_amount < 0:
            raise InvalidInputError(f'Tier {index}: minAmount must be a non-negative number')
        if tier.max_amount is not None and tier.max_amount <= tier.min_amount:
            raise InvalidInputError(f'Tier {index}: maxAmount must be null or greater than minAmount')
        if tier.cost < 0:
            raise InvalidInputError(f'Tier {index}: cost must be a non-negative number')

    sorted_tiers = sorted(tiers, key=lambda tier: tier.min_amount)
    for current, following in zip(sorted_tiers, sorted_tiers[1:]):
        # Only the last tier may be unbounded
        if current.max_amount is None or current.max_amount > following.min_amount:
            raise InvalidInputError('Packaging cost tiers cannot overlap')

    return sorted_tiers


def update_packaging_settings(is_active, tiers: Optional[Sequence[PackagingTier]] = None,
                              current: Optional[PackagingCostSettings] = None) -> PackagingCostSettings:
    """
    Replace the store's packaging settings wholesale.

    When tiers is None the current tier table is kept and only the active
    flag changes.
    """
    if not isinstance(is_active, bool):
        raise InvalidInputError('isActive must be a boolean value')

    if tiers is None:
        kept = current.tiers if current else ()
        return PackagingCostSettings(is_active=is_active, tiers=tuple(kept))

    sorted_tiers = validate_packaging_tiers(tiers)
    logger.info(f"Packaging settings replaced: active={is_active}, tiers={len(sorted_tiers)}")
    return PackagingCostSettings(is_active=is_active, tiers=tuple(sorted_tiers))


def calculate_total_quantity(received_case, case_quantity: Optional[str]) -> int:
    """
    Total pieces available from received cases.

    case_quantity is free text such as "qty:100 box"; its first number is the
    per-case count.
    """
    if not received_case or not case_quantity:
        return 0
    match = re.search(r'(\d+)', str(case_quantity))
    if not match:
        return 0
    return int(received_case) * int(match.group(1))


def compute_order_summary(items: Sequence[InvoiceLineItem],
                          packaging: Optional[PackagingCostSettings] = None) -> OrderSummary:
    """
    Build the pricing snapshot stored on a new order.

    Packaging is charged on the offer total. Profit uses each item's base
    price, or 60% of its offer price when the snapshot has none.
    """
    total_items = 0
    total_price = ZERO
    total_savings = ZERO
    total_offer_price = ZERO
    total_profit = ZERO

    for item in items:
        total_items += item.quantity
        total_price += item.actual_amount
        total_savings += item.discount_amount
        total_offer_price += item.line_total

        unit_offer = item.unit_offer_price
        base_price = item.base_price if item.base_price else unit_offer * FALLBACK_COST_RATIO
        total_profit += (unit_offer - base_price) * item.quantity

    packaging_price = packaging.calculate_packaging_cost(total_offer_price) if packaging else ZERO

    return OrderSummary(
        total_items=total_items,
        total_price=total_price,
        total_savings=total_savings,
        total_offer_price=total_offer_price,
        packaging_price=packaging_price,
        total_with_packaging=total_offer_price + packaging_price,
        total_profit=total_profit.quantize(Decimal('0.01')),
    )
