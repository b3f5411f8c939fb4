"""Product pricing model."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


@dataclass(frozen=True)
class PricingResult:
    """
    Derived prices for a product.

    offer_price is what the customer pays; calculated_original_price is the
    crossed-out "was" price that makes discount_percentage appear on the tag.
    """

    base_price: Decimal
    profit_margin_percentage: Decimal
    discount_percentage: Decimal
    profit_margin_price: Decimal
    calculated_original_price: Decimal
    offer_price: Decimal

    @property
    def price(self) -> Decimal:
        """Legacy listed price (same as calculated_original_price)."""
        return self.calculated_original_price

    @property
    def savings(self) -> Decimal:
        return self.calculated_original_price - self.offer_price

    @property
    def savings_percentage(self) -> int:
        """Whole-number percentage shown on the storefront badge."""
        if self.calculated_original_price <= 0 or self.savings <= 0:
            return 0
        ratio = self.savings / self.calculated_original_price * 100
        return int(ratio.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def to_dict(self):
        return {
            'basePrice': self.base_price,
            'profitMarginPercentage': self.profit_margin_percentage,
            'profitMarginPrice': self.profit_margin_price,
            'discountPercentage': self.discount_percentage,
            'calculatedOriginalPrice': self.calculated_original_price,
            'offerPrice': self.offer_price,
            'price': self.price,
        }
