"""Store configuration models."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from backoffice.exceptions import InvalidInputError
from backoffice.utils.number_format import to_decimal


@dataclass(frozen=True)
class PackagingTier:
    """
    One packaging-cost bracket.

    An order value falls in the tier when min_amount <= value < max_amount;
    max_amount None means the tier has no upper limit.
    """

    min_amount: Decimal
    max_amount: Optional[Decimal]
    cost: Decimal

    def contains(self, value: Decimal) -> bool:
        if value < self.min_amount:
            return False
        return self.max_amount is None or value < self.max_amount

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PackagingTier':
        max_amount = data.get('maxAmount')
        return cls(
            min_amount=to_decimal(data.get('minAmount'), 'minAmount'),
            max_amount=None if max_amount is None else to_decimal(max_amount, 'maxAmount'),
            cost=to_decimal(data.get('cost'), 'cost'),
        )

    def to_dict(self):
        return {'minAmount': self.min_amount, 'maxAmount': self.max_amount, 'cost': self.cost}

    def __repr__(self):
        upper = self.max_amount if self.max_amount is not None else 'inf'
        return f"<PackagingTier({self.min_amount}-{upper}, cost={self.cost})>"


DEFAULT_PACKAGING_TIERS: Tuple[PackagingTier, ...] = (
    PackagingTier(Decimal('0'), Decimal('5000'), Decimal('100')),
    PackagingTier(Decimal('5000'), Decimal('10000'), Decimal('200')),
    PackagingTier(Decimal('10000'), Decimal('20000'), Decimal('300')),
    PackagingTier(Decimal('20000'), None, Decimal('500')),
)


@dataclass(frozen=True)
class PackagingCostSettings:
    """Packaging surcharge settings owned by the store (inactive by default)."""

    is_active: bool = False
    tiers: Tuple[PackagingTier, ...] = ()

    def calculate_packaging_cost(self, order_value) -> Decimal:
        """Packaging cost for an order value under these settings."""
        from backoffice.services.pricing_service import compute_packaging_cost
        return compute_packaging_cost(order_value, self.tiers, self.is_active)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PackagingCostSettings':
        if not data:
            return cls()
        tiers = tuple(PackagingTier.from_dict(tier) for tier in data.get('tiers') or [])
        is_active = data.get('isActive')
        if is_active is None:
            is_active = False
        if not isinstance(is_active, bool):
            raise InvalidInputError('isActive must be a boolean value')
        return cls(is_active=is_active, tiers=tiers)

    def to_dict(self):
        return {'isActive': self.is_active, 'tiers': [tier.to_dict() for tier in self.tiers]}


@dataclass(frozen=True)
class StoreDetails:
    """Store identity printed in the invoice header and footer."""

    name: str
    website: str = ''
    address: str = ''
    contact_email: str = ''
    contact_phone: str = ''
    packaging: PackagingCostSettings = field(default_factory=PackagingCostSettings)

    @classmethod
    def from_config(cls, config) -> 'StoreDetails':
        return cls(
            name=config.STORE_NAME,
            website=config.STORE_WEBSITE,
            address=config.STORE_ADDRESS,
            contact_email=config.STORE_CONTACT_EMAIL,
            contact_phone=config.STORE_CONTACT_PHONE,
        )

    def contact_lines(self) -> List[str]:
        lines = []
        if self.contact_phone:
            lines.append(f"WhatsApp: {self.contact_phone}")
        if self.contact_email:
            lines.append(f"Email: {self.contact_email}")
        return lines
