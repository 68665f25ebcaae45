# storefront/domain/pricing.py
"""
Promotion evaluator.

Picks the single best general promotion for a product on a given day.
Promotions are never combined; a malformed promotion is skipped, never raised.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional

from storefront.utils.settings import GENERAL_DISCOUNT_CODE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PERCENTAGE = "percentage"
FIXED = "fixed"
PROMOTION_TYPES = (PERCENTAGE, FIXED)

ALL_PRODUCTS = "All Products"
CATEGORY_PREFIX = "Category: "

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ProductSnapshot:
    id: int
    name: str
    price: Decimal
    stock: int
    category: str
    sku: str


@dataclass(frozen=True)
class PromotionSnapshot:
    id: int
    code: Optional[str]
    type: str
    value: Any
    start_date: Optional[date]
    end_date: Optional[date]
    applies_to: Optional[str]
    is_active: bool


@dataclass(frozen=True)
class Discount:
    """Winning promotion outcome: rounded price, whole percent, promotion id."""

    price: Decimal
    percent: int
    promotion_id: Optional[int] = None


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def round_percent(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def is_general(promotion: PromotionSnapshot) -> bool:
    #empty code or the sentinel -> applied without user action
    return not promotion.code or promotion.code == GENERAL_DISCOUNT_CODE


def is_eligible(promotion: PromotionSnapshot, today: date) -> bool:
    if not promotion.is_active:
        return False
    if promotion.start_date is None or promotion.end_date is None:
        return False
    if not (promotion.start_date <= today <= promotion.end_date):
        return False
    return is_general(promotion)


def eligible_promotions(promotions: Iterable[PromotionSnapshot], today: date) -> List[PromotionSnapshot]:
    return [p for p in promotions if is_eligible(p, today)]


def applies_to_category(applies_to: Optional[str], category: str) -> bool:
    if applies_to == ALL_PRODUCTS:
        return True
    if applies_to and applies_to.startswith(CATEGORY_PREFIX):
        return applies_to[len(CATEGORY_PREFIX):] == category
    return False


def candidate_price(promotion: PromotionSnapshot, base_price: Decimal) -> Optional[Decimal]:
    """Unrounded price after applying the promotion, or None when the record is malformed."""
    value = to_decimal(promotion.value)
    if value is None or value < 0:
        return None

    if promotion.type == PERCENTAGE:
        if value > HUNDRED:
            return None
        return base_price * (1 - value / HUNDRED)

    if promotion.type == FIXED:
        return max(Decimal("0"), base_price - value)

    return None


def best_price(
    product: ProductSnapshot,
    promotions: Iterable[PromotionSnapshot],
    today: date,
) -> Optional[Discount]:
    """
    Best discounted price for ``product`` among the promotions eligible ``today``.

    Returns None when no promotion lowers the base price. A candidate must be
    strictly below the base price to count; among counting candidates the
    lowest wins and an exact tie goes to the later promotion.
    """
    base_price = to_decimal(product.price)
    if base_price is None:
        return None

    best = base_price
    best_percent = 0
    winner = None

    for promotion in eligible_promotions(promotions, today):
        if not applies_to_category(promotion.applies_to, product.category):
            continue

        candidate = candidate_price(promotion, base_price)
        if candidate is None:
            logger.debug(
                f"Skipping malformed promotion {promotion.id} "
                f"(type={promotion.type!r}, value={promotion.value!r})"
            )
            continue

        if candidate >= base_price or candidate > best:
            continue

        best = candidate
        winner = promotion
        if promotion.type == PERCENTAGE:
            best_percent = round_percent(to_decimal(promotion.value))
        else:
            best_percent = round_percent((base_price - candidate) / base_price * HUNDRED)

    if winner is None:
        return None

    return Discount(
        price=best.quantize(CENT, rounding=ROUND_HALF_UP),
        percent=best_percent,
        promotion_id=winner.id,
    )
