# storefront/domain/cart_pricing.py
"""
Cart aggregator: turns raw cart lines into priced, displayable lines.

Pure transformation, no I/O. Prices are recomputed on every call from the
promotion snapshot handed in, nothing is cached.
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Sequence

from storefront.domain.pricing import ProductSnapshot, PromotionSnapshot, best_price


class MissingProductError(LookupError):
    """A cart line points at a product that no longer exists."""

    def __init__(self, line_id: int, product_id: int):
        super().__init__(f"Cart line {line_id} references missing product {product_id}")
        self.line_id = line_id
        self.product_id = product_id


@dataclass(frozen=True)
class CartLine:
    id: int
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class PricedCartLine:
    id: int
    product_id: int
    name: str
    price: Decimal
    discount_price: Optional[Decimal]
    discount_percentage: Optional[int]
    image: str
    quantity: int
    stock: int
    category: str
    sku: str

    @property
    def unit_price(self) -> Decimal:
        return self.discount_price if self.discount_price is not None else self.price

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    item_count: int


def primary_image(images: Sequence[str]) -> str:
    return images[0] if images else ""


def price_cart(
    cart_lines: Iterable[CartLine],
    products: Mapping[int, ProductSnapshot],
    images: Mapping[int, Sequence[str]],
    promotions: Sequence[PromotionSnapshot],
    today: date,
) -> List[PricedCartLine]:
    """
    Price every cart line against the promotions in force ``today``.

    Output keeps the input order. A line whose product is missing from
    ``products`` fails the whole call with MissingProductError.
    """
    priced = []
    for line in cart_lines:
        product = products.get(line.product_id)
        if product is None:
            raise MissingProductError(line.id, line.product_id)

        discount = best_price(product, promotions, today)

        priced.append(
            PricedCartLine(
                id=line.id,
                product_id=product.id,
                name=product.name,
                price=product.price,
                discount_price=discount.price if discount else None,
                discount_percentage=discount.percent if discount else None,
                image=primary_image(images.get(product.id) or []),
                quantity=line.quantity,
                stock=product.stock,
                category=product.category,
                sku=product.sku,
            )
        )
    return priced


def cart_totals(lines: Iterable[PricedCartLine]) -> CartTotals:
    subtotal = Decimal("0.00")
    total = Decimal("0.00")
    count = 0
    for line in lines:
        subtotal += line.price * line.quantity
        total += line.line_total
        count += line.quantity
    return CartTotals(
        subtotal=subtotal,
        discount=subtotal - total,
        total=total,
        item_count=count,
    )
