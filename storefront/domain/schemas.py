# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer, model_validator
from typing import Annotated, List, Literal, Optional
from decimal import Decimal
from datetime import date, datetime


Role = Literal["customer", "admin", "supplier"]
PromotionType = Literal["percentage", "fixed"]
OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]

#stored as Decimal, sent to clients as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# -- cart --

class CartItemIn(BaseModel):
    """Adding a product to the cart."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, ge=1)


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., ge=1)


class CartLineOut(BaseModel):
    """Priced cart line; discount fields are left out when no promotion applies."""

    id: int
    product_id: int
    name: str
    price: Money
    discount_price: Optional[Money] = Field(None, serialization_alias="discountPrice")
    discount_percentage: Optional[int] = Field(None, serialization_alias="discountPercentage")
    image: str
    quantity: int
    stock: int
    category: str
    sku: str

    model_config = ConfigDict(from_attributes=True)


class CartSummaryOut(BaseModel):
    items: List[CartLineOut]
    subtotal: Money
    discount: Money
    total: Money
    item_count: int


class CartItemRead(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartMutationOut(BaseModel):
    message: str
    cart_item: CartItemRead = Field(..., serialization_alias="cartItem")


class CartClearedOut(BaseModel):
    message: str
    deleted: int


# -- promotions --

class PromotionIn(BaseModel):
    """Create/update payload for a promotion. A missing code makes it a general discount."""

    code: Optional[str] = None
    description: str = Field(..., min_length=1)
    type: PromotionType
    value: Decimal = Field(..., ge=0)
    start_date: date
    end_date: date
    applies_to: str = Field("All Products", min_length=1)
    is_active: bool = True

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        if self.type == "percentage" and self.value > 100:
            raise ValueError("percentage value must be between 0 and 100")
        return self


class PromotionOut(BaseModel):
    id: int
    code: Optional[str]
    description: str
    type: str
    value: Money
    start_date: date
    end_date: date
    applies_to: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# -- products --

class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(..., min_length=1, max_length=64)
    category: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    description: Optional[str] = None
    status: str = "In Stock"


class ProductOut(BaseModel):
    """Product as shown in the catalog, priced against today's promotions."""

    id: int
    name: str
    sku: str
    category: str
    price: Money
    discount_price: Optional[Money] = Field(None, serialization_alias="discountPrice")
    discount_percentage: Optional[int] = Field(None, serialization_alias="discountPercentage")
    stock: int
    description: Optional[str] = None
    status: str
    images: List[str] = []


# -- orders --

class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    price: Money

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    status: str
    total: Money
    created_at: datetime
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: OrderStatus


# -- users --

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class UserRoleIn(BaseModel):
    role: Role


# -- reviews --

class ReviewIn(BaseModel):
    comment: str = Field(..., min_length=1, max_length=2000)
    rating: int = Field(..., ge=1, le=5)


class ReviewOut(BaseModel):
    """A product review; `user` is the author's display name."""

    id: int
    product_id: int
    user: str
    comment: str
    rating: int
    created_at: datetime
