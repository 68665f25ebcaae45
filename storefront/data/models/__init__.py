#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductImageModel, ProductModel
from storefront.data.models.promotion import PromotionModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.data.models.review import ReviewModel

__all__ = [
    "UserModel",
    "ProductModel",
    "ProductImageModel",
    "PromotionModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ReviewModel",
]
