# storefront/models.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.config import settings


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Product(BaseModel):
    id: str
    name: str
    cost: Decimal = Field(..., ge=0)
    category: Optional[str] = "general"
    rating: int = Field(0, ge=0, le=5)
    image: Optional[str] = None


class User(BaseModel):
    id: str
    name: str
    email: str
    password: str  # bcrypt hash, never the clear text
    wallet_money: Decimal = Field(default_factory=lambda: settings.default_wallet_money, ge=0)
    address: str = Field(default_factory=lambda: settings.default_address)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def has_set_non_default_address(self) -> bool:
        return self.address != settings.default_address


class CartItem(BaseModel):
    product: Product
    quantity: int


class Cart(BaseModel):
    email: str
    cart_items: List[CartItem] = Field(default_factory=list)

    def find_item_index(self, product_id: str) -> Optional[int]:
        """Position of the line item holding `product_id`, or None."""
        for index, item in enumerate(self.cart_items):
            if item.product.id == str(product_id):
                return index
        return None

    def has_product(self, product_id: str) -> bool:
        return self.find_item_index(product_id) is not None
