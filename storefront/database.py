import asyncio
import uuid
import weakref
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from storefront.models import Cart, Product, User
from storefront import security

# In-memory document collections and the per-key locks guarding them.
# Documents are kept as plain dicts; every read hands out a fresh model.

USERS: Dict[str, Dict[str, Any]] = {}      # keyed by email
PRODUCTS: Dict[str, Dict[str, Any]] = {}   # keyed by product id
CARTS: Dict[str, Dict[str, Any]] = {}      # keyed by email
# a lock lives only while some caller holds or awaits it
_LOCKS: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


class StoreError(Exception):
    """A store operation could not be carried out."""


def get_lock(key: str) -> asyncio.Lock:
    lock = _LOCKS.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _LOCKS[key] = lock
    return lock


def new_id() -> str:
    return uuid.uuid4().hex


class UserStore:
    def find_by_email(self, email: str) -> Optional[User]:
        doc = USERS.get(email.strip().lower())
        return User.model_validate(doc) if doc is not None else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        for doc in USERS.values():
            if doc["id"] == user_id:
                return User.model_validate(doc)
        return None

    def is_email_taken(self, email: str) -> bool:
        return email.strip().lower() in USERS

    def create(self, user: User) -> User:
        if self.is_email_taken(user.email):
            raise StoreError(f"duplicate key: email {user.email}")
        USERS[user.email] = user.model_dump()
        return user

    def save(self, user: User) -> User:
        user.updated_at = datetime.now(timezone.utc)
        USERS[user.email] = user.model_dump()
        return user

    def verify_password(self, user: User, plaintext: str) -> bool:
        return security.verify_password(plaintext, user.password)

    def has_non_default_address(self, user: User) -> bool:
        return user.has_set_non_default_address()


class ProductStore:
    def find_by_id(self, product_id: str) -> Optional[Product]:
        doc = PRODUCTS.get(str(product_id))
        return Product.model_validate(doc) if doc is not None else None

    def create(self, product: Product) -> Product:
        PRODUCTS[product.id] = product.model_dump()
        return product

    def list(self, category: Optional[str] = None) -> List[Product]:
        out = []
        for doc in PRODUCTS.values():
            if category and doc.get("category") != category:
                continue
            out.append(Product.model_validate(doc))
        return out


class CartStore:
    def find_by_email(self, email: str) -> Optional[Cart]:
        doc = CARTS.get(email)
        return Cart.model_validate(doc) if doc is not None else None

    def create(self, email: str) -> Cart:
        if email in CARTS:
            raise StoreError(f"duplicate key: cart for {email}")
        cart = Cart(email=email, cart_items=[])
        CARTS[email] = cart.model_dump()
        return cart

    def save(self, cart: Cart) -> Cart:
        CARTS[cart.email] = cart.model_dump()
        return cart


users = UserStore()
products = ProductStore()
carts = CartStore()


def reset_all() -> None:
    USERS.clear()
    PRODUCTS.clear()
    CARTS.clear()
    _LOCKS.clear()
