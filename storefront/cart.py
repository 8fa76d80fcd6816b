"""
Cart service: cart retrieval, line item mutation and checkout.

A cart is keyed by the owner's email and holds an ordered list of
(product snapshot, quantity) line items, at most one per product id.
It is created lazily by the first successful add and is emptied, never
deleted, by checkout.

Mutations and checkout for one user run under that user's cart lock, so
two requests in this process cannot both create the cart or both insert
the same product.
"""
from decimal import Decimal

from storefront import database
from storefront.database import StoreError
from storefront.errors import ConflictError, InternalFailureError, InvalidInputError, NotFoundError
from storefront.models import Cart, CartItem, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _cart_key(email: str) -> str:
    return f"cart:{email}"


def _check_quantity(quantity: int) -> None:
    if quantity is None or quantity < 1:
        raise InvalidInputError("Quantity must be a positive integer")


def _save_cart(cart: Cart) -> Cart:
    try:
        return database.carts.save(cart)
    except StoreError as exc:
        logger.error("Cart save failed", email=cart.email, error=str(exc))
        raise InternalFailureError() from exc


def cart_total(cart: Cart) -> Decimal:
    """Sum of cost * quantity over the product snapshots stored in the cart."""
    total = Decimal("0")
    for item in cart.cart_items:
        total += item.product.cost * item.quantity
    return total


async def get_cart_by_user(user: User) -> Cart:
    cart = database.carts.find_by_email(user.email)
    if cart is None:
        raise NotFoundError("User does not have a cart")
    return cart


async def add_product_to_cart(user: User, product_id: str, quantity: int) -> Cart:
    _check_quantity(quantity)

    async with database.get_lock(_cart_key(user.email)):
        product = database.products.find_by_id(product_id)
        cart = database.carts.find_by_email(user.email)

        if cart is not None and cart.has_product(product_id):
            raise ConflictError(
                "Product already in cart. Use the cart sidebar to update or remove product from cart"
            )
        if product is None:
            raise InvalidInputError("Product doesn't exist in database")

        if cart is None:
            try:
                cart = database.carts.create(user.email)
            except StoreError as exc:
                logger.error("Cart creation failed", email=user.email, error=str(exc))
                raise InternalFailureError() from exc
            logger.info("Cart created", email=user.email)

        cart.cart_items.append(CartItem(product=product, quantity=quantity))
        cart = _save_cart(cart)

    logger.info("Product added to cart", email=user.email, product_id=product.id, quantity=quantity)
    return cart


async def update_product_in_cart(user: User, product_id: str, quantity: int) -> Cart:
    _check_quantity(quantity)

    async with database.get_lock(_cart_key(user.email)):
        cart = database.carts.find_by_email(user.email)
        if cart is None:
            raise InvalidInputError("User does not have a cart. Use POST to create cart and add a product")

        if database.products.find_by_id(product_id) is None:
            raise InvalidInputError("Product doesn't exist in database")

        index = cart.find_item_index(product_id)
        if index is None:
            raise InvalidInputError("Product not in cart")

        cart.cart_items[index].quantity = quantity
        cart = _save_cart(cart)

    logger.info("Cart quantity updated", email=user.email, product_id=product_id, quantity=quantity)
    return cart


async def delete_product_from_cart(user: User, product_id: str) -> None:
    async with database.get_lock(_cart_key(user.email)):
        cart = database.carts.find_by_email(user.email)
        if cart is None:
            raise InvalidInputError("User does not have a cart")

        index = cart.find_item_index(product_id)
        if index is None:
            raise InvalidInputError("Product not in cart")

        del cart.cart_items[index]
        _save_cart(cart)

    logger.info("Product removed from cart", email=user.email, product_id=product_id)


async def checkout(user: User) -> Cart:
    """
    Debit the cart total from the user's wallet and empty the cart.

    The balance is read from the store after the cart lock is taken, so a
    checkout queued behind another one debits the already debited wallet.
    The wallet is saved first. If emptying the cart then fails, the old
    balance is saved back before the failure is raised, so a debited
    wallet never sits next to a full cart.
    """
    async with database.get_lock(_cart_key(user.email)):
        current = database.users.find_by_email(user.email)
        if current is None:
            raise NotFoundError("User not found")

        cart = database.carts.find_by_email(user.email)
        if cart is None:
            raise NotFoundError("Cart not found")

        if not cart.cart_items:
            raise InvalidInputError("No products in cart")

        if not database.users.has_non_default_address(current):
            raise InvalidInputError("No valid address")

        total = cart_total(cart)
        previous_balance = current.wallet_money
        final_balance = previous_balance - total
        if final_balance < 0:
            logger.warning("Checkout rejected", email=user.email, total=str(total), balance=str(previous_balance))
            raise InvalidInputError("Insufficient balance")

        current.wallet_money = final_balance
        try:
            database.users.save(current)
        except StoreError as exc:
            logger.error("Wallet debit failed", email=user.email, error=str(exc))
            raise InternalFailureError() from exc

        cart.cart_items = []
        try:
            database.carts.save(cart)
        except StoreError as exc:
            current.wallet_money = previous_balance
            try:
                database.users.save(current)
            except StoreError as revert_exc:
                logger.critical(
                    "Cart reset failed and wallet debit could not be reverted",
                    email=user.email,
                    total=str(total),
                    debited_balance=str(final_balance),
                    error=str(exc),
                    revert_error=str(revert_exc),
                )
                raise InternalFailureError() from exc
            logger.error("Cart reset failed, wallet debit reverted", email=user.email, error=str(exc))
            raise InternalFailureError() from exc

        user.wallet_money = final_balance

    logger.info("Checkout completed", email=user.email, total=str(total), balance=str(final_balance))
    return cart
