"""
User account logic: registration, login, lookup and address updates.

Every function raises a typed ApiError on failure.
"""
from storefront import database
from storefront.config import settings
from storefront.core import RegisterUserIn
from storefront.database import StoreError
from storefront.errors import InternalFailureError, InvalidInputError, NotFoundError, UnauthorizedError
from storefront.models import User
from storefront.security import hash_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def create_user(payload: RegisterUserIn) -> User:
    if database.users.is_email_taken(payload.email):
        raise InvalidInputError("Email already taken")

    user = User(
        id=database.new_id(),
        name=payload.name,
        email=payload.email,
        password=hash_password(payload.password, settings.password_hash_rounds),
    )
    try:
        database.users.create(user)
    except StoreError as exc:
        logger.error("User creation failed", email=payload.email, error=str(exc))
        raise InternalFailureError() from exc

    logger.info("User registered", user_id=user.id, email=user.email)
    return user


def login_user_with_email_and_password(email: str, password: str) -> User:
    user = database.users.find_by_email(email)
    if user is None or not database.users.verify_password(user, password):
        logger.warning("Login rejected", email=email)
        raise UnauthorizedError("Incorrect email or password")
    return user


def get_user_by_id(user_id: str) -> User:
    user = database.users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(email: str) -> User:
    user = database.users.find_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_address_by_id(user_id: str) -> str:
    return get_user_by_id(user_id).address


def set_address(user: User, new_address: str) -> str:
    user.address = new_address
    database.users.save(user)
    logger.info("Address updated", user_id=user.id)
    return user.address
