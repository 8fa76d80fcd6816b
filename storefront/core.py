import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from storefront.models import User

# Request and response bodies for the HTTP layer.

class RegisterUserIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=64)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        if not re.search(r"\d", v) or not re.search(r"[a-zA-Z]", v):
            raise ValueError("Password must contain at least one letter and one number")
        return v


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class AddressIn(BaseModel):
    address: str = Field(..., min_length=20)


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    cost: Decimal = Field(..., ge=0)
    category: Optional[str] = "general"
    rating: int = Field(0, ge=0, le=5)
    image: Optional[str] = None


class AddToCartIn(BaseModel):
    user_email: str
    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartIn(BaseModel):
    user_email: str
    product_id: str
    quantity: int = Field(..., ge=0)


class RemoveFromCartIn(BaseModel):
    user_email: str
    product_id: str


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    wallet_money: Decimal
    address: str
    created_at: datetime
    updated_at: datetime


def _public_user(user: User) -> UserOut:
    return UserOut(**user.model_dump(exclude={"password"}))
