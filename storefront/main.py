# storefront/main.py
from typing import Optional

from fastapi import FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from storefront import cart as cart_service
from storefront import database
from storefront import users as user_service
from storefront.core import (
    AddressIn, AddToCartIn, LoginIn, ProductIn, RegisterUserIn,
    RemoveFromCartIn, UpdateCartIn, UserOut, _public_user
)
from storefront.errors import NotFoundError
from storefront.models import Cart, Product
from storefront.utils.logging import configure_logging

configure_logging()

app = FastAPI(title="storefront")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Auth endpoints
# ---------------------------
@app.post("/auth/register", status_code=201, response_model=UserOut)
async def register(payload: RegisterUserIn):
    user = user_service.create_user(payload)
    return _public_user(user)

@app.post("/auth/login", response_model=UserOut)
async def login(payload: LoginIn):
    user = user_service.login_user_with_email_and_password(payload.email, payload.password)
    return _public_user(user)

# ---------------------------
# User endpoints
# ---------------------------
@app.get("/users/{user_id}")
async def get_user(user_id: str, q: Optional[str] = None):
    if q == "address":
        return {"address": user_service.get_user_address_by_id(user_id)}
    return _public_user(user_service.get_user_by_id(user_id))

@app.put("/users/{user_id}")
async def set_user_address(user_id: str, payload: AddressIn):
    user = user_service.get_user_by_id(user_id)
    return {"address": user_service.set_address(user, payload.address)}

# ---------------------------
# Seller / product endpoints
# ---------------------------
@app.post("/seller/register", status_code=201, response_model=Product)
async def seller_register(payload: ProductIn):
    product = Product(id=database.new_id(), **payload.model_dump())
    return database.products.create(product)

@app.get("/products")
async def list_products(category: Optional[str] = None):
    return database.products.list(category=category)

@app.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str):
    p = database.products.find_by_id(product_id)
    if not p:
        raise NotFoundError("Product not found")
    return p

# ---------------------------
# Cart endpoints
# ---------------------------
@app.get("/cart/{user_email}", response_model=Cart)
async def view_cart(user_email: str):
    user = user_service.get_user_by_email(user_email)
    return await cart_service.get_cart_by_user(user)

@app.post("/cart/add", response_model=Cart)
async def cart_add(payload: AddToCartIn):
    user = user_service.get_user_by_email(payload.user_email)
    return await cart_service.add_product_to_cart(user, payload.product_id, payload.quantity)

@app.put("/cart/update", response_model=Cart)
async def cart_update(payload: UpdateCartIn):
    user = user_service.get_user_by_email(payload.user_email)
    # a quantity of zero removes the line item
    if payload.quantity == 0:
        await cart_service.delete_product_from_cart(user, payload.product_id)
        return Response(status_code=204)
    return await cart_service.update_product_in_cart(user, payload.product_id, payload.quantity)

@app.post("/cart/remove", status_code=204)
async def cart_remove(payload: RemoveFromCartIn):
    user = user_service.get_user_by_email(payload.user_email)
    await cart_service.delete_product_from_cart(user, payload.product_id)
    return Response(status_code=204)

@app.post("/cart/checkout", response_model=Cart)
async def cart_checkout(user_email: str = Query(..., min_length=1)):
    user = user_service.get_user_by_email(user_email)
    return await cart_service.checkout(user)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    database.reset_all()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8085)
