import os

# cheap bcrypt cost for tests; must be set before storefront.config is imported
os.environ.setdefault("STOREFRONT_PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("STOREFRONT_ENVIRONMENT", "test")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront import database
from storefront.core import RegisterUserIn
from storefront.main import app
from storefront.models import Product
from storefront.users import create_user

ADDRESS = "221B Baker Street, London NW1 6XE"


@pytest.fixture(autouse=True)
def reset_stores():
    database.reset_all()
    yield
    database.reset_all()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user():
    def _make(email="alice@example.com", wallet_money="500", address=None):
        user = create_user(RegisterUserIn(name="Alice", email=email, password="wonderland1"))
        user.wallet_money = Decimal(wallet_money)
        if address is not None:
            user.address = address
        return database.users.save(user)
    return _make


@pytest.fixture
def make_product():
    def _make(name="Pen", cost="100", category="stationery"):
        product = Product(id=database.new_id(), name=name, cost=Decimal(cost), category=category)
        return database.products.create(product)
    return _make
