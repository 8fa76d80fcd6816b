# sdk/pystore.py
from typing import Optional

import httpx
import requests


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def reset(self):
        return self.session.post(f"{self.base_url}/reset", timeout=self.timeout).json()

    # Accounts
    def register_user(self, name: str, email: str, password: str):
        r = self.session.post(f"{self.base_url}/auth/register", json={
            "name": name, "email": email, "password": password
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def login(self, email: str, password: str):
        r = self.session.post(f"{self.base_url}/auth/login", json={"email": email, "password": password}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_user(self, user_id: str):
        r = self.session.get(f"{self.base_url}/users/{user_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def set_address(self, user_id: str, address: str):
        r = self.session.put(f"{self.base_url}/users/{user_id}", json={"address": address}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Seller: register product
    def register_product(self, name: str, cost, category: str = "general"):
        r = self.session.post(f"{self.base_url}/seller/register", json={
            "name": name, "cost": str(cost), "category": category
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def list_products(self, category: Optional[str] = None):
        params = {}
        if category:
            params["category"] = category
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Cart
    def add_to_cart(self, user_email: str, product_id: str, quantity: int = 1):
        r = self.session.post(f"{self.base_url}/cart/add", json={
            "user_email": user_email, "product_id": product_id, "quantity": quantity
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_cart(self, user_email: str, product_id: str, quantity: int):
        r = self.session.put(f"{self.base_url}/cart/update", json={
            "user_email": user_email, "product_id": product_id, "quantity": int(quantity)
        }, timeout=self.timeout)
        r.raise_for_status()
        # quantity 0 removes the item and returns no body
        return r.json() if r.status_code != 204 else None

    def remove_from_cart(self, user_email: str, product_id: str):
        r = self.session.post(f"{self.base_url}/cart/remove", json={
            "user_email": user_email, "product_id": product_id
        }, timeout=self.timeout)
        r.raise_for_status()

    def view_cart(self, user_email: str):
        r = self.session.get(f"{self.base_url}/cart/{user_email}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def checkout(self, user_email: str):
        r = self.session.post(f"{self.base_url}/cart/checkout", params={"user_email": user_email}, timeout=self.timeout)
        # do not r.raise_for_status() - callers inspect 400/404 bodies
        return r

    async def checkout_async(self, user_email: str):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(f"{self.base_url}/cart/checkout", params={"user_email": user_email})
