#!/usr/bin/env python
from sdk.pystore import StoreClient


def main():
    c = StoreClient(base_url="http://127.0.0.1:8085")

    print("Resetting store...")
    c.reset()

    # -----------------------------
    # Register a user and set an address
    # -----------------------------
    user_email = "alice@example.com"
    print(f"\nRegistering {user_email}...")
    user = c.register_user("Alice", user_email, "wonderland1")
    print(user)
    print(c.set_address(user["id"], "221B Baker Street, London NW1 6XE"))

    # -----------------------------
    # Register products
    # -----------------------------
    print("\nRegistering products...")
    laptop = c.register_product("Laptop", "150.00", "electronics")
    mouse = c.register_product("Mouse", "25.50", "electronics")
    print(c.list_products())

    # -----------------------------
    # Fill the cart
    # -----------------------------
    print("\nAdding products to cart...")
    c.add_to_cart(user_email, laptop["id"], 1)
    c.add_to_cart(user_email, mouse["id"], 3)
    c.update_cart(user_email, mouse["id"], 2)
    print(c.view_cart(user_email))

    # -----------------------------
    # Checkout
    # -----------------------------
    print("\nChecking out...")
    r = c.checkout(user_email)
    print(r.status_code, r.json())
    print("Wallet after checkout:", c.login(user_email, "wonderland1")["wallet_money"])

    # second checkout fails: the cart has been consumed
    r = c.checkout(user_email)
    print(r.status_code, r.json())


if __name__ == "__main__":
    main()
