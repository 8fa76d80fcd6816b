# cli.py - interactive storefront client
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import requests
from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from sdk.pystore import StoreClient

console = Console()
c = StoreClient(base_url="http://127.0.0.1:8085")

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
user_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(title="📦 Products Catalog", box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Cost", justify="right", width=10)
    table.add_column("Category", width=15)

    for p in products:
        table.add_row(p.get("id", "N/A"), p.get("name", "N/A"), f"${p.get('cost', '0')}", p.get("category") or "-")
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    title = Text()
    title.append("🛒 Shopping Cart - ", style="bold")
    title.append(cart.get("email", "Unknown User"), style="bold cyan")

    items = cart.get("cart_items", [])
    if not items:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)
    table.add_column("Cost", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    total = Decimal("0")
    for it in items:
        cost = Decimal(str(it["product"].get("cost", "0")))
        subtotal = cost * it.get("quantity", 0)
        total += subtotal
        table.add_row(it["product"].get("name", "Unknown"), str(it.get("quantity", 0)), f"${cost}", f"${subtotal}")

    title.append(f" - Total: ${total}", style="bold green")
    console.print(Panel(table, title=title, border_style="blue"))


def show_user(user: Dict[str, Any]):
    console.print(Panel.fit(
        f"[bold]{user.get('name')}[/bold] <{user.get('email')}>\n"
        f"💰 Wallet: [green]${user.get('wallet_money')}[/green]\n"
        f"🏠 Address: {user.get('address')}\n"
        f"[dim]id: {user.get('id')}[/dim]",
        title="👤 Account",
        border_style="green",
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_detail(e: Exception) -> str:
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return f"HTTP {e.response.status_code}: {e.response.json().get('detail')}"
        except ValueError:
            return f"HTTP {e.response.status_code}"
    return str(e)


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and reports the outcome in
    the status panel. Returns the result, or None when the call failed.
    """
    global status_message
    try:
        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), transient=True) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except (requests.exceptions.RequestException, ValueError) as e:
        status_message = f"Error: {_error_detail(e)}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_user_completer():
    return WordCompleter(list(user_cache), ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_decimal(message: str, default: str = "10.00") -> Decimal:
    while True:
        raw = Prompt.ask(message, default=default)
        try:
            return Decimal(raw)
        except InvalidOperation:
            console.print("[red]Please enter a valid number.[/red]")


def ask_email() -> str:
    email = prompt_with_autocomplete("Enter user email", completer=get_user_completer()).strip()
    if email:
        user_cache.add(email)
    return email


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Cart & Checkout CLI[/bold blue]",
        f"[dim]{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}[/dim]",
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache, user_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "👤 Register user", "6", "🛒 Add to cart"),
            ("2", "🔑 Log in", "7", "✏️ Update quantity"),
            ("3", "🏠 Set address", "8", "➖ Remove from cart"),
            ("4", "📦 List products", "9", "🛒 View cart"),
            ("5", "➕ Register product", "10", "✅ Checkout"),
            ("", "", "11", "🔄 Reset store"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 12)] + ["q", "quit", "exit"]),
        ).strip()

        if choice == "1":
            name = prompt_with_autocomplete("Name")
            email = ask_email()
            password = Prompt.ask("Password", password=True)
            user = try_api(c.register_user, name, email, password, success_msg=f"Registered {email}")
            if user:
                show_user(user)

        elif choice == "2":
            email = ask_email()
            password = Prompt.ask("Password", password=True)
            user = try_api(c.login, email, password, success_msg=f"Logged in as {email}")
            if user:
                show_user(user)

        elif choice == "3":
            user_id = prompt_with_autocomplete("User id")
            address = prompt_with_autocomplete("New address (20+ characters)")
            resp = try_api(c.set_address, user_id, address, success_msg="Address updated")
            if resp:
                console.print(resp)

        elif choice == "4":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "5":
            name = prompt_with_autocomplete("Product name")
            cost = ask_decimal("💰 Cost")
            category = prompt_with_autocomplete("🏷️ Category", default="general")
            resp = try_api(c.register_product, name, cost, category, success_msg=f"Product '{name}' registered")
            if resp:
                product_cache = try_api(c.list_products) or []
                show_products([resp])

        elif choice in ("6", "7"):
            email = ask_email()
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            qty = IntPrompt.ask("Enter quantity", default=1)
            fn = c.add_to_cart if choice == "6" else c.update_cart
            cart = try_api(fn, email, pid, qty, success_msg="Cart updated")
            if cart:
                show_cart(cart)

        elif choice == "8":
            email = ask_email()
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            try_api(c.remove_from_cart, email, pid, success_msg=f"Product {pid} removed from cart")

        elif choice == "9":
            email = ask_email()
            cart = try_api(c.view_cart, email, success_msg=f"Cart loaded for {email}")
            if cart:
                show_cart(cart)

        elif choice == "10":
            email = ask_email()
            r = try_api(c.checkout, email)
            if r is None:
                continue
            if r.status_code == 200:
                console.print(Panel.fit(f"[green]Checkout complete for {email}[/green]", title="✅ Order Confirmation"))
            else:
                console.print(Panel.fit(f"[red]Checkout failed:[/red] {r.json().get('detail')}", title="❌ Checkout Failed"))

        elif choice == "11":
            if Confirm.ask("[red]This will clear all data. Continue?[/red]"):
                try_api(c.reset, success_msg="Store reset successfully")
                product_cache = []
                user_cache = set()

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]"))
            sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
