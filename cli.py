# cli.py
import sys
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from pharmapos.config import Config
from pharmapos.reports import money
from sdk.pharmapos_client import PosApiError, PosClient

console = Console()
c = PosClient(base_url=Config.API_URL)

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

PAYMENT_METHODS = ["Cash", "Card", "Insurance"]
CATEGORIES = ["Prescription", "OTC", "Wellness", "Medical Supplies"]

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def _amount(value: Any) -> str:
    return money(Decimal(str(value or 0)))


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found. Try a different search term.[/italic yellow]")
        return

    table = Table(
        title="💊 Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("SKU", style="dim", width=14)
    table.add_column("Name", style="bold", width=26)
    table.add_column("Category", width=16)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Rx", justify="center", width=4)

    for p in products:
        stock = str(p.get("stock", 0))
        if p.get("is_low_stock"):
            stock = f"[red]{stock}[/red]"
        table.add_row(
            p.get("sku", "N/A"),
            p.get("name", "N/A"),
            p.get("category", "N/A"),
            _amount(p.get("price")),
            stock,
            "✔" if p.get("requires_prescription") else ""
        )
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    totals = cart.get("totals", {})
    title = Text()
    title.append("🛒 Current Sale", style="bold")
    title.append(f" - Total: {_amount(totals.get('total'))}", style="bold green")

    lines = cart.get("lines", [])
    if not lines:
        console.print(Panel("Start by adding items to the cart from inventory.", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=28)
    table.add_column("Dosage / notes", width=24)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("In stock", justify="right", width=9)
    table.add_column("Line", justify="right", width=12)

    for line in lines:
        product = line.get("product", {})
        item = line.get("item", {})
        extra = " / ".join(x for x in (item.get("dosage"), item.get("notes")) if x)
        table.add_row(
            product.get("name", "Unknown"),
            extra,
            str(item.get("quantity", 0)),
            str(product.get("stock", 0)),
            _amount(line.get("line_total"))
        )
    for pid in cart.get("unresolved", []):
        table.add_row(f"[red]Missing product: {pid}[/red]", "-", "-", "-", "-")

    summary = (
        f"Subtotal: {_amount(totals.get('subtotal'))}   "
        f"Tax: {_amount(totals.get('tax'))}   "
        f"[bold]Total: {_amount(totals.get('total'))}[/bold]"
    )
    console.print(Panel(table, title=title, subtitle=summary, border_style="blue"))


def show_sales(sales: List[Dict[str, Any]]):
    if not sales:
        console.print("[italic yellow]No sales recorded yet[/italic yellow]")
        return

    table = Table(
        title="🧾 Sales History",
        box=box.ROUNDED,
        header_style="bold yellow",
        title_style="bold yellow",
        show_lines=True
    )
    table.add_column("Receipt", style="dim", width=22)
    table.add_column("Customer", width=18)
    table.add_column("Contents", width=34)
    table.add_column("Payment", width=10)
    table.add_column("Total", justify="right", width=10)

    for sale in sales:
        items = sale.get("items", [])
        names = [f"{it.get('product_name', '?')} x{it.get('quantity', 1)}" for it in items[:3]]
        contents = ", ".join(names) if names else "No items"
        if len(items) > 3:
            contents += f" +{len(items) - 3} more"
        table.add_row(
            sale.get("id", "N/A"),
            sale.get("customer_name", ""),
            contents,
            sale.get("payment_method", ""),
            _amount(sale.get("total"))
        )
    console.print(table)


def show_stats(stats: Dict[str, Any]):
    grid = Table.grid(padding=(0, 4))
    for _ in range(4):
        grid.add_column(justify="center")
    grid.add_row(
        f"[bold]{_amount(stats.get('inventory_value'))}[/bold]\n[dim]Inventory value[/dim]",
        f"[bold]{_amount(stats.get('today_revenue'))}[/bold]\n[dim]{stats.get('today_sales', 0)} sale(s) today[/dim]",
        f"[bold]{stats.get('low_stock', 0)}[/bold]\n[dim]Low stock items[/dim]",
        f"[bold]{stats.get('products_tracked', 0)}[/bold]\n[dim]Products tracked[/dim]",
    )
    console.print(Panel(grid, title="📊 Overview", border_style="magenta"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Business rejections are shown with the server's message; returns None on failure.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except PosApiError as e:
        status_message = f"Error: {e}"
        console.print(show_status(str(e), False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    words = [p.get("id", "") for p in product_cache] + [p.get("sku", "") for p in product_cache]
    return WordCompleter([w for w in words if w], ignore_case=True)


def resolve_product_id(entry: str) -> str:
    # accept either the product id or its SKU
    entry = entry.strip()
    for p in product_cache:
        if entry.lower() == p.get("sku", "").lower():
            return p["id"]
    return entry


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "💊 PharmaPOS",
        "[bold blue]Pharmacy Point of Sale[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List inventory", "6", "✅ Complete sale"),
            ("2", "🔍 Search inventory", "7", "🧾 Sales history"),
            ("3", "➕ Add to cart", "8", "📥 Restock"),
            ("4", "✏️ Change quantity", "9", "📊 Overview"),
            ("5", "➖ Remove from cart", "10", "🔄 Reset workspace"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 11)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Inventory loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Search name or SKU")
            category = prompt_with_autocomplete(
                "Category (blank for all)", completer=WordCompleter(CATEGORIES, ignore_case=True)
            ).strip() or None
            low_only = Confirm.ask("Low stock only?", default=False)
            res = try_api(c.list_products, term, category, low_only)
            if res is not None:
                show_products(res)

        elif choice == "3":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID or SKU", completer=get_product_completer()))
            qty = IntPrompt.ask("Quantity", default=1)
            dosage = Prompt.ask("Dosage (optional)", default="") or None
            notes = Prompt.ask("Notes (optional)", default="") or None
            cart = try_api(c.add_to_cart, pid, qty, dosage, notes, success_msg="Item added to the cart")
            if cart:
                show_cart(cart)

        elif choice == "4":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID or SKU", completer=get_product_completer()))
            qty = IntPrompt.ask("New quantity", default=1)
            cart = try_api(c.update_cart_quantity, pid, qty)
            if cart:
                note = try_api(c.notification)
                if note and note.get("kind") == "error":
                    console.print(show_status(note.get("message", ""), False))
                show_cart(cart)

        elif choice == "5":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID or SKU", completer=get_product_completer()))
            cart = try_api(c.remove_from_cart, pid, success_msg="Item removed")
            if cart:
                show_cart(cart)

        elif choice == "6":
            cart = try_api(c.view_cart)
            if not cart or not cart.get("lines"):
                console.print("[italic yellow]Cart is empty[/italic yellow]")
                continue
            show_cart(cart)
            name = Prompt.ask("Customer name")
            rx = Prompt.ask("Prescription # (optional)", default="") or None
            payment = prompt_with_autocomplete(
                "Payment method", completer=WordCompleter(PAYMENT_METHODS, ignore_case=True), default="Cash"
            ).strip()
            notes = Prompt.ask("Internal notes (optional)", default="") or None
            sale = try_api(c.checkout, name, payment, rx, notes)
            if sale:
                console.print(Panel.fit(
                    f"[green]Sale completed![/green]\n"
                    f"Receipt: [bold]#{sale.get('id')}[/bold]\n"
                    f"Subtotal: {_amount(sale.get('subtotal'))}  Tax: {_amount(sale.get('tax'))}\n"
                    f"Total: [bold]{_amount(sale.get('total'))}[/bold]",
                    title="✅ Receipt"
                ))
                status_message = f"Sale completed. Receipt #{sale.get('id')}"
                product_cache = []

        elif choice == "7":
            limit = IntPrompt.ask("How many recent sales", default=10)
            sales = try_api(c.list_sales, limit)
            if sales is not None:
                show_sales(sales)

        elif choice == "8":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID or SKU", completer=get_product_completer()))
            qty = IntPrompt.ask("Units to add", default=10)
            product = try_api(c.restock, pid, qty)
            if product:
                status_message = f"Restocked {qty} units of {product.get('name')}."
                show_products([product])
                product_cache = []

        elif choice == "9":
            stats = try_api(c.stats)
            if stats:
                show_stats(stats)

        elif choice == "10":
            if Confirm.ask("[red]This will reseed inventory and clear cart and sales. Continue?[/red]"):
                try_api(c.reset, success_msg="Workspace reset")
                product_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="PharmaPOS"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
