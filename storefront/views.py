"""
Terminal storefront: catalog grid with category/gender filters, product
detail with size choice, and the cart panel.

The cart is never updated locally. Every mutation is sent to the API and the
cart is fetched again afterwards.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .client import StorefrontClient, StorefrontClientError
from .filters import (
    ALL,
    GENDER_OPTIONS,
    available_categories,
    filter_products,
    normalize_tags,
    product_gender,
)

DEFAULT_BRAND = '"2005"'
EMPTY_SELECTION = "No pieces in this selection yet."
EMPTY_CART = "Your basket is empty."


def _price(value: Any) -> str:
    try:
        return f"{float(value or 0):.2f}"
    except (TypeError, ValueError):
        return "0.00"


def category_label(product: Dict[str, Any]) -> str:
    tags = normalize_tags(product.get("tag"))
    return (tags[0] or "piece").upper() if tags else "PIECE"


def render_catalog(
    products: List[Dict[str, Any]],
    category: str = ALL,
    gender: str = ALL,
) -> Table | Text:
    """Build the product grid for the given filters. Pure, no state."""

    items = filter_products(products, category, gender)
    if not items:
        return Text(EMPTY_SELECTION, style="dim")

    table = Table(title=f"{len(items)} pieces", show_lines=False)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Piece")
    table.add_column("Brand")
    table.add_column("Category")
    table.add_column("Gender")
    table.add_column("Price", justify="right")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            item.get("naam") or "",
            item.get("merk") or DEFAULT_BRAND,
            category_label(item),
            product_gender(item).upper(),
            f"€ {_price(item.get('prijs'))}",
        )
    return table


def render_cart(summary: Optional[Dict[str, Any]]) -> Panel:
    items = (summary or {}).get("items") or []
    if not items:
        return Panel(Text(EMPTY_CART, style="dim"), title="Basket · 0 items")

    table = Table(show_header=True, box=None)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Piece")
    table.add_column("Size")
    table.add_column("Price", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Line", justify="right")
    for line in items:
        table.add_row(
            str(line.get("itemId", "")),
            f"{line.get('naam') or ''} ({line.get('merk') or DEFAULT_BRAND})",
            line.get("size") or "",
            f"€ {_price(line.get('prijs'))}",
            str(line.get("aantal", 1)),
            f"€ {_price(line.get('regelTotaal'))}",
        )

    totals = Text.assemble(
        f"Subtotal € {_price(summary.get('subtotal'))}\n",
        f"Shipping € {_price(summary.get('shipping'))}\n",
        (f"Total    € {_price(summary.get('total'))}", "bold"),
    )
    return Panel(Group(table, totals), title=f"Basket · {len(items)} items")


def render_product(product: Dict[str, Any], selected_size: Optional[str]) -> Panel:
    tags = " ".join(f"#{t}" for t in normalize_tags(product.get("tag")) if t)
    sizes = " ".join(
        f"[reverse]{s}[/reverse]" if s == selected_size else s
        for s in product.get("maten") or []
    )
    body = (
        f"[bold]{product.get('naam') or ''}[/bold]\n"
        f"{product.get('merk') or DEFAULT_BRAND} · {product_gender(product).upper()}\n"
        f"€ {_price(product.get('prijs'))}\n"
        f"{tags}\n"
        f"Sizes: {sizes or '-'}"
    )
    return Panel(body, title=category_label(product))


class StorefrontView:
    """Client-side state and actions for the storefront.

    Errors from the API never escape an action; they are kept as short
    messages in ``catalog_error`` / ``cart_error`` for display next to the
    matching region.
    """

    def __init__(self, client: Optional[StorefrontClient] = None) -> None:
        self.client = client or StorefrontClient()
        self.products: List[Dict[str, Any]] = []
        self.cart: Dict[str, Any] = {}
        self.active_category = ALL
        self.active_gender = ALL
        self.open_product: Optional[Dict[str, Any]] = None
        self.selected_size: Optional[str] = None
        self.catalog_error: Optional[str] = None
        self.cart_error: Optional[str] = None

    # ---------------- loading ----------------

    def load(self) -> None:
        """Fetch the catalog once, then the cart."""
        self.catalog_error = None
        try:
            self.products = self.client.list_products()
        except StorefrontClientError:
            self.catalog_error = "Could not load catalog."
            self.products = []
        self.load_cart()

    def load_cart(self) -> None:
        self.cart_error = None
        try:
            self.cart = self.client.get_cart()
        except StorefrontClientError:
            self.cart_error = "Could not load basket."

    # ---------------- filters ----------------

    def categories(self) -> List[str]:
        return [ALL] + available_categories(self.products)

    @staticmethod
    def genders() -> List[str]:
        return [value for value, _ in GENDER_OPTIONS]

    def set_category(self, category: str) -> None:
        self.active_category = category.lower() if category else ALL

    def set_gender(self, gender: str) -> None:
        self.active_gender = gender.lower() if gender else ALL

    def visible_products(self) -> List[Dict[str, Any]]:
        return filter_products(self.products, self.active_category, self.active_gender)

    # ---------------- product detail ----------------

    def open(self, item_id: str) -> Optional[Dict[str, Any]]:
        product = next((p for p in self.products if p.get("id") == item_id), None)
        if product is None:
            return None
        self.open_product = product
        sizes = product.get("maten") if isinstance(product.get("maten"), list) else []
        self.selected_size = sizes[0] if sizes else None
        return product

    def select_size(self, size: str) -> None:
        if self.open_product and size in (self.open_product.get("maten") or []):
            self.selected_size = size

    def close(self) -> None:
        self.open_product = None
        self.selected_size = None

    def add_open_product(self, quantity: int = 1) -> bool:
        if not self.open_product:
            return False
        try:
            self.client.add_to_cart(
                self.open_product["id"], max(quantity, 1), self.selected_size or None
            )
        except StorefrontClientError:
            self.cart_error = "Could not add to basket."
            return False
        self.load_cart()
        self.close()
        return True

    # ---------------- cart actions ----------------

    def increment(self, item_id: str) -> bool:
        return self._change_quantity(item_id, 1)

    def decrement(self, item_id: str) -> bool:
        return self._change_quantity(item_id, -1)

    def _change_quantity(self, item_id: str, delta: int) -> bool:
        try:
            self.client.change_quantity(item_id, delta)
        except StorefrontClientError:
            self.cart_error = "Could not update quantity."
            return False
        self.load_cart()
        return True

    def remove(self, item_id: str) -> bool:
        try:
            self.client.remove_line(item_id)
        except StorefrontClientError:
            self.cart_error = "Could not remove item."
            return False
        self.load_cart()
        return True

    def clear_cart(self) -> bool:
        """Empty the basket with one DELETE per line."""
        try:
            summary = self.client.get_cart()
            for line in summary.get("items") or []:
                item_id = line.get("itemId")
                if item_id:
                    self.client.remove_line(item_id)
        except StorefrontClientError:
            self.cart_error = "Could not clear basket."
            return False
        self.load_cart()
        return True

    # ---------------- rendering ----------------

    def render_catalog(self):
        return render_catalog(self.products, self.active_category, self.active_gender)

    def render_cart(self):
        return render_cart(self.cart)

    def render_product(self):
        if not self.open_product:
            return None
        return render_product(self.open_product, self.selected_size)
