from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .catalog import CatalogStore
from .errors import NotFoundError, ValidationError
from .schemas import CartLineView, CartSummary, Product

logger = logging.getLogger(__name__)


def _money(value: float) -> float:
    return round(value, 2)


@dataclass
class CartLine:
    product: Product
    quantity: int = 0
    size: Optional[str] = None

    @property
    def line_total(self) -> float:
        return _money(self.product.prijs * self.quantity)


class CartEngine:
    """In-memory shopping cart shared by every request.

    All operations take the same lock, so quantity increments from concurrent
    requests never overwrite each other. The summary is rebuilt on each call.
    """

    def __init__(self, catalog: CatalogStore, shipping_fee: float = 7.0) -> None:
        self.catalog = catalog
        self.shipping_fee = shipping_fee
        self._lines: Dict[str, CartLine] = {}
        self._lock = threading.Lock()

    def add_item(
        self,
        item_id: str,
        quantity: Optional[int] = 1,
        size: Optional[str] = None,
    ) -> CartSummary:
        product = self.catalog.find_by_id(item_id)
        if product is None:
            raise NotFoundError("Item niet gevonden")

        qty = quantity if quantity and quantity > 0 else 1
        with self._lock:
            line = self._lines.setdefault(item_id, CartLine(product=product))
            line.quantity += qty
            # last write wins, even when only the quantity was meant to change
            if size:
                line.size = size
            logger.debug("Cart add %s x%d (now %d)", item_id, qty, line.quantity)
            return self._summary()

    def adjust_quantity(self, item_id: str, delta: int) -> CartSummary:
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("delta (integer) is verplicht")

        with self._lock:
            line = self._lines.get(item_id)
            if line is None:
                raise NotFoundError("Item staat niet in de mand")
            line.quantity += delta
            if line.quantity <= 0:
                del self._lines[item_id]
                logger.debug("Cart line %s dropped", item_id)
            return self._summary()

    def remove_item(self, item_id: str) -> CartSummary:
        with self._lock:
            if item_id not in self._lines:
                raise NotFoundError("Item staat niet in de mand")
            del self._lines[item_id]
            return self._summary()

    def clear_all(self) -> CartSummary:
        with self._lock:
            self._lines.clear()
            return self._summary()

    def summary(self) -> CartSummary:
        with self._lock:
            return self._summary()

    def _summary(self) -> CartSummary:
        items = []
        item_count = 0
        subtotal = 0.0

        for item_id, line in self._lines.items():
            items.append(
                CartLineView(
                    item_id=item_id,
                    naam=line.product.naam,
                    merk=line.product.merk,
                    prijs=line.product.prijs,
                    aantal=line.quantity,
                    regel_totaal=line.line_total,
                    afbeelding=line.product.afbeelding,
                    size=line.size,
                )
            )
            item_count += line.quantity
            subtotal += line.line_total

        shipping = self.shipping_fee if item_count > 0 else 0.0
        subtotal = _money(subtotal)
        return CartSummary(
            items=items,
            item_count=item_count,
            subtotal=subtotal,
            shipping=shipping,
            total=_money(subtotal + shipping),
        )
