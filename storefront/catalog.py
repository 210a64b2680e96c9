from __future__ import annotations

import logging
import math
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from pydantic import ValidationError as SchemaError

from .errors import DuplicateError, ValidationError
from .schemas import GENDERS, Product, ProductCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "naam", "merk", "prijs", "afbeelding")


def load_yaml(path: str | Path) -> Any:
    """Generic YAML loader with sensible defaults."""

    with Path(path).open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or []


def _coerce_price(value: Any) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("prijs moet een getal zijn") from None
    if not math.isfinite(price):
        raise ValidationError("prijs moet een getal zijn")
    if price < 0:
        raise ValidationError("prijs mag niet negatief zijn")
    return price


def _coerce_gender(value: Optional[str]) -> str:
    gender = (value or "unisex").strip().lower()
    if gender not in GENDERS:
        raise ValidationError(f"gender moet een van {', '.join(GENDERS)} zijn")
    return gender


class CatalogStore:
    """Ordered, append-only product catalog."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: List[Product] = []
        self._index: Dict[str, Product] = {}
        self._lock = threading.Lock()
        for product in products:
            if product.id in self._index:
                raise DuplicateError(f"Dubbele id in catalogus: {product.id}")
            self._products.append(product)
            self._index[product.id] = product

    @classmethod
    def from_seed_file(cls, path: str | Path) -> "CatalogStore":
        """Build a store from a YAML list of product records."""

        data = load_yaml(path)
        if not isinstance(data, list):
            raise ValueError(f"Catalog seed at {path} must be a list of products.")
        try:
            products = [Product(**record) for record in data]
        except SchemaError as exc:
            raise ValueError(f"Invalid product in catalog seed {path}: {exc}") from exc
        store = cls(products)
        logger.info("Loaded %d products from %s", len(store), path)
        return store

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        return list(self._products)

    def find_by_id(self, item_id: str) -> Optional[Product]:
        return self._index.get(item_id)

    def add(self, candidate: ProductCreate) -> Product:
        """Validate, normalize and append a new product.

        Required fields count as missing when empty, which includes a zero
        price. Raises ValidationError or DuplicateError.
        """

        if any(not getattr(candidate, name) for name in REQUIRED_FIELDS):
            raise ValidationError("id, naam, merk, prijs en afbeelding zijn verplicht")

        try:
            product = Product(
                id=candidate.id,
                naam=candidate.naam,
                merk=candidate.merk,
                prijs=_coerce_price(candidate.prijs),
                afbeelding=candidate.afbeelding,
                kleur=candidate.kleur or "",
                maten=list(candidate.maten) if isinstance(candidate.maten, list) else [],
                tag=candidate.tag or [],
                gender=_coerce_gender(candidate.gender),
            )
        except SchemaError as exc:
            raise ValidationError(f"Ongeldig artikel: {exc.errors()[0].get('msg')}") from exc

        with self._lock:
            if product.id in self._index:
                raise DuplicateError("Item met deze id bestaat al")
            self._products.append(product)
            self._index[product.id] = product
            length = len(self._products)

        logger.info("Catalog item %s added (%d items)", product.id, length)
        return product
