from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

ALL = "all"

GENDER_OPTIONS = (
    ("all", "All"),
    ("women", "Women"),
    ("men", "Men"),
    ("unisex", "Unisex"),
)

ProductLike = Union[Mapping[str, Any], Any]


def _field(product: ProductLike, name: str, default: Any = None) -> Any:
    if isinstance(product, Mapping):
        return product.get(name, default)
    return getattr(product, name, default)


def normalize_tag_value(tag: Any) -> str:
    """Case-fold a tag and strip one leading '#'."""

    if not tag:
        return ""
    tag = str(tag)
    if tag.startswith("#"):
        tag = tag[1:]
    return tag.lower()


def normalize_tags(tag_field: Any) -> List[str]:
    if isinstance(tag_field, (list, tuple)):
        return [normalize_tag_value(t) for t in tag_field]
    return [normalize_tag_value(tag_field)]


def product_gender(product: ProductLike) -> str:
    return (_field(product, "gender") or "unisex").lower()


def matches_category(product: ProductLike, category: str) -> bool:
    if category == ALL:
        return True
    return category in normalize_tags(_field(product, "tag"))


def matches_gender(product: ProductLike, gender: str) -> bool:
    """Unisex products show up under every specific gender as well."""

    if gender == ALL:
        return True
    value = product_gender(product)
    if gender == "unisex":
        return value == "unisex"
    return value == gender or value == "unisex"


def filter_products(
    products: Iterable[ProductLike],
    category: str = ALL,
    gender: str = ALL,
) -> List[ProductLike]:
    return [
        p for p in products
        if matches_category(p, category) and matches_gender(p, gender)
    ]


def available_categories(products: Iterable[ProductLike]) -> List[str]:
    """Distinct non-empty normalized tags, sorted."""

    tags = set()
    for p in products:
        tags.update(t for t in normalize_tags(_field(p, "tag")) if t)
    return sorted(tags)
