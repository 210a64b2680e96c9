from __future__ import annotations

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

Gender = Literal["women", "men", "unisex"]

GENDERS = ("women", "men", "unisex")


def _sizes_as_text(value: Any) -> Any:
    # shoe and trouser sizes often arrive as numbers
    if isinstance(value, list):
        return [v if isinstance(v, str) else str(v) for v in value]
    return value


class Product(BaseModel):
    """A catalog entry. Instances are never changed after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    naam: str
    merk: str
    prijs: float = Field(ge=0, allow_inf_nan=False)
    afbeelding: str
    kleur: str = ""
    maten: List[str] = Field(default_factory=list)
    tag: Union[str, List[str]] = Field(default_factory=list)
    gender: Gender = "unisex"

    @field_validator("maten", mode="before")
    @classmethod
    def maten_as_text(cls, value: Any) -> Any:
        return _sizes_as_text(value)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartLineView(_CamelModel):
    item_id: str
    naam: str
    merk: str
    prijs: float
    aantal: int
    regel_totaal: float
    afbeelding: str
    size: Optional[str] = None


class CartSummary(_CamelModel):
    items: List[CartLineView] = Field(default_factory=list)
    item_count: int = 0
    subtotal: float = 0.0
    shipping: float = 0.0
    total: float = 0.0


# ---------------- request bodies ----------------

class ProductCreate(BaseModel):
    """Body of POST /api/clothes. Required fields are checked by the catalog."""

    id: Optional[str] = None
    naam: Optional[str] = None
    merk: Optional[str] = None
    prijs: Optional[Union[float, str]] = None
    afbeelding: Optional[str] = None
    kleur: Optional[str] = None
    maten: Optional[List[str]] = None
    tag: Optional[Union[str, List[str]]] = None
    gender: Optional[str] = None

    @field_validator("maten", mode="before")
    @classmethod
    def maten_as_text(cls, value: Any) -> Any:
        return _sizes_as_text(value)


class CartAdd(_CamelModel):
    item_id: Optional[str] = None
    quantity: Optional[int] = None
    size: Optional[str] = None


class CartPatch(BaseModel):
    delta: Optional[StrictInt] = None


# ---------------- response bodies ----------------

class ProductCreated(_CamelModel):
    bericht: str
    item: Product
    catalogus_lengte: int


class CartResponse(BaseModel):
    bericht: str
    mand: CartSummary
