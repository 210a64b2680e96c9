import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.cart import CartEngine
from storefront.catalog import CatalogStore
from storefront.client import StorefrontClient
from storefront.schemas import Product
from storefront.views import StorefrontView

SEED = [
    {"id": "a1", "naam": "Tee", "merk": "X", "prijs": 20, "afbeelding": "img.jpg", "gender": "unisex"},
    {
        "id": "d1",
        "naam": "Slip Dress",
        "merk": "Atelier",
        "prijs": 19.99,
        "afbeelding": "dress.jpg",
        "maten": ["S", "M"],
        "tag": ["#Dresses", "summer"],
        "gender": "women",
    },
    {
        "id": "j1",
        "naam": "Chore Jacket",
        "merk": "Werk",
        "prijs": 119,
        "afbeelding": "jacket.jpg",
        "maten": ["M", "L"],
        "tag": "Outerwear",
        "gender": "men",
    },
]


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore(Product(**record) for record in SEED)


@pytest.fixture
def cart(catalog: CatalogStore) -> CartEngine:
    return CartEngine(catalog, shipping_fee=7.0)


@pytest.fixture
def test_client(catalog: CatalogStore, cart: CartEngine) -> TestClient:
    return TestClient(create_app(catalog, cart))


@pytest.fixture
def api_client(test_client: TestClient) -> StorefrontClient:
    """StorefrontClient whose HTTP calls go through the in-process app."""
    return StorefrontClient(base_url="http://testserver", timeout=5.0, session=test_client)


@pytest.fixture
def view(api_client: StorefrontClient) -> StorefrontView:
    return StorefrontView(api_client)
