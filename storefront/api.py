"""
Storefront REST API: product catalog and a single shared shopping cart.

Run with:
    uvicorn storefront.api:app --port 3000
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from .cart import CartEngine
from .catalog import CatalogStore
from .errors import StorefrontError, ValidationError
from .schemas import (
    CartAdd,
    CartPatch,
    CartResponse,
    CartSummary,
    Product,
    ProductCreate,
    ProductCreated,
)

logger = logging.getLogger(__name__)

NOT_FOUND_PAGE = """<!doctype html>
<html><head><title>404</title></head>
<body><h1>404</h1><p>Deze pagina bestaat niet.</p><a href="/">Terug naar de winkel</a></body>
</html>"""


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Ongeldige aanvraag"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


def create_app(
    catalog: Optional[CatalogStore] = None,
    cart: Optional[CartEngine] = None,
) -> FastAPI:
    """Build the API around an explicitly owned catalog and cart."""

    catalog = catalog or CatalogStore.from_seed_file(settings.catalog_path)
    cart = cart or CartEngine(catalog, shipping_fee=settings.shipping_fee)

    app = FastAPI(title="Storefront API", version="1.0.0")
    app.state.catalog = catalog
    app.state.cart = cart

    @app.exception_handler(StorefrontError)
    async def _domain_error(request: Request, exc: StorefrontError) -> JSONResponse:
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("%s %s -> 400 %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        # an unsupported method on a known path is just another unmatched route
        if exc.status_code in (404, 405):
            return HTMLResponse(NOT_FOUND_PAGE, status_code=404)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    # ---------------- catalog ----------------

    @app.get("/api/clothes", response_model=List[Product])
    def list_clothes():
        """Return the whole catalog in seed order."""
        return catalog.list()

    @app.post("/api/clothes", response_model=ProductCreated, status_code=201)
    def add_clothes(payload: ProductCreate):
        """Append a product to the catalog."""
        item = catalog.add(payload)
        return ProductCreated(
            bericht="Artikel toegevoegd aan catalogus",
            item=item,
            catalogus_lengte=len(catalog),
        )

    # ---------------- cart ----------------

    @app.get("/api/cart", response_model=CartSummary)
    def get_cart():
        return cart.summary()

    @app.post("/api/cart", response_model=CartResponse)
    def add_to_cart(payload: CartAdd):
        """Add an item, or raise the quantity of an existing line."""
        if not payload.item_id:
            raise ValidationError("itemId is verplicht")
        summary = cart.add_item(payload.item_id, payload.quantity, payload.size)
        return CartResponse(bericht="Artikel toegevoegd aan mand", mand=summary)

    @app.patch("/api/cart/{item_id}", response_model=CartResponse)
    def update_cart_line(item_id: str, payload: CartPatch):
        if payload.delta is None:
            raise ValidationError("delta (integer) is verplicht")
        summary = cart.adjust_quantity(item_id, payload.delta)
        return CartResponse(bericht="Winkelmand bijgewerkt", mand=summary)

    @app.delete("/api/cart/{item_id}", response_model=CartResponse)
    def remove_cart_line(item_id: str):
        summary = cart.remove_item(item_id)
        return CartResponse(bericht="Artikel volledig verwijderd uit mand", mand=summary)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}

    return app


app = create_app()
