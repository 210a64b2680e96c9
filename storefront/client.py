from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from config import settings

logger = logging.getLogger(__name__)


class StorefrontClientError(Exception):
    """An API call failed, either on the network or with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StorefrontClient:
    """Thin JSON client for the storefront REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: Any = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._session = session or requests.Session()

    # ---------------- catalog ----------------

    def list_products(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/clothes")
        return data if isinstance(data, list) else []

    def add_product(self, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/clothes", json=product)

    # ---------------- cart ----------------

    def get_cart(self) -> Dict[str, Any]:
        return self._request("GET", "/api/cart")

    def add_to_cart(
        self,
        item_id: str,
        quantity: int = 1,
        size: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = {"itemId": item_id, "quantity": quantity, "size": size}
        return self._request("POST", "/api/cart", json=body)

    def change_quantity(self, item_id: str, delta: int) -> Dict[str, Any]:
        return self._request("PATCH", self._line_path(item_id), json={"delta": delta})

    def remove_line(self, item_id: str) -> Dict[str, Any]:
        return self._request("DELETE", self._line_path(item_id))

    # ---------------- plumbing ----------------

    @staticmethod
    def _line_path(item_id: str) -> str:
        return f"/api/cart/{quote(item_id, safe='')}"

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if json is not None:
            kwargs["json"] = json

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise StorefrontClientError(f"{method} {url} failed: {exc}") from exc

        if response.status_code >= 400:
            raise StorefrontClientError(
                self._error_message(response, method, url),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise StorefrontClientError(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _error_message(response: Any, method: str, url: str) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"{method} {url} failed {response.status_code}"
