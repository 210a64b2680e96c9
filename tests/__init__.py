"""
Tests for the storefront

Unit tests cover the catalog store, cart engine and filters on their own;
component tests run the FastAPI app through TestClient with a fresh catalog
and cart per test, and drive the terminal client against it.
"""
