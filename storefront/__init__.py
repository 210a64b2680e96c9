"""Demo storefront: product catalog, server-held cart and a terminal client."""

__version__ = "1.0.0"
