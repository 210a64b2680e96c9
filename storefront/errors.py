from __future__ import annotations


class StorefrontError(Exception):
    """Base class for domain errors; carries the HTTP status it maps to."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Malformed or missing required input."""

    status_code = 400


class NotFoundError(StorefrontError):
    """Referenced catalog item or cart line does not exist."""

    status_code = 404


class DuplicateError(StorefrontError):
    """Catalog id collision on add."""

    status_code = 400
