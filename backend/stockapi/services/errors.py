"""Service-layer errors.

Every failure a service reports to its caller is a ``ServiceError`` with a
machine-readable ``kind``, a user-facing ``message`` and the HTTP status the
API layer should answer with. Unexpected storage errors are wrapped in
``PersistenceFailure`` whose message never includes the underlying detail.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for expected, user-reportable service failures."""

    kind = "error"
    status_code = 400

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.message = message
        self.errors = errors
        super().__init__(message)


class NotFound(ServiceError):
    kind = "not_found"
    status_code = 404


class InvalidInput(ServiceError):
    kind = "invalid_input"
    status_code = 400


class ProductInactive(ServiceError):
    kind = "product_inactive"
    status_code = 400

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__("Product is inactive")


class InsufficientStock(ServiceError):
    """Raised when an exit would take stock below zero."""

    kind = "insufficient_stock"
    status_code = 400

    def __init__(self, current_stock: int, requested: int):
        self.current_stock = current_stock
        self.requested = requested
        super().__init__(
            f"Insufficient stock. Current stock: {current_stock}, requested quantity: {requested}"
        )


class DuplicateBarcode(ServiceError):
    kind = "duplicate_barcode"
    status_code = 400


class EmailAlreadyRegistered(ServiceError):
    kind = "email_already_registered"
    status_code = 400


class AuthenticationFailed(ServiceError):
    kind = "authentication_failed"
    status_code = 401


class VerificationFailed(ServiceError):
    kind = "verification_failed"
    status_code = 400


class PersistenceFailure(ServiceError):
    """Storage failure. The transaction was rolled back; details are only logged."""

    kind = "persistence_failure"
    status_code = 500
