# app/core/errors.py
from uuid import UUID


class AppError(Exception):
    """Base class for errors rendered by the API exception handlers."""

    status_code = 400
    code = "bad_request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class BusinessError(AppError):
    status_code = 422
    code = "business_rule_violation"


class PermissionDeniedError(AppError):
    status_code = 403
    code = "forbidden"

    def __init__(self, message: str = "Forbidden", status_code: int = 403):
        super().__init__(message)
        self.status_code = status_code
        if status_code == 401:
            self.code = "unauthorized"


class InventoryMarkerWriteError(AppError):
    """Stock was incremented but the order's applied marker could not be set.

    Retrying blindly would apply the order a second time, so an operator has
    to verify the listed SKUs before anything else happens to this order.
    """

    status_code = 500
    code = "inventory_marker_write_failed"

    def __init__(self, order_id: UUID, applied_skus: list[str]):
        super().__init__(
            f"Inventory updated but failed to mark order {order_id} as applied. "
            "Verify stock manually before retrying."
        )
        self.order_id = order_id
        self.applied_skus = applied_skus


class QuoteNumberExhaustedError(AppError):
    status_code = 409
    code = "quote_numbers_exhausted"


class QuoteNumberConflictError(AppError):
    status_code = 409
    code = "quote_number_conflict"
