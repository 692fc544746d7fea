"""Errors raised along the checkout path.

Each error carries the HTTP status the API reports it with; the route
handlers turn them into ``HTTPException`` responses and the client-side
payment session re-raises them after recording the message.
"""


class CheckoutError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"error": self.message}


class InvalidAmount(CheckoutError):
    def __init__(self, message: str = "Cannot process payment: invalid amount"):
        super().__init__(message)


class ProcessorError(CheckoutError):
    """Network failure, non-2xx or malformed response from the payment processor."""

    status_code = 502

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class MissingCartSnapshot(CheckoutError):
    def __init__(self, message: str = "Cart data not found in local storage"):
        super().__init__(message)


class Unauthenticated(CheckoutError):
    status_code = 401

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class InvalidCartData(CheckoutError):
    def __init__(self, message: str = "Invalid cart items format"):
        super().__init__(message)


class UserNotFound(CheckoutError):
    def __init__(self, user_id: str):
        super().__init__("User not found in database")
        self.user_id = user_id


class ProductsNotFound(CheckoutError):
    def __init__(self, missing_ids: list[str]):
        super().__init__("Some products not found in database")
        self.missing_ids = missing_ids

    def to_detail(self) -> dict:
        return {"error": self.message, "missing_product_ids": self.missing_ids}


class DatabaseWriteError(CheckoutError):
    status_code = 500

    def __init__(self, message: str = "Error saving order to database", details: str = ""):
        super().__init__(message)
        self.details = details

    def to_detail(self) -> dict:
        return {"error": self.message, "details": self.details}
