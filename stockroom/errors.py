"""
Error types raised by the store.

Every error carries a machine-readable ``code`` and a human-readable
``message`` so the dispatcher can hand it back to callers as a value.
"""


class StoreError(Exception):
    """Base class for all store failures."""

    code = "STORE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFound(StoreError):
    """A referenced item id does not exist."""

    code = "NOT_FOUND"


class InvalidInput(StoreError):
    """Empty name, negative quantity/price, or a malformed request."""

    code = "INVALID_INPUT"

    @classmethod
    def from_validation_error(cls, exc) -> "InvalidInput":
        """Flattens a pydantic ValidationError into a single readable message."""
        problems = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()))
            problems.append(f"{location}: {error['msg']}" if location else error["msg"])
        return cls("; ".join(problems) or str(exc))


class InsufficientStock(StoreError):
    """A sale asks for more units than are on hand."""

    code = "INSUFFICIENT_STOCK"
