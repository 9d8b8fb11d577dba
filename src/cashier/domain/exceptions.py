"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every rejection is raised before any ledger state is mutated.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(ValidationError):
    """A cart mutation would exceed the quantity still available for sale."""

    def __init__(self, product_id: str, available: int, requested: int) -> None:
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient inventory for product '{product_id}' "
            f"(available {available}, requested {requested})"
        )


class EmptyCartError(ValidationError):
    """Save or checkout attempted on a cart with no lines."""


class CartNotFoundError(EntityNotFoundError):
    """No saved cart exists with the given id."""

    def __init__(self, cart_id: str) -> None:
        self.cart_id = cart_id
        super().__init__(f"Saved cart '{cart_id}' not found")


class CheckoutFailedError(DomainException):
    """The order submission was rejected or never reached the backend.

    The live cart is left untouched so the cashier can retry.
    """


class CatalogFetchError(DomainException):
    """A stock catalog page could not be loaded."""
