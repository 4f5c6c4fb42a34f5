"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the stock ledger can turn them into operation results and the CLI layer
can display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidQuantityError(ValidationError):
    """A quantity was zero or negative where a positive one is required."""


class InsufficientStockError(ValidationError):
    """On-hand stock does not cover the requested quantity."""


class ProductNotFoundError(EntityNotFoundError):
    """The product is not in the catalog."""


class ReservationFailedError(DomainException):
    """Stock could not be reserved for a cart.

    Raised with the underlying InvalidQuantityError, ProductNotFoundError
    or InsufficientStockError as ``__cause__``.
    """
