"""Domain-level exceptions.

All failures the core can report are subclasses of DomainException so the
CLI and HTTP layers can catch them uniformly and map them to exit codes or
status codes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or a required value is missing."""


class BusinessRuleError(DomainException):
    """Input is well-formed but a business rule forbids the operation."""


class InsufficientStockError(BusinessRuleError):
    """Requested quantity exceeds the product's available stock."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(need {requested}, have {available} available)"
        )


class CartEmptyError(BusinessRuleError):
    """Checkout was attempted with no cart or an empty cart."""


class DuplicateReviewError(BusinessRuleError):
    """The user has already reviewed this product."""


class InvalidStatusTransitionError(BusinessRuleError):
    """The order cannot move from its current status to the requested one."""


class AuthorizationError(DomainException):
    """The requester is neither the owner nor an admin."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ItemNotFoundError(EntityNotFoundError):
    """The cart has no line for the requested product."""


class StorageError(DomainException):
    """The storage backend failed to read or write."""
