"""Domain-level exceptions.

All expected failures are expressed as subclasses of DomainException so
the CLI layer can catch them uniformly and display user-friendly messages.
Anything that is *not* a DomainException (I/O errors, corrupt data files)
is an unexpected failure and is allowed to propagate.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Bad or missing input, or a business rule violation.

    ``fields`` lists the offending input fields when the error comes from
    form-style validation (e.g. shipping details).
    """

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class AmountMismatch(DomainException):
    """The total declared by the client differs from the catalog total."""

    def __init__(self, declared: object, expected: object) -> None:
        super().__init__(
            f"Declared total {declared} does not match order total {expected}; "
            f"refresh the cart and try again"
        )
        self.declared = declared
        self.expected = expected


class UploadFailed(DomainException):
    """The payment-proof upload could not be stored. Safe to retry."""


class InvalidTransition(DomainException):
    """A state-machine transition is not allowed from the current state."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderNotFound(EntityNotFoundError):

    def __init__(self, order_id: object) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class Unauthorized(DomainException):
    """The current principal may not perform this operation."""


class DuplicateAccount(DomainException):
    """An account with the same phone number already exists."""
