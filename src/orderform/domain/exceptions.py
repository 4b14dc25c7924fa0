"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A line item quantity is not a whole number of at least one."""


class EmptyCart(ValidationError):
    """An order was submitted without any line items."""

    def __init__(self) -> None:
        super().__init__("Please add at least one item to the order!")


class ValidationFailed(ValidationError):
    """One or more draft fields are invalid.

    ``fields`` maps each offending field name to its user-facing message,
    in the order the checks ran.
    """

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = dict(fields)
        super().__init__("; ".join(self.fields.values()))


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownProduct(EntityNotFoundError):
    """The product name is not in the catalog."""


class NotFound(EntityNotFoundError):
    """No order with the requested id is in the store."""


class DuplicateId(DomainException):
    """An order with the same id is already in the store."""


class CorruptStorage(DomainException):
    """The stored order slot is not a readable JSON array."""


class AssetLoadFailed(DomainException):
    """The invoice logo could not be loaded. Never fatal to an export."""
