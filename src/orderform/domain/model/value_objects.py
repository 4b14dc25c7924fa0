"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from orderform.domain.exceptions import InvalidQuantity, ValidationError

# ASCII digits only; ``\d`` would also accept other Unicode digits.
PHONE_PATTERN = re.compile(r"09[0-9]{9}")
PHONE_MAX_DIGITS = 11


@dataclass(frozen=True)
class Money:
    """Amount in whole pesos.

    The shop prices everything in whole units, so the amount is a plain
    int rather than a Decimal.
    """

    amount: int
    currency: str = "PHP"

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"₱{self.amount}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantity(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise InvalidQuantity("Quantity must be at least 1")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def parse(raw: int | str) -> Quantity:
        """Build a Quantity from form input, which may arrive as text."""
        if isinstance(raw, str):
            try:
                raw = int(raw.strip())
            except ValueError as exc:
                raise InvalidQuantity(f"Invalid quantity: {raw!r}") from exc
        return Quantity(raw)


def is_valid_phone(value: str) -> bool:
    """True when *value* starts with 09 and has exactly 11 digits."""
    return PHONE_PATTERN.fullmatch(value) is not None
