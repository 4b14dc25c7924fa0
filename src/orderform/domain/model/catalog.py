"""Catalog: the shop's fixed price list.

Prices are read when an item is added to a cart and copied onto the line
item, so nothing downstream ever looks a price up again.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from orderform.domain.exceptions import UnknownProduct
from orderform.domain.model.value_objects import Money


class Catalog:
    """Read-only mapping from product name to unit price."""

    def __init__(self, prices: Mapping[str, Money]) -> None:
        for name, price in prices.items():
            if price.amount <= 0:
                raise ValueError(f"Catalog price for {name!r} must be positive")
        self._prices = MappingProxyType(dict(prices))

    def price_of(self, product: str) -> Money:
        try:
            return self._prices[product]
        except KeyError:
            raise UnknownProduct(f"Product not found: '{product}'") from None

    def products(self) -> list[str]:
        return list(self._prices)

    def __contains__(self, product: object) -> bool:
        return product in self._prices

    def __len__(self) -> int:
        return len(self._prices)


CATALOG = Catalog(
    {
        "Rose": Money(100),
        "Tulips": Money(80),
        "Keychains": Money(50),
    }
)

DEFAULT_PRODUCT = "Rose"
