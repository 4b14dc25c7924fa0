"""Abstract key-value storage backing the order store.

Defined in the domain layer so the domain never depends on
infrastructure. Values are opaque strings, the same contract as a
browser's local storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key*, or None."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
