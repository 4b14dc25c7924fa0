"""Abstract collaborators for invoice export."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from orderform.domain.model.invoice import Invoice, LogoImage


class LogoSource(ABC):

    @abstractmethod
    def load(self) -> LogoImage:
        """Return the logo, or raise AssetLoadFailed."""


class InvoiceDocumentWriter(ABC):

    @abstractmethod
    def write(self, invoice: Invoice, logo: LogoImage | None, path: Path) -> None:
        """Produce the printable document for *invoice* at *path*."""
