"""Invoice layout: what goes on the page, in order.

These are layout instructions only. Turning them into a file is the job
of an ``InvoiceDocumentWriter``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HeaderBlock:
    shop_name: str
    logo_asset: str
    caption: str


@dataclass(frozen=True)
class MetadataBlock:
    """Label/value pairs, e.g. ``("Customer", "Ana")``."""

    fields: tuple[tuple[str, str], ...]

    def get(self, label: str) -> str | None:
        for name, value in self.fields:
            if name == label:
                return value
        return None


@dataclass(frozen=True)
class ItemTable:
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class TotalLine:
    text: str


@dataclass(frozen=True)
class NotesBlock:
    text: str


@dataclass(frozen=True)
class FooterBlock:
    caption: str


InvoiceBlock = HeaderBlock | MetadataBlock | ItemTable | TotalLine | NotesBlock | FooterBlock


@dataclass(frozen=True)
class Invoice:
    file_name: str
    blocks: tuple[InvoiceBlock, ...]

    def block(self, kind: type) -> InvoiceBlock | None:
        """Return the first block of the given type, if any."""
        for b in self.blocks:
            if isinstance(b, kind):
                return b
        return None


@dataclass(frozen=True)
class LogoImage:
    """Raw logo bytes, ready to embed."""

    mime_type: str
    data: bytes
