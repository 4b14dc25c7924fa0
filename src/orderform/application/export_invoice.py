"""Application service: Export Invoice use case.

Renders an order's invoice and writes it next to the other downloads as
``Invoice_<customerName>.pdf``. A missing or unreadable logo is logged and
the invoice is produced without it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from orderform.application.order_store import OrderStore
from orderform.domain.exceptions import AssetLoadFailed
from orderform.domain.model.invoice import LogoImage
from orderform.domain.repository.invoice_output import InvoiceDocumentWriter, LogoSource
from orderform.domain.service.invoice_renderer import render

logger = logging.getLogger(__name__)


class ExportInvoiceHandler:

    def __init__(
        self,
        store: OrderStore,
        writer: InvoiceDocumentWriter,
        logo_source: LogoSource,
    ) -> None:
        self._store = store
        self._writer = writer
        self._logo_source = logo_source

    def handle(self, order_id: int, destination: Path) -> Path:
        order = self._store.get(order_id)
        invoice = render(order)

        logo: LogoImage | None
        try:
            logo = self._logo_source.load()
        except AssetLoadFailed as exc:
            logger.warning("Logo unavailable, exporting without it: %s", exc)
            logo = None

        destination.mkdir(parents=True, exist_ok=True)
        path = destination / invoice.file_name
        self._writer.write(invoice, logo, path)
        logger.info("Wrote invoice for order #%s to %s", order.id, path)
        return path
