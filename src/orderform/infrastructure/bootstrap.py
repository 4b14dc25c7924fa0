"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from orderform.application.deferred_delete import DELETE_DELAY_SECONDS, DeferredDeleter
from orderform.application.export_invoice import ExportInvoiceHandler
from orderform.application.form_controller import FormController
from orderform.application.order_store import ORDERS_SLOT, OrderStore
from orderform.infrastructure.persistence.file_key_value_storage import (
    FileKeyValueStorage,
)
from orderform.infrastructure.pdf.file_logo_source import FileLogoSource

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
LOGO_PATH = Path(__file__).resolve().parents[1] / "assets" / "logo.png"


def order_store(data_dir: Path = DEFAULT_DATA_DIR) -> OrderStore:
    """A store already loaded from the orders slot."""
    store = OrderStore(FileKeyValueStorage(data_dir), slot=ORDERS_SLOT)
    store.load()
    return store


def form_controller(store: OrderStore) -> FormController:
    return FormController(store)


def deferred_deleter(
    store: OrderStore, form: FormController | None = None
) -> DeferredDeleter:
    on_deleted = form.order_deleted if form is not None else None
    return DeferredDeleter(store, delay=DELETE_DELAY_SECONDS, on_deleted=on_deleted)


def export_invoice_handler(store: OrderStore) -> ExportInvoiceHandler:
    # Qt is only imported when an invoice is actually exported.
    from orderform.infrastructure.pdf.qt_pdf_writer import QtPdfInvoiceWriter

    return ExportInvoiceHandler(
        store=store,
        writer=QtPdfInvoiceWriter(),
        logo_source=FileLogoSource(LOGO_PATH),
    )
