"""PySide6-backed implementation of InvoiceDocumentWriter.

The invoice is composed as HTML, laid out by a ``QTextDocument`` and
printed through ``QPdfWriter``. Qt needs a GUI application object for
font handling; one is created on first use with the offscreen platform
when none exists yet.
"""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSizeF
from PySide6.QtGui import QFont, QGuiApplication, QPageSize, QPdfWriter, QTextDocument

from orderform.domain.model.invoice import Invoice, LogoImage
from orderform.domain.repository.invoice_output import InvoiceDocumentWriter
from orderform.infrastructure.pdf.html_invoice import to_html

_app: QGuiApplication | None = None


def _ensure_gui_application() -> None:
    global _app
    if QGuiApplication.instance() is not None:
        return
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    _app = QGuiApplication([])


class QtPdfInvoiceWriter(InvoiceDocumentWriter):

    def __init__(self, resolution: int = 144, margin: float = 36) -> None:
        self._resolution = resolution
        self._margin = margin

    def write(self, invoice: Invoice, logo: LogoImage | None, path: Path) -> None:
        _ensure_gui_application()

        pdf_writer = QPdfWriter(str(path))
        pdf_writer.setPageSize(QPageSize(QPageSize.PageSizeId.A4))
        pdf_writer.setResolution(self._resolution)
        pdf_writer.setTitle(invoice.file_name.removesuffix(".pdf"))

        document = QTextDocument()
        document.setDocumentMargin(self._margin)
        document.setDefaultFont(QFont("Helvetica", 10))
        document.setHtml(to_html(invoice, logo))
        document.setPageSize(QSizeF(pdf_writer.width(), pdf_writer.height()))

        document.print_(pdf_writer)
