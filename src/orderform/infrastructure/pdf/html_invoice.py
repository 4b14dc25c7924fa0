"""Compose an Invoice layout into the HTML that Qt prints to PDF."""

from __future__ import annotations

import base64
import html

from orderform.domain.model.invoice import (
    FooterBlock,
    HeaderBlock,
    Invoice,
    InvoiceBlock,
    ItemTable,
    LogoImage,
    MetadataBlock,
    NotesBlock,
    TotalLine,
)

LOGO_SIZE = 96

_STYLE = """
body { font-family: Helvetica, Arial, sans-serif; font-size: 10pt; color: #000000; }
.header { text-align: center; }
.shop { font-size: 22pt; color: #1e5b33; font-weight: bold; }
.caption { font-size: 12pt; color: #646464; }
.meta td { padding: 2px 12px 2px 0; }
.items { width: 100%; border-collapse: collapse; margin-top: 12px; }
.items th { background-color: #f0fdf4; text-align: left; padding: 6px; }
.items td { padding: 4px 6px; border-bottom: 1px solid #eeeeee; }
.total { text-align: right; font-size: 14pt; font-weight: bold; margin-top: 12px; }
.notes { font-style: italic; color: #646464; margin-top: 16px; }
.footer { text-align: center; color: #969696; margin-top: 32px; }
"""


def logo_data_uri(logo: LogoImage) -> str:
    encoded = base64.b64encode(logo.data).decode("ascii")
    return f"data:{logo.mime_type};base64,{encoded}"


def to_html(invoice: Invoice, logo: LogoImage | None = None) -> str:
    body = "\n".join(_block_html(block, logo) for block in invoice.blocks)
    return (
        "<html><head><meta charset=\"utf-8\"/>"
        f"<style>{_STYLE}</style></head>"
        f"<body>\n{body}\n</body></html>"
    )


def _block_html(block: InvoiceBlock, logo: LogoImage | None) -> str:
    esc = html.escape
    if isinstance(block, HeaderBlock):
        logo_markup = ""
        if logo is not None:
            logo_markup = (
                f"<img src=\"{logo_data_uri(logo)}\" alt=\"{esc(block.shop_name)} logo\" "
                f"width=\"{LOGO_SIZE}\" height=\"{LOGO_SIZE}\"/><br/>"
            )
        return (
            f"<div class=\"header\">{logo_markup}"
            f"<div class=\"shop\">{esc(block.shop_name)}</div>"
            f"<div class=\"caption\">{esc(block.caption)}</div></div><hr/>"
        )
    if isinstance(block, MetadataBlock):
        rows = "".join(
            f"<tr><td><b>{esc(label)}:</b></td><td>{esc(value)}</td></tr>"
            for label, value in block.fields
        )
        return f"<table class=\"meta\">{rows}</table>"
    if isinstance(block, ItemTable):
        head = "".join(f"<th>{esc(h)}</th>" for h in block.header)
        rows = "".join(
            "<tr>" + "".join(f"<td>{esc(cell)}</td>" for cell in row) + "</tr>"
            for row in block.rows
        )
        return f"<table class=\"items\"><tr>{head}</tr>{rows}</table><hr/>"
    if isinstance(block, TotalLine):
        return f"<div class=\"total\">{esc(block.text)}</div>"
    if isinstance(block, NotesBlock):
        return f"<div class=\"notes\">{esc(block.text)}</div>"
    if isinstance(block, FooterBlock):
        return f"<div class=\"footer\">{esc(block.caption)}</div>"
    raise TypeError(f"Unsupported invoice block {type(block).__name__}")
