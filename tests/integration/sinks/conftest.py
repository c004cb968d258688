from io import BytesIO

import pdfplumber
import pytest

from xml_kit.mapping import MappingTable
from xml_kit.pipeline import render_xml
from xml_kit.sinks import PdfSink

INVOICE = b"""<?xml version="1.0" encoding="UTF-8"?>
<Invoice>
  <ID>INV-2024-001</ID>
  <Seller>
    <Name>ACME GmbH</Name>
    <City>Berlin</City>
  </Seller>
  <Buyer>
    <Name>Globex AG</Name>
  </Buyer>
  <Note>Thank you for your business.</Note>
  <Note>Payable within 30 days.</Note>
</Invoice>
"""


def _invoice_table() -> MappingTable:
    return MappingTable.build(
        [
            ("Invoice->ID", "", "Rechnungsnummer"),
            ("Invoice->Seller->Name", "Rechnung->Verkaeufer->Name", "Verkaeufername"),
            ("Invoice->Seller->City", "Rechnung->Verkaeufer->Ort", "Ort"),
            ("Invoice->Buyer->Name", "Rechnung->Kaeufer->Name", "Kaeufername"),
            ("Invoice->Note", "", "Bemerkung"),
        ]
    )


def _long_document(count: int) -> bytes:
    items = "".join(f"<Item>Position {i}</Item>" for i in range(count))
    return f"<Order>{items}</Order>".encode()


def _extract_lines(pdf_bytes: bytes) -> list[list[str]]:
    """Text lines per page."""
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        return [(page.extract_text() or "").splitlines() for page in pdf.pages]


@pytest.fixture(scope="module")
def invoice_pdf() -> bytes:
    """Render the sample invoice once, reuse across tests."""
    return render_xml(INVOICE, _invoice_table(), PdfSink(title="Invoice"))


@pytest.fixture(scope="module")
def invoice_pages(invoice_pdf: bytes) -> list[list[str]]:
    return _extract_lines(invoice_pdf)


@pytest.fixture(scope="module")
def long_pages() -> list[list[str]]:
    """A document long enough to need several pages."""
    pdf_bytes = render_xml(_long_document(150), MappingTable.empty(), PdfSink())
    return _extract_lines(pdf_bytes)
