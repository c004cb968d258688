# sinks/pdf.py

from collections.abc import Iterable
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from xml_kit.records.models import Record

from .base import RecordSink


class PdfSink(RecordSink):
    """
    A4 PDF renderer.
    - Headers in bold, with extra space above
    - One "label: value" line per record, wrapped at the right margin
    - New page when the bottom margin is reached
    """

    def __init__(
        self,
        *,
        font: str = "Helvetica",
        bold_font: str = "Helvetica-Bold",
        font_size: float = 12,
        margin: float = 15 * mm,
        title: str | None = None,
    ) -> None:
        self._font = font
        self._bold_font = bold_font
        self._font_size = font_size
        self._margin = margin
        self._title = title

    def render(self, records: Iterable[Record]) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        if self._title:
            pdf.setTitle(self._title)

        writer = _PageWriter(pdf, margin=self._margin, font_size=self._font_size)
        for record in records:
            if record.header_changed and record.header:
                writer.skip(self._font_size / 2)
                writer.write(record.header, self._bold_font)
            writer.write(f"{record.label}: {record.text}", self._font)

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()


class _PageWriter:
    """Top-down line cursor over a reportlab canvas."""

    def __init__(self, pdf: canvas.Canvas, *, margin: float, font_size: float) -> None:
        self._pdf = pdf
        self._margin = margin
        self._font_size = font_size
        self._leading = font_size * 1.4
        self._width, self._height = A4
        self._y = self._height - margin

    def skip(self, amount: float) -> None:
        self._y -= amount

    def write(self, text: str, font: str) -> None:
        max_width = self._width - 2 * self._margin
        for line in simpleSplit(text, font, self._font_size, max_width) or [""]:
            if self._y - self._leading < self._margin:
                self._pdf.showPage()
                self._y = self._height - self._margin
            self._pdf.setFont(font, self._font_size)
            self._pdf.drawString(self._margin, self._y - self._font_size, line)
            self._y -= self._leading
