from .base import RecordSink
from .html import HtmlSink
from .pdf import PdfSink
from .text import TextSink

__all__ = [
    "HtmlSink",
    "PdfSink",
    "RecordSink",
    "TextSink",
]
