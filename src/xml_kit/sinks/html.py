from collections.abc import Iterable
from html import escape

from xml_kit.records.models import Record

from .base import RecordSink


class HtmlSink(RecordSink):
    """Standalone HTML page. Headers become ``<h2>``, pairs become ``<p>``."""

    def __init__(self, title: str = "XML Document") -> None:
        self._title = title

    def render(self, records: Iterable[Record]) -> bytes:
        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{escape(self._title)}</title>",
            "</head>",
            "<body>",
        ]
        for record in records:
            if record.header_changed and record.header:
                parts.append(f"<h2>{escape(record.header)}</h2>")
            parts.append(f"<p>{escape(record.label)}: {escape(record.text)}</p>")
        parts.extend(["</body>", "</html>"])
        return ("\n".join(parts) + "\n").encode("utf-8")
