from collections.abc import Iterable

from xml_kit.records.models import Record

from .base import RecordSink


class TextSink(RecordSink):
    """Plain text, one line per header and per label/value pair."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def render(self, records: Iterable[Record]) -> bytes:
        lines = [line for record in records for line in record.lines()]
        if not lines:
            return b""
        return ("\n".join(lines) + "\n").encode(self._encoding)
