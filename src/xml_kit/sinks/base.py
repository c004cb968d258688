# sinks/base.py

from abc import ABC, abstractmethod
from collections.abc import Iterable

from xml_kit.records.models import Record


class RecordSink(ABC):
    @abstractmethod
    def render(self, records: Iterable[Record]) -> bytes:
        """
        Render a record stream into a finished document.

        Requirements:
        - Records are consumed once, in order
        - A header gets its own line, before the pair, only when header_changed is set
        - Every record renders "{label}: {text}" on its own line
        - An error raised by the record stream propagates; no partial document
        """
        raise NotImplementedError
