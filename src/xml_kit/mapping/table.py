# src/xml_kit/mapping/table.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import Protocol

from xml_kit.errors import MappingRowError
from xml_kit.paths import DEFAULT_SEPARATOR, XmlPath

from .models import MappingEntry, RowDiagnostic

logger = logging.getLogger(__name__)

Row = MappingEntry | Sequence[str]


class MappingLookup(Protocol):
    """What the resolver needs from a mapping table."""

    def lookup_label(self, path: XmlPath) -> str | None: ...

    def lookup_header(self, path: XmlPath) -> str | None: ...


class MappingTable:
    """Immutable path -> (label, header) dictionary.

    Lookups are case-insensitive exact matches on the whole path. When several
    rows share a source path, the label comes from the first of them and the
    header from the first one whose header path names a section.

    Safe for concurrent reads once constructed.

    Example:
        >>> table = MappingTable.build([("a->b", "x->y->b", "Name")])
        >>> table.lookup_label(XmlPath(("A", "B")))
        'Name'
        >>> table.lookup_header(XmlPath(("a", "b")))
        'y'
    """

    def __init__(
        self,
        entries: Iterable[MappingEntry] = (),
        diagnostics: Iterable[RowDiagnostic] = (),
    ) -> None:
        self._entries = tuple(entries)
        self._diagnostics = tuple(diagnostics)

        labels: dict[tuple[str, ...], str] = {}
        headers: dict[tuple[str, ...], str] = {}
        for entry in self._entries:
            key = entry.source_path.key
            labels.setdefault(key, entry.label)
            header = entry.header
            if header is not None:
                headers.setdefault(key, header)

        self._labels = MappingProxyType(labels)
        self._headers = MappingProxyType(headers)

    @classmethod
    def build(
        cls, rows: Iterable[Row], *, separator: str = DEFAULT_SEPARATOR
    ) -> MappingTable:
        """Build a table from entries or raw ``(sourcePath, headerPath, label)`` rows.

        Malformed rows are skipped and reported in ``diagnostics``.
        """
        return cls.from_numbered_rows(enumerate(rows, start=1), separator=separator)

    @classmethod
    def from_numbered_rows(
        cls,
        rows: Iterable[tuple[int, Row]],
        *,
        separator: str = DEFAULT_SEPARATOR,
        diagnostics: Iterable[RowDiagnostic] = (),
    ) -> MappingTable:
        entries: list[MappingEntry] = []
        skipped = list(diagnostics)

        for row_number, row in rows:
            if isinstance(row, MappingEntry):
                entries.append(row)
                continue
            try:
                entries.append(MappingEntry.from_row(row, separator))
            except MappingRowError as exc:
                logger.warning("Skipping mapping row %d: %s", row_number, exc)
                skipped.append(RowDiagnostic(row_number, row, str(exc)))

        skipped.sort(key=lambda diagnostic: diagnostic.row_number)
        table = cls(entries, skipped)
        logger.info(
            "Built mapping table: %d entries, %d rows skipped",
            len(entries),
            len(skipped),
        )
        return table

    @classmethod
    def empty(cls) -> MappingTable:
        return cls()

    def lookup_label(self, path: XmlPath) -> str | None:
        # an empty label behaves like a missing one
        return self._labels.get(path.key) or None

    def lookup_header(self, path: XmlPath) -> str | None:
        return self._headers.get(path.key)

    @property
    def entries(self) -> tuple[MappingEntry, ...]:
        return self._entries

    @property
    def diagnostics(self) -> tuple[RowDiagnostic, ...]:
        return self._diagnostics

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, XmlPath) and path.key in self._labels
