# src/xml_kit/mapping/models.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel

from xml_kit.errors import MappingRowError
from xml_kit.paths import DEFAULT_SEPARATOR, XmlPath

logger = logging.getLogger(__name__)

ROW_ARITY = 3


@dataclass(frozen=True)
class MappingEntry:
    """One row of the mapping table.

    ``header_path`` encodes the section a field belongs to. Its second-to-last
    segment is the display header, so ``Rechnung->Verkäufer->Name`` groups the
    field under ``Verkäufer``.
    """

    source_path: XmlPath
    label: str
    header_path: XmlPath | None = None

    @property
    def header(self) -> str | None:
        if self.header_path is None:
            return None
        return self.header_path.owner

    @classmethod
    def from_row(
        cls, row: Sequence[str], separator: str = DEFAULT_SEPARATOR
    ) -> MappingEntry:
        """Build an entry from a ``(sourcePath, headerPath, label)`` row."""
        if isinstance(row, str) or not isinstance(row, Sequence):
            raise MappingRowError(f"expected a sequence of fields: {row!r}")
        if len(row) != ROW_ARITY:
            raise MappingRowError(
                f"expected {ROW_ARITY} fields, got {len(row)}: {row!r}"
            )
        if not all(isinstance(field, str) for field in row):
            raise MappingRowError(f"all fields must be text: {row!r}")

        source, header, label = row
        source_path = XmlPath.parse(source, separator)
        if not source_path:
            raise MappingRowError(f"empty source path: {row!r}")
        header_path = XmlPath.parse(header, separator) if header else None
        if header_path and header_path.owner is None:
            logger.debug(
                "Header path %r has no section segment with separator %r; "
                "%s gets no header",
                header,
                separator,
                source_path,
            )
        return cls(
            source_path=source_path,
            label=label.strip(),
            header_path=header_path or None,
        )


class MappingRow(BaseModel):
    """Row format of YAML mapping files."""

    source_path: str
    label: str
    header_path: str | None = None

    class Config:
        extra = "forbid"

    def to_entry(self, separator: str = DEFAULT_SEPARATOR) -> MappingEntry:
        return MappingEntry.from_row(
            (self.source_path, self.header_path or "", self.label), separator
        )


@dataclass(frozen=True)
class RowDiagnostic:
    """Why a row was left out of the table. Row numbers are 1-based."""

    row_number: int
    row: object
    message: str
