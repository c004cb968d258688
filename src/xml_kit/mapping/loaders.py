# src/xml_kit/mapping/loaders.py

"""Readers that turn mapping sources into MappingTables.

Both readers fail closed per row (a malformed row becomes a diagnostic) and
fail loudly per source: a source that cannot be read raises
MappingSourceUnavailable instead of producing an empty table.
"""

import csv
import logging
from pathlib import Path
from time import monotonic

import yaml
from pydantic import ValidationError

from xml_kit.errors import MappingRowError, MappingSourceUnavailable
from xml_kit.observability import names
from xml_kit.observability.base import MetricsHook, NoOpMetricsHook
from xml_kit.paths import DEFAULT_SEPARATOR

from .models import MappingEntry, MappingRow, RowDiagnostic
from .table import MappingTable

logger = logging.getLogger(__name__)


def load_csv(
    path: str | Path,
    *,
    delimiter: str = ",",
    skip_header: bool = True,
    separator: str = DEFAULT_SEPARATOR,
    encoding: str = "utf-8-sig",
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> MappingTable:
    """Load ``sourcePath,headerPath,label`` rows from a delimited file.

    The first row is a column header and is skipped unless ``skip_header`` is
    False. Blank lines are ignored. Row numbers in diagnostics are file line
    numbers.
    """
    start = monotonic()
    path = Path(path)
    logger.info("Loading CSV mapping table from %s", path)

    rows: list[tuple[int, list[str]]] = []
    try:
        with open(path, newline="", encoding=encoding) as f:
            reader = csv.reader(f, delimiter=delimiter)
            if skip_header and next(reader, None) is None:
                raise MappingSourceUnavailable(f"Mapping source {path} is empty")
            for row in reader:
                if row:
                    rows.append((reader.line_num, row))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        metrics_hook.increment(names.MAPPING_LOAD_ERRORS_TOTAL, labels={"format": "csv"})
        logger.error("Cannot read mapping source %s: %s", path, exc)
        raise MappingSourceUnavailable(f"Cannot read mapping source {path}") from exc

    table = MappingTable.from_numbered_rows(rows, separator=separator)
    _record_load(metrics_hook, table, start, "csv")
    return table


def load_yaml(
    path: str | Path,
    *,
    separator: str = DEFAULT_SEPARATOR,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> MappingTable:
    """Load a YAML mapping file.

    Expected layout::

        mappings:
          - source_path: Invoice->Seller->Name
            header_path: Rechnung->Verkäufer->Name
            label: Name des Verkäufers
    """
    start = monotonic()
    path = Path(path)
    logger.info("Loading YAML mapping table from %s", path)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        metrics_hook.increment(names.MAPPING_LOAD_ERRORS_TOTAL, labels={"format": "yaml"})
        logger.error("Cannot read mapping source %s: %s", path, exc)
        raise MappingSourceUnavailable(f"Cannot read mapping source {path}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("mappings"), list):
        metrics_hook.increment(names.MAPPING_LOAD_ERRORS_TOTAL, labels={"format": "yaml"})
        raise MappingSourceUnavailable(
            f"Mapping source {path} has no 'mappings' list"
        )

    entries: list[tuple[int, MappingEntry]] = []
    diagnostics: list[RowDiagnostic] = []
    for row_number, raw in enumerate(data["mappings"], start=1):
        try:
            if not isinstance(raw, dict):
                raise MappingRowError(f"expected a mapping of fields: {raw!r}")
            entries.append((row_number, MappingRow(**raw).to_entry(separator)))
        except (ValidationError, MappingRowError) as exc:
            logger.warning("Skipping mapping row %d: %s", row_number, exc)
            diagnostics.append(RowDiagnostic(row_number, raw, str(exc)))

    table = MappingTable.from_numbered_rows(
        entries, separator=separator, diagnostics=diagnostics
    )
    _record_load(metrics_hook, table, start, "yaml")
    return table


def _record_load(
    metrics_hook: MetricsHook, table: MappingTable, start: float, fmt: str
) -> None:
    elapsed_ms = 1000 * (monotonic() - start)
    labels = {"format": fmt}
    metrics_hook.record_latency(names.MAPPING_LOAD_DURATION, elapsed_ms, labels)
    metrics_hook.increment(names.MAPPING_ROWS_LOADED, len(table), labels)
    metrics_hook.increment(names.MAPPING_ROWS_SKIPPED, len(table.diagnostics), labels)
