# src/xml_kit/mapping/__init__.py

"""Mapping table layer for xml-kit.

Maps a hierarchical element path to a display label and an optional section
header.

Design principles:
- Immutable: a built table never changes, so transforms can share it
- Injectable: callers own the table, there is no module-level state
- Fail closed per row: a malformed row is skipped with a diagnostic
- Fail loudly per source: an unreadable source is never an empty table

Example:
    >>> from xml_kit.mapping import MappingConfig, create_mapping_table
    >>>
    >>> table = create_mapping_table(MappingConfig(source="translations.csv"))
    >>> table.lookup_label(XmlPath(("Invoice", "ID")))
    'Rechnungsnummer'
"""

from .config import MAPPING_PATH_ENV, MappingConfig, MappingFormat
from .factory import create_mapping_table
from .lazy import LazyMappingTable
from .loaders import load_csv, load_yaml
from .models import MappingEntry, MappingRow, RowDiagnostic
from .table import MappingLookup, MappingTable

__all__ = [
    # Factory
    "create_mapping_table",
    # Loaders
    "load_csv",
    "load_yaml",
    # Tables
    "LazyMappingTable",
    "MappingLookup",
    "MappingTable",
    # Config
    "MAPPING_PATH_ENV",
    "MappingConfig",
    "MappingFormat",
    # Types
    "MappingEntry",
    "MappingRow",
    "RowDiagnostic",
]
