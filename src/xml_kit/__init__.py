# Errors
from .errors import (
    ImbalancedStructure,
    MalformedXML,
    MappingError,
    MappingRowError,
    MappingSourceUnavailable,
    TransformError,
    XmlKitError,
)

# Mapping
from .mapping import (
    LazyMappingTable,
    MappingConfig,
    MappingEntry,
    MappingTable,
    create_mapping_table,
    load_csv,
    load_yaml,
)

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Paths
from .paths import PathTracker, RepetitionCounter, XmlPath

# Pipeline
from .pipeline import render_xml

# Records
from .records import Record, RecordWalker, ResolvedLabel, Resolver, transform

# Sinks
from .sinks import HtmlSink, PdfSink, RecordSink, TextSink

__all__ = [
    # Errors
    "ImbalancedStructure",
    "MalformedXML",
    "MappingError",
    "MappingRowError",
    "MappingSourceUnavailable",
    "TransformError",
    "XmlKitError",
    # Mapping
    "LazyMappingTable",
    "MappingConfig",
    "MappingEntry",
    "MappingTable",
    "create_mapping_table",
    "load_csv",
    "load_yaml",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Paths
    "PathTracker",
    "RepetitionCounter",
    "XmlPath",
    # Pipeline
    "render_xml",
    # Records
    "Record",
    "RecordWalker",
    "ResolvedLabel",
    "Resolver",
    "transform",
    # Sinks
    "HtmlSink",
    "PdfSink",
    "RecordSink",
    "TextSink",
]
