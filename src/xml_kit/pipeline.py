# src/xml_kit/pipeline.py

import logging
from collections.abc import Iterable, Iterator
from time import monotonic
from typing import BinaryIO

from xml_kit.mapping.table import MappingLookup
from xml_kit.observability import names
from xml_kit.observability.base import MetricsHook, NoOpMetricsHook
from xml_kit.records.models import Record
from xml_kit.records.walker import DEFAULT_CHUNK_SIZE, transform
from xml_kit.sinks.base import RecordSink

logger = logging.getLogger(__name__)


def render_xml(
    source: bytes | BinaryIO,
    table: MappingLookup,
    sink: RecordSink,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> bytes:
    """Stream an XML document through ``transform`` into ``sink``.

    Raises whatever ``transform`` raises; a failed document produces no output.

    Example:
        >>> table = create_mapping_table(MappingConfig(source="translations.csv"))
        >>> pdf_bytes = render_xml(xml_bytes, table, PdfSink())
    """
    start = monotonic()
    sink_name = type(sink).__name__
    rendered = [0]

    def counted(records: Iterable[Record]) -> Iterator[Record]:
        for record in records:
            rendered[0] += 1
            yield record

    records = transform(
        source, table, chunk_size=chunk_size, metrics_hook=metrics_hook
    )
    output = sink.render(counted(records))

    elapsed_ms = 1000 * (monotonic() - start)
    labels = {"sink": sink_name}
    metrics_hook.record_latency(names.RENDER_DURATION, elapsed_ms, labels)
    metrics_hook.increment(names.RENDER_RECORDS_TOTAL, rendered[0], labels)
    logger.info(
        "Rendered %d records with %s (%d bytes)", rendered[0], sink_name, len(output)
    )
    return output
