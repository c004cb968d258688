# src/xml_kit/records/walker.py

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from time import monotonic
from typing import BinaryIO

from lxml import etree

from xml_kit.errors import ImbalancedStructure, MalformedXML, TransformError
from xml_kit.mapping.table import MappingLookup
from xml_kit.observability import names
from xml_kit.observability.base import MetricsHook, NoOpMetricsHook
from xml_kit.paths import PathTracker, RepetitionCounter

from .models import Record
from .resolver import Resolver

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

_START = "start"
_END = "end"
_TEXT = "text"


def _local_name(tag: str) -> str:
    # "{namespace}Tag" -> "Tag"
    return tag.rpartition("}")[2]


class _EventCollector:
    """lxml parser target that buffers events until the walker drains them.

    Adjacent character data (split by entities, CDATA sections or chunk
    boundaries) is joined into one text event. Comments and processing
    instructions end a text run but produce no event. A run is only emitted
    once markup ends it, so text cut short by a parse error is never seen.
    """

    def __init__(self) -> None:
        self._events: list[tuple[str, str]] = []
        self._text: list[str] = []

    def start(self, tag: str, attrib: dict) -> None:
        self._flush_text()
        self._events.append((_START, _local_name(tag)))

    def end(self, tag: str) -> None:
        self._flush_text()
        self._events.append((_END, _local_name(tag)))

    def data(self, data: str) -> None:
        self._text.append(data)

    def comment(self, text: str) -> None:
        self._flush_text()

    def pi(self, target: str, data: str | None = None) -> None:
        self._flush_text()

    def close(self) -> None:
        # lxml also calls this when parsing fails; an open run is incomplete.
        self.abort()

    def abort(self) -> None:
        self._text = []

    def drain(self) -> list[tuple[str, str]]:
        events, self._events = self._events, []
        return events

    def _flush_text(self) -> None:
        if self._text:
            self._events.append((_TEXT, "".join(self._text)))
            self._text = []


@dataclass
class _WalkStats:
    records: int = 0
    headers: int = 0
    max_depth: int = 0
    seen_root: bool = False


class RecordWalker:
    """Single forward pass over an XML document, yielding one Record per
    non-blank text node in document order.

    The walker itself holds no per-document state: every ``walk`` call gets
    its own path tracker and repetition counter, so one walker (and one
    mapping table) can serve concurrent callers.
    """

    def __init__(
        self,
        table: MappingLookup,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        self._table = table
        self._chunk_size = chunk_size
        self.metrics_hook = metrics_hook

    def walk(self, source: bytes | BinaryIO) -> Iterator[Record]:
        """Lazily transform ``source`` into Records.

        The iterator is one-shot. On failure, every Record yielded so far is
        valid, and the raised TransformError marks the document incomplete.

        Raises:
            MalformedXML: The input is not well-formed XML.
            ImbalancedStructure: A close tag had no matching open element.
        """
        start = monotonic()
        tracker = PathTracker()
        resolver = Resolver(self._table, RepetitionCounter())
        collector = _EventCollector()
        parser = etree.XMLParser(
            target=collector,
            resolve_entities=False,
            no_network=True,
        )
        stats = _WalkStats()

        try:
            fed = False
            for chunk in _iter_chunks(source, self._chunk_size):
                fed = True
                try:
                    parser.feed(chunk)
                except etree.XMLSyntaxError as exc:
                    collector.abort()
                    yield from self._drain(collector, tracker, resolver, stats)
                    raise MalformedXML(f"Error decoding XML: {exc}") from exc
                yield from self._drain(collector, tracker, resolver, stats)

            if not fed:
                raise MalformedXML("Error decoding XML: empty document")

            try:
                parser.close()
            except etree.XMLSyntaxError as exc:
                collector.abort()
                yield from self._drain(collector, tracker, resolver, stats)
                raise MalformedXML(f"Error decoding XML: {exc}") from exc
            yield from self._drain(collector, tracker, resolver, stats)

            if not stats.seen_root:
                raise MalformedXML("Error decoding XML: no root element")
            if not tracker.is_empty:
                raise MalformedXML(
                    f"Error decoding XML: unclosed element {tracker.current()}"
                )
        except TransformError as exc:
            self.metrics_hook.increment(
                names.TRANSFORM_ERRORS_TOTAL, labels={"error": type(exc).__name__}
            )
            logger.error(
                "Transform aborted after %d records: %s", stats.records, exc
            )
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.TRANSFORM_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.TRANSFORM_RECORDS_EMITTED, stats.records)
        self.metrics_hook.increment(names.TRANSFORM_HEADERS_EMITTED, stats.headers)
        self.metrics_hook.record_gauge(names.TRANSFORM_MAX_DEPTH, stats.max_depth)
        logger.info(
            "Transformed document: %d records, %d headers", stats.records, stats.headers
        )

    def _drain(
        self,
        collector: _EventCollector,
        tracker: PathTracker,
        resolver: Resolver,
        stats: _WalkStats,
    ) -> Iterator[Record]:
        for kind, value in collector.drain():
            if kind == _START:
                tracker.push(value)
                stats.seen_root = True
                stats.max_depth = max(stats.max_depth, tracker.depth)
            elif kind == _END:
                opened = tracker.pop()
                if opened != value:
                    raise ImbalancedStructure(
                        f"close tag {value!r} does not match open element {opened!r}"
                    )
            else:
                text = value.strip()
                # Whitespace-only nodes carry no data.
                if not text or tracker.is_empty:
                    continue
                path = tracker.current()
                resolved = resolver.resolve(path, tracker.depth)
                stats.records += 1
                if resolved.header_changed:
                    stats.headers += 1
                yield Record(
                    label=resolved.label,
                    text=text,
                    header=resolved.header,
                    header_changed=resolved.header_changed,
                    path=path,
                )


def transform(
    source: bytes | BinaryIO,
    table: MappingLookup,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Iterator[Record]:
    """Transform an XML document into a lazy sequence of Records.

    Example:
        >>> table = MappingTable.build([("a->b", "x->y->b", "Name")])
        >>> list(transform(b"<a><b>hi</b></a>", table))
        [Record(label='Name', text='hi', header='y', header_changed=True)]
    """
    walker = RecordWalker(table, chunk_size=chunk_size, metrics_hook=metrics_hook)
    return walker.walk(source)


def _iter_chunks(source: bytes | BinaryIO, chunk_size: int) -> Iterator[bytes]:
    if isinstance(source, str):
        raise TypeError("source must be bytes or a binary stream, not str")
    if isinstance(source, (bytes, bytearray, memoryview)):
        view = memoryview(source)
        for offset in range(0, len(view), chunk_size):
            yield bytes(view[offset : offset + chunk_size])
        return
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            return
        yield chunk
