import threading
from io import BytesIO

import pytest

from xml_kit.errors import ImbalancedStructure, MalformedXML, TransformError
from xml_kit.mapping import MappingTable
from xml_kit.observability import InMemoryMetricsHook, names
from xml_kit.paths import XmlPath
from xml_kit.records import Record, RecordWalker, transform

INVOICE = b"""<?xml version="1.0" encoding="UTF-8"?>
<Invoice>
  <ID>INV-1</ID>
  <Seller>
    <Name>ACME GmbH</Name>
    <City>Berlin</City>
  </Seller>
  <Line><Item>Bolt</Item></Line>
  <Line><Item>Nut</Item></Line>
</Invoice>
"""


@pytest.fixture
def empty_table() -> MappingTable:
    return MappingTable.empty()


@pytest.fixture
def invoice_table() -> MappingTable:
    return MappingTable.build(
        [
            ("Invoice->ID", "", "Rechnungsnummer"),
            ("Invoice->Seller->Name", "Rechnung->Verkäufer->Name", "Name"),
            ("Invoice->Seller->City", "Rechnung->Verkäufer->Ort", "Ort"),
            ("Invoice->Line->Item", "Rechnung->Line->Artikel", "Artikel"),
        ]
    )


class TestScenarios:
    def test_unmapped_leaf_uses_element_name(self, empty_table: MappingTable) -> None:
        records = list(transform(b"<a><b>hi</b></a>", empty_table))

        assert records == [
            Record(label="b", text="hi", header=None, header_changed=False)
        ]

    def test_mapped_leaf_gets_label_and_header(self) -> None:
        table = MappingTable.build([("a->b", "x->y->b", "Name")])

        records = list(transform(b"<a><b>hi</b></a>", table))

        assert records == [
            Record(label="Name", text="hi", header="y", header_changed=True)
        ]

    def test_repeated_siblings_are_numbered(self, empty_table: MappingTable) -> None:
        records = list(transform(b"<a><b>x</b><b>y</b></a>", empty_table))

        assert [(r.label, r.text) for r in records] == [("b", "x"), ("b 2", "y")]

    def test_mismatched_close_fails(self, empty_table: MappingTable) -> None:
        records: list[Record] = []

        with pytest.raises(TransformError):
            for record in transform(b"<a><b>x</a>", empty_table):
                records.append(record)

        assert records in ([], [Record(label="b", text="x")])


class TestTraversal:
    def test_one_record_per_text_node_in_document_order(
        self, invoice_table: MappingTable
    ) -> None:
        records = list(transform(INVOICE, invoice_table))

        assert [r.text for r in records] == [
            "INV-1",
            "ACME GmbH",
            "Berlin",
            "Bolt",
            "Nut",
        ]
        assert [r.label for r in records] == [
            "Rechnungsnummer",
            "Name",
            "Ort",
            "Artikel",
            "Artikel 2",
        ]

    def test_records_carry_their_path(self, invoice_table: MappingTable) -> None:
        records = list(transform(INVOICE, invoice_table))

        assert records[1].path == XmlPath(("Invoice", "Seller", "Name"))

    def test_header_follows_owner_comparison(self, invoice_table: MappingTable) -> None:
        records = list(transform(INVOICE, invoice_table))

        seller = records[1:3]
        assert all(r.header == "Verkäufer" for r in seller)
        assert all(r.header_changed for r in seller)

        # "Line" owns the items and is also their mapped header.
        items = records[3:]
        assert all(r.header == "Line" for r in items)
        assert not any(r.header_changed for r in items)

    def test_top_level_field_has_no_header(self, invoice_table: MappingTable) -> None:
        first = next(transform(INVOICE, invoice_table))

        assert first.header is None
        assert first.header_changed is False

    def test_whitespace_only_text_is_skipped(self, empty_table: MappingTable) -> None:
        xml = b"<a>\n   <b>  x  </b>\n\t<c>   </c>\n</a>"

        records = list(transform(xml, empty_table))

        assert records == [Record(label="b", text="x")]

    def test_mixed_content_yields_each_text_run(
        self, empty_table: MappingTable
    ) -> None:
        records = list(transform(b"<a>one<b>two</b>three</a>", empty_table))

        assert [(r.label, r.text) for r in records] == [
            ("a", "one"),
            ("b", "two"),
            ("a 2", "three"),
        ]

    def test_entities_and_cdata_join_into_one_text(
        self, empty_table: MappingTable
    ) -> None:
        xml = b"<a>x &amp; <![CDATA[<y>]]></a>"

        records = list(transform(xml, empty_table))

        assert records == [Record(label="a", text="x & <y>")]

    def test_comment_splits_text_runs(self, empty_table: MappingTable) -> None:
        records = list(transform(b"<a>x<!-- note -->y</a>", empty_table))

        assert [(r.label, r.text) for r in records] == [("a", "x"), ("a 2", "y")]

    def test_namespace_prefixes_are_dropped(self, empty_table: MappingTable) -> None:
        xml = (
            b'<inv:Invoice xmlns:inv="urn:example:invoice" xmlns="urn:default">'
            b"<inv:ID>7</inv:ID><Note>n</Note></inv:Invoice>"
        )

        records = list(transform(xml, empty_table))

        assert [r.path for r in records] == [
            XmlPath(("Invoice", "ID")),
            XmlPath(("Invoice", "Note")),
        ]

    def test_lookup_is_case_insensitive(self) -> None:
        table = MappingTable.build([("INVOICE->id", "", "Nummer")])

        records = list(transform(b"<Invoice><ID>1</ID></Invoice>", table))

        assert records[0].label == "Nummer"

    @pytest.mark.parametrize("chunk_size", [1, 7, 64])
    def test_chunking_does_not_change_output(
        self, invoice_table: MappingTable, chunk_size: int
    ) -> None:
        expected = list(transform(INVOICE, invoice_table))

        records = list(transform(INVOICE, invoice_table, chunk_size=chunk_size))

        assert records == expected

    def test_reads_binary_stream(self, invoice_table: MappingTable) -> None:
        records = list(transform(BytesIO(INVOICE), invoice_table, chunk_size=16))

        assert len(records) == 5

    def test_each_transform_starts_fresh_counts(
        self, empty_table: MappingTable
    ) -> None:
        xml = b"<a><b>x</b></a>"

        first = list(transform(xml, empty_table))
        second = list(transform(xml, empty_table))

        assert first[0].label == second[0].label == "b"

    def test_transform_is_lazy(self, empty_table: MappingTable) -> None:
        records = transform(b"<not xml", empty_table)

        with pytest.raises(MalformedXML):
            next(records)


@pytest.mark.parametrize(
    ("xml", "source"),
    [
        (b"<d1><d2>v</d2></d1>", "d1->d2"),
        (b"<d1><d2><d3>v</d3></d2></d1>", "d1->d2->d3"),
        (b"<d1><d2><d3><d4>v</d4></d3></d2></d1>", "d1->d2->d3->d4"),
    ],
)
class TestHeaderByDepth:
    def test_header_equal_to_parent_is_suppressed(
        self, xml: bytes, source: str
    ) -> None:
        owner = source.split("->")[-2]
        table = MappingTable.build([(source, f"root->{owner}->v", "Value")])

        (record,) = transform(xml, table)

        assert record.header == owner
        assert record.header_changed is False

    def test_header_naming_another_section_is_changed(
        self, xml: bytes, source: str
    ) -> None:
        table = MappingTable.build([(source, "root->Other->v", "Value")])

        (record,) = transform(xml, table)

        assert record.header == "Other"
        assert record.header_changed is True


class TestErrors:
    def test_empty_input_is_malformed(self, empty_table: MappingTable) -> None:
        with pytest.raises(MalformedXML):
            list(transform(b"", empty_table))

    def test_whitespace_input_is_malformed(self, empty_table: MappingTable) -> None:
        with pytest.raises(MalformedXML):
            list(transform(b"   \n", empty_table))

    def test_unclosed_element_is_malformed(self, empty_table: MappingTable) -> None:
        records: list[Record] = []

        with pytest.raises(MalformedXML):
            for record in transform(b"<a><b>x</b>", empty_table):
                records.append(record)

        assert records in ([], [Record(label="b", text="x")])

    def test_records_before_error_are_yielded(
        self, empty_table: MappingTable
    ) -> None:
        records: list[Record] = []

        with pytest.raises(MalformedXML):
            for record in transform(b"<a><b>x</b><c>y</d></a>", empty_table):
                records.append(record)

        assert records == [Record(label="b", text="x")]

    @pytest.mark.parametrize("chunk_size", [1, 64])
    def test_text_cut_by_error_is_not_yielded(
        self, empty_table: MappingTable, chunk_size: int
    ) -> None:
        """A text run interrupted by a parse error is dropped, not truncated."""
        records: list[Record] = []

        with pytest.raises(MalformedXML):
            for record in transform(
                b"<a>x&undefined;y</a>", empty_table, chunk_size=chunk_size
            ):
                records.append(record)

        assert records == []

    def test_str_source_is_rejected(self, empty_table: MappingTable) -> None:
        with pytest.raises(TypeError, match="bytes"):
            list(transform("<a/>", empty_table))  # type: ignore[arg-type]

    def test_invalid_chunk_size_raises(self, empty_table: MappingTable) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            RecordWalker(empty_table, chunk_size=0)

    def test_error_kinds_share_a_base(self) -> None:
        assert issubclass(MalformedXML, TransformError)
        assert issubclass(ImbalancedStructure, TransformError)


class TestMetrics:
    def test_success_metrics(self, invoice_table: MappingTable) -> None:
        hook = InMemoryMetricsHook()

        list(transform(INVOICE, invoice_table, metrics_hook=hook))

        assert hook.counters[names.TRANSFORM_RECORDS_EMITTED] == 5
        assert hook.counters[names.TRANSFORM_HEADERS_EMITTED] == 2
        assert hook.gauges[names.TRANSFORM_MAX_DEPTH] == 3
        assert len(hook.latencies[names.TRANSFORM_DURATION]) == 1
        assert hook.counters[names.TRANSFORM_ERRORS_TOTAL] == 0

    def test_error_metrics(self, empty_table: MappingTable) -> None:
        hook = InMemoryMetricsHook()

        with pytest.raises(MalformedXML):
            list(transform(b"<a>", empty_table, metrics_hook=hook))

        assert hook.counters[names.TRANSFORM_ERRORS_TOTAL] == 1
        assert names.TRANSFORM_DURATION not in hook.latencies


def test_concurrent_transforms_share_one_table(invoice_table: MappingTable) -> None:
    expected = list(transform(INVOICE, invoice_table))
    results: list[list[Record]] = []
    lock = threading.Lock()

    def worker() -> None:
        records = list(transform(INVOICE, invoice_table, chunk_size=8))
        with lock:
            results.append(records)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 6
    assert all(r == expected for r in results)
