# src/xml_kit/records/resolver.py

import logging

from xml_kit.mapping.table import MappingLookup
from xml_kit.paths import RepetitionCounter, XmlPath, suffix

from .models import ResolvedLabel

logger = logging.getLogger(__name__)


class Resolver:
    """Turns an element path into a display label and header decision.

    Holds the repetition counter of one traversal, so a resolver must not be
    reused across documents or shared between threads. The mapping table it
    reads from may be shared freely.
    """

    def __init__(
        self,
        table: MappingLookup,
        counter: RepetitionCounter | None = None,
    ) -> None:
        self._table = table
        self._counter = counter if counter is not None else RepetitionCounter()

    def resolve(self, path: XmlPath, depth: int | None = None) -> ResolvedLabel:
        """Resolve the label and header for one value at ``path``.

        Args:
            path: Full path of the element that holds the value.
            depth: Number of open elements. Defaults to the path depth.

        Returns:
            ResolvedLabel. Registers one emission at ``path`` with the
            repetition counter as a side effect.
        """
        if not path:
            raise ValueError("cannot resolve the empty path")
        if depth is None:
            depth = path.depth

        label = self._table.lookup_label(path) or (path.last or "").strip()

        header = None
        header_changed = False
        # Top-level fields have no owning group and never carry a header.
        if depth > 1:
            header = self._table.lookup_header(path)
            if header:
                owner = (path.owner or "").strip()
                header_changed = header != owner
            else:
                header = None

        ordinal = self._counter.next(path)
        label = suffix(label, ordinal)

        logger.debug(
            "Resolved %s -> label=%r header=%r changed=%s",
            path,
            label,
            header,
            header_changed,
        )
        return ResolvedLabel(label=label, header=header, header_changed=header_changed)
