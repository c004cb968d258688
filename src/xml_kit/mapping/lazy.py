import logging
import threading
from collections.abc import Callable

from xml_kit.paths import XmlPath

from .table import MappingTable

logger = logging.getLogger(__name__)


class LazyMappingTable:
    """Loads a MappingTable on first use, at most once per instance.

    Double-checked: the fast path reads the loaded table without taking the
    lock, the slow path takes the lock and checks again before loading.
    A loader error propagates and leaves the table unloaded, so the next call
    tries again.
    """

    def __init__(self, loader: Callable[[], MappingTable]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._table: MappingTable | None = None

    @property
    def loaded(self) -> bool:
        return self._table is not None

    def get(self) -> MappingTable:
        table = self._table
        if table is not None:
            return table

        with self._lock:
            if self._table is None:
                logger.debug("Loading mapping table")
                self._table = self._loader()
            return self._table

    def lookup_label(self, path: XmlPath) -> str | None:
        return self.get().lookup_label(path)

    def lookup_header(self, path: XmlPath) -> str | None:
        return self.get().lookup_header(path)
