import logging

from xml_kit.errors import ImbalancedStructure

from .path import XmlPath

logger = logging.getLogger(__name__)


class PathTracker:
    """Stack of currently open element names, in open order.

    One tracker per traversal. Not thread-safe.
    """

    def __init__(self) -> None:
        self._stack: list[str] = []

    def push(self, name: str) -> None:
        self._stack.append(name)

    def pop(self) -> str:
        if not self._stack:
            logger.error("Close tag observed with no open element")
            raise ImbalancedStructure("close tag without a matching open tag")
        return self._stack.pop()

    def current(self) -> XmlPath:
        return XmlPath(tuple(self._stack))

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        return not self._stack
