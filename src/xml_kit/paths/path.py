# src/xml_kit/paths/path.py

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SEPARATOR = "->"


@dataclass(frozen=True)
class XmlPath:
    """Breadcrumb of element names from the document root to a node.

    Compared by segment tuple, so a separator inside a segment name never
    needs escaping. Lookups that must ignore case go through ``key``.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str, separator: str = DEFAULT_SEPARATOR) -> XmlPath:
        """Parse a joined path such as ``"Invoice->Seller->Name"``.

        Surrounding whitespace is stripped from every segment and empty
        segments are dropped.
        """
        if not separator:
            raise ValueError("separator must not be empty")
        parts = (part.strip() for part in text.split(separator))
        return cls(tuple(part for part in parts if part))

    @property
    def key(self) -> tuple[str, ...]:
        return tuple(segment.casefold() for segment in self.segments)

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def last(self) -> str | None:
        return self.segments[-1] if self.segments else None

    @property
    def owner(self) -> str | None:
        """Name of the element one level above the leaf, if any."""
        return self.segments[-2] if len(self.segments) > 1 else None

    @property
    def parent(self) -> XmlPath:
        return XmlPath(self.segments[:-1])

    def child(self, name: str) -> XmlPath:
        return XmlPath(self.segments + (name,))

    def join(self, separator: str = DEFAULT_SEPARATOR) -> str:
        return separator.join(self.segments)

    def __str__(self) -> str:
        return self.join()

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __len__(self) -> int:
        return len(self.segments)
