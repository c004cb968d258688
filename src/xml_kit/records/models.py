# src/xml_kit/records/models.py

from dataclasses import dataclass, field

from xml_kit.paths import XmlPath


@dataclass(frozen=True)
class ResolvedLabel:
    """What the resolver decided for one text-bearing node."""

    label: str
    header: str | None
    header_changed: bool


@dataclass(frozen=True)
class Record:
    """One emitted (header, label, text) unit.

    ``label`` is never empty. ``header`` is carried on every record of a
    group, but a sink renders it only when ``header_changed`` is set.
    """

    label: str
    text: str
    header: str | None = None
    header_changed: bool = False
    path: XmlPath = field(default=XmlPath(), compare=False, repr=False)

    def lines(self) -> list[str]:
        """Display lines in sink order: header (when changed), then the pair."""
        lines = []
        if self.header_changed and self.header:
            lines.append(self.header)
        lines.append(f"{self.label}: {self.text}")
        return lines
