# src/xml_kit/mapping/config.py

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from xml_kit.paths import DEFAULT_SEPARATOR

MappingFormat = Literal["csv", "yaml"]

MAPPING_PATH_ENV = "XML_KIT_MAPPING_PATH"


@dataclass(frozen=True)
class MappingConfig:
    """Configuration for a mapping table source.

    Immutable. Explicit. Only the source location falls back to the environment.
    """

    source: str | Path | None = None  # Falls back to XML_KIT_MAPPING_PATH
    format: MappingFormat | None = None  # Inferred from the file suffix
    delimiter: str = ","
    skip_header: bool = True
    separator: str = DEFAULT_SEPARATOR
