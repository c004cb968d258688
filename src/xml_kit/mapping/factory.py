# src/xml_kit/mapping/factory.py

import os
from functools import partial
from pathlib import Path

from xml_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import MAPPING_PATH_ENV, MappingConfig
from .lazy import LazyMappingTable
from .loaders import load_csv, load_yaml

_SUFFIX_FORMATS = {
    ".csv": "csv",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def create_mapping_table(
    config: MappingConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LazyMappingTable:
    """Create a lazily loaded mapping table from config.

    Nothing is read until the first lookup. Share the returned table between
    transforms; it loads once.

    Args:
        config: Mapping source configuration.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        LazyMappingTable wrapping the configured loader.

    Raises:
        ValueError: If no source is configured or the format is unknown.

    Example:
        >>> config = MappingConfig(source="translations.csv")
        >>> table = create_mapping_table(config)
        >>> records = transform(xml_bytes, table)
    """
    source = _get_source(config.source, MAPPING_PATH_ENV)
    fmt = config.format or _SUFFIX_FORMATS.get(source.suffix.lower())

    if fmt == "csv":
        return LazyMappingTable(
            partial(
                load_csv,
                source,
                delimiter=config.delimiter,
                skip_header=config.skip_header,
                separator=config.separator,
                metrics_hook=metrics_hook,
            )
        )

    if fmt == "yaml":
        return LazyMappingTable(
            partial(
                load_yaml,
                source,
                separator=config.separator,
                metrics_hook=metrics_hook,
            )
        )

    raise ValueError(f"Unknown mapping format for {source}: {fmt}")


def _get_source(passed_value: str | Path | None, env_var: str) -> Path:
    if passed_value is not None:
        return Path(passed_value)
    env_value = os.environ.get(env_var)
    if env_value:
        return Path(env_value)
    raise ValueError(f"No mapping source configured; pass one or set {env_var}")
