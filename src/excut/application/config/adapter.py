"""Adapters from validated configuration to domain objects."""

from __future__ import annotations

from excut.application.config.loader import load_config_from_dict
from excut.application.config.schema import CutJobConfiguration
from excut.domain import CuttingConfig


def config_to_cutting_config(config: CutJobConfiguration) -> CuttingConfig:
    """Build the packing configuration from a job file."""
    return CuttingConfig(stock_size=config.stock_size, kerf=config.kerf)


def config_to_rows(config: CutJobConfiguration) -> list[tuple[str | None, int, int]]:
    """Convert the job's cutting table to raw ``(label, count, size)`` rows."""
    return [(row.label, row.count, row.size) for row in config.cutouts]


def merge_config_with_cli(
    config: CutJobConfiguration,
    stock_size: int | None = None,
    kerf: int | None = None,
    policy: str | None = None,
) -> CutJobConfiguration:
    """Apply command line overrides on top of a loaded configuration.

    Values left as None keep the configuration's value. The merged
    configuration is validated again so overrides cannot break the
    stock/kerf relationship silently.

    Raises:
        ConfigError: If the merged configuration is invalid.
    """
    data = config.model_dump()
    if stock_size is not None:
        data["stock_size"] = stock_size
    if kerf is not None:
        data["kerf"] = kerf
    if policy is not None:
        data["policy"] = policy
    return load_config_from_dict(data)
