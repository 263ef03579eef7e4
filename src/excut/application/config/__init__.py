"""Cut job configuration loading and adaptation."""

from .adapter import config_to_cutting_config, config_to_rows, merge_config_with_cli
from .loader import ConfigError, load_config, load_config_from_dict
from .schema import SUPPORTED_VERSIONS, CutJobConfiguration, CutoutRowSchema

__all__ = [
    "ConfigError",
    "CutJobConfiguration",
    "CutoutRowSchema",
    "SUPPORTED_VERSIONS",
    "config_to_cutting_config",
    "config_to_rows",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
]
