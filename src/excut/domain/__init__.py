"""Domain layer - cutting value objects and errors."""

from .exceptions import InvalidConfiguration, InvalidInput
from .value_objects import Cutout, CuttingConfig

__all__ = [
    "Cutout",
    "CuttingConfig",
    "InvalidConfiguration",
    "InvalidInput",
]
