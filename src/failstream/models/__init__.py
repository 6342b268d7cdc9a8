"""failstream models.

This module provides the Pydantic configuration models, enums, and
constants shared across the package.
"""

from failstream.models.base import FailStreamBaseModel
from failstream.models.config import FaultCounterConfig
from failstream.models.enums import Role

__all__ = [
    "FailStreamBaseModel",
    "FaultCounterConfig",
    "Role",
]
