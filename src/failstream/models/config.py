"""Declarative fault plans.

FaultCounterConfig describes when a counter fails and with which error, so
parametrized tests can build fresh counters from a table of plans.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from failstream.models.base import FailStreamBaseModel
from failstream.models.constants import MIN_FAULT_LIMIT


class FaultCounterConfig(FailStreamBaseModel):
    """Configuration for a FaultCounter.

    Attributes:
        limit: Consultation on which the counter starts failing
        error: Exception instance to inject; None selects InjectedFaultError
    """

    limit: int = Field(ge=MIN_FAULT_LIMIT, description="Consultation that triggers the fault")
    error: BaseException | None = Field(default=None, description="Error to inject")

    @field_validator("limit", mode="before")
    @classmethod
    def _reject_bool(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("limit must be an integer, not a bool")
        return value
