"""Base Pydantic model configuration for failstream models.

All failstream models inherit from FailStreamBaseModel to ensure consistent behavior:
- Immutability (frozen=True) so a plan cannot change under a running test
- Strict validation (extra="forbid") to catch typos and invalid fields
- Arbitrary types allowed, since injected errors are exception instances
"""

from pydantic import BaseModel, ConfigDict


class FailStreamBaseModel(BaseModel):
    """Base model for all failstream configuration objects.

    Example:
        >>> from pydantic import Field
        >>> class MyPlan(FailStreamBaseModel):
        ...     limit: int = Field(default=1, ge=0)
        >>>
        >>> plan = MyPlan(limit=3)
        >>> plan.limit
        3
        >>> plan.limit = 4  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        # Immutability: prevents accidental mutations after creation
        frozen=True,
        # Strict validation: reject unknown fields to catch typos
        extra="forbid",
        # Exception instances are stored as-is
        arbitrary_types_allowed=True,
        # Validate default values
        validate_default=True,
    )
