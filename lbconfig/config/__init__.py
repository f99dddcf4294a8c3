"""Configuration system: turning cluster descriptors into validated objects.

Cluster descriptors arrive as proto3-JSON shaped payloads (from the transport,
or from YAML/JSON files on disk). They are validated into Pydantic models so
that every field has a type and every malformed payload produces a clear
error before any policy conversion happens.
"""
from __future__ import annotations

import enum
from typing import Annotated, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class ValidationType(enum.Enum):
    """Types of value validation we support."""

    SHOULD_BE_NON_NEGATIVE = "should_be_non_negative"


class Config(BaseModel):
    """Base class for all proto-shaped configuration messages.

    Attribute names are snake_case; the lowerCamelCase names used by proto3
    JSON are accepted as aliases. Messages are immutable once validated, and
    unknown fields are rejected unless a subclass relaxes that.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    @staticmethod
    def check(left: T, validation_type: ValidationType) -> T:
        """Validate a value against a constraint, raising ValueError on failure."""
        match validation_type:
            case ValidationType.SHOULD_BE_NON_NEGATIVE:
                if left < 0:  # type: ignore[operator]
                    raise ValueError(
                        f"Validation failed: {validation_type.name}: {left!r} < 0"
                    )
                return left
            case _:
                raise ValueError(
                    f"Validation failed: unknown validation type {validation_type}"
                )


# Wrapper-type primitives (UInt32Value/UInt64Value) used by the payload messages
NonNegativeInt = Annotated[
    int,
    AfterValidator(lambda v: Config.check(v, ValidationType.SHOULD_BE_NON_NEGATIVE)),
]
