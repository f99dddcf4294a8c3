"""Resolution results: success and failure as plain values.

Every conversion step returns either `Ok`, carrying a canonical config, or
`Err`, carrying an error kind and a message. Callers propagate a failure by
returning it; nothing in the resolution path raises. `unwrap()` converts back
to an exception at the boundary where a caller prefers one.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, TypeAlias


# A mapping with exactly one key, the policy name, whose value holds the
# policy's parameters
CanonicalConfig: TypeAlias = dict[str, Any]


class ErrorKind(str, enum.Enum):
    """Why a resolution failed.

    CONFIG_INVALID: No usable candidate, or an unsupported legacy selector
    UNSUPPORTED_HASH_FUNCTION: A ring hash config asked for a hash other than XX_HASH
    RECURSION_EXCEEDED: Locality wrappers nested deeper than allowed
    PAYLOAD_DECODE_FAILURE: A typed payload could not be decoded as its type
    """

    CONFIG_INVALID = "config_invalid"
    UNSUPPORTED_HASH_FUNCTION = "unsupported_hash_function"
    RECURSION_EXCEEDED = "recursion_exceeded"
    PAYLOAD_DECODE_FAILURE = "payload_decode_failure"


class ResourceInvalidError(ValueError):
    """Raised by `Err.unwrap()`: the cluster's LB configuration is invalid."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True, slots=True)
class Ok:
    """A successful resolution."""

    config: CanonicalConfig

    @property
    def ok(self) -> bool:
        return True

    @property
    def policy_name(self) -> str:
        """The root key of the config."""
        (name,) = self.config
        return name

    def unwrap(self) -> CanonicalConfig:
        return self.config


@dataclass(frozen=True, slots=True)
class Err:
    """A failed resolution. Always fatal for the whole call."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> CanonicalConfig:
        raise ResourceInvalidError(self.kind, self.message)


Resolution: TypeAlias = Ok | Err
