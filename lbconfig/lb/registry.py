"""Provider registry: which policy names this process can instantiate.

The resolver only asks one question of a registry: is there a provider for
this policy name? Registries are passed into each resolution rather than
looked up globally, so callers (and tests) decide exactly which policies
count as implemented.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from lbconfig.lb.builders import (
    LEAST_REQUEST_FIELD_NAME,
    RING_HASH_FIELD_NAME,
    ROUND_ROBIN_FIELD_NAME,
    WRR_LOCALITY_FIELD_NAME,
)


PICK_FIRST_POLICY_NAME = "pick_first"

BUILTIN_PROVIDERS: tuple[str, ...] = (
    PICK_FIRST_POLICY_NAME,
    ROUND_ROBIN_FIELD_NAME,
    RING_HASH_FIELD_NAME,
    LEAST_REQUEST_FIELD_NAME,
    WRR_LOCALITY_FIELD_NAME,
)


@runtime_checkable
class ProviderRegistry(Protocol):
    def has_provider(self, name: str) -> bool: ...


class PolicyRegistry:
    """A set of policy names with registered providers."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: set[str] = set(names)

    def register(self, name: str) -> None:
        """Register a provider for `name`."""
        if not name:
            raise ValueError("Policy name must be non-empty")
        self._names.add(name)

    def deregister(self, name: str) -> None:
        """Remove the provider for `name`, if any."""
        self._names.discard(name)

    def has_provider(self, name: str) -> bool:
        return name in self._names

    def names(self) -> list[str]:
        """Registered names in sorted order."""
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)


def default_registry(extra: Iterable[str] = ()) -> PolicyRegistry:
    """A fresh registry holding the built-in providers plus `extra`."""
    registry = PolicyRegistry(BUILTIN_PROVIDERS)
    for name in extra:
        registry.register(name)
    return registry
