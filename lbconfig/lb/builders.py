"""Config builders: the canonical shape of each known policy.

Every builder returns a fresh mapping with exactly one root key, the policy
name, whose value holds that policy's parameters. Keys are inserted in a
fixed order so rendered output is stable.
"""
from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from lbconfig.lb.result import CanonicalConfig, Err, ErrorKind


ROUND_ROBIN_FIELD_NAME = "round_robin"

RING_HASH_FIELD_NAME = "ring_hash_experimental"
MIN_RING_SIZE_FIELD_NAME = "minRingSize"
MAX_RING_SIZE_FIELD_NAME = "maxRingSize"

LEAST_REQUEST_FIELD_NAME = "least_request_experimental"
CHOICE_COUNT_FIELD_NAME = "choiceCount"

WRR_LOCALITY_FIELD_NAME = "wrr_locality"
CHILD_POLICY_FIELD = "childPolicy"

# The only hash function ring_hash supports
SANCTIONED_HASH_FUNCTION = "XX_HASH"


def build_round_robin_config() -> CanonicalConfig:
    """Round robin is not configurable; its presence is the whole config."""
    return {ROUND_ROBIN_FIELD_NAME: {}}


def build_ring_hash_config(
    min_ring_size: int | None, max_ring_size: int | None
) -> CanonicalConfig:
    """Build a ring_hash config. Absent sizes are left out."""
    config: dict[str, Any] = {}
    if min_ring_size is not None:
        config[MIN_RING_SIZE_FIELD_NAME] = float(min_ring_size)
    if max_ring_size is not None:
        config[MAX_RING_SIZE_FIELD_NAME] = float(max_ring_size)
    return {RING_HASH_FIELD_NAME: config}


def build_least_request_config(choice_count: int | None) -> CanonicalConfig:
    """Build a least_request config. An absent choice count is left out."""
    config: dict[str, Any] = {}
    if choice_count is not None:
        config[CHOICE_COUNT_FIELD_NAME] = float(choice_count)
    return {LEAST_REQUEST_FIELD_NAME: config}


def build_wrr_locality_config(child_config: CanonicalConfig) -> CanonicalConfig:
    """Wrap an already resolved child config in the locality envelope."""
    return {WRR_LOCALITY_FIELD_NAME: {CHILD_POLICY_FIELD: [child_config]}}


def build_custom_config(type_url: str, config: Mapping[str, Any]) -> CanonicalConfig:
    """Wrap a custom policy's parameters under the name taken from its type URL.

    The name is everything after the last "/", or the whole URL if there is
    no "/".
    """
    return {custom_policy_name(type_url): dict(config)}


def custom_policy_name(type_url: str) -> str:
    return type_url.rsplit("/", 1)[-1]


def check_hash_function(hash_function: enum.Enum, *, prefix: str = "") -> Err | None:
    """Return an error unless `hash_function` is the sanctioned one.

    The hash function is not part of the built config, so it has to be
    validated here. Only defined enum members reach this check and fail with
    UNSUPPORTED_HASH_FUNCTION; a payload naming an undefined hash function
    never decodes and fails earlier with PAYLOAD_DECODE_FAILURE.
    """
    if hash_function.value == SANCTIONED_HASH_FUNCTION:
        return None
    return Err(
        ErrorKind.UNSUPPORTED_HASH_FUNCTION,
        f"{prefix}invalid ring hash function: {hash_function.value}",
    )
