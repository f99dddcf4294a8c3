"""Payload converters for the extensible policy list.

Each converter turns one typed payload into a canonical config. Converters
are looked up by the payload's type URL in a `ConverterTable`, so a new
policy kind only needs a converter and a `register()` call; the resolver's
loop never changes.

A converter returns `Ok` on success and `Err` for anything fatal: a payload
that does not decode as its declared type, or a recognised policy whose
parameters are semantically invalid.
"""
from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from pydantic import ValidationError

from lbconfig.config import Config
from lbconfig.config.policy import (
    AnyPayload,
    RingHash,
    RoundRobin,
    TypedStruct,
    TypeUrl,
    WrrLocality,
)
from lbconfig.lb.builders import (
    build_custom_config,
    build_ring_hash_config,
    build_round_robin_config,
    build_wrr_locality_config,
    check_hash_function,
)
from lbconfig.lb.result import Err, ErrorKind, Ok, Resolution

if TYPE_CHECKING:
    from lbconfig.lb.resolver import PolicyListResolver


M = TypeVar("M", bound=Config)

# (payload, resolver, depth) -> result. The resolver and depth are only
# needed by converters that recurse into a nested policy list.
Converter: TypeAlias = Callable[[AnyPayload, "PolicyListResolver", int], Resolution]


def unpack(payload: AnyPayload, message_type: type[M]) -> M | Err:
    """Decode `payload` as `message_type`."""
    raw = payload.value
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        if isinstance(raw, str):
            raw = json.loads(raw) if raw.strip() else None
        return message_type.model_validate({} if raw is None else raw)
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        return Err(
            ErrorKind.PAYLOAD_DECODE_FAILURE,
            f"Unable to unpack typedConfig for: {payload.type_url}: {e}",
        )


def convert_ring_hash(
    payload: AnyPayload, resolver: "PolicyListResolver", depth: int
) -> Resolution:
    """Convert a ring_hash payload. Only XX_HASH is accepted."""
    ring_hash = unpack(payload, RingHash)
    if isinstance(ring_hash, Err):
        return ring_hash
    err = check_hash_function(ring_hash.hash_function)
    if err is not None:
        return err
    return Ok(
        build_ring_hash_config(ring_hash.minimum_ring_size, ring_hash.maximum_ring_size)
    )


def convert_wrr_locality(
    payload: AnyPayload, resolver: "PolicyListResolver", depth: int
) -> Resolution:
    """Resolve the nested child list one level deeper, then wrap it."""
    wrr_locality = unpack(payload, WrrLocality)
    if isinstance(wrr_locality, Err):
        return wrr_locality
    child = resolver.resolve(wrr_locality.endpoint_picking_policy, depth + 1)
    if isinstance(child, Err):
        return child
    return Ok(build_wrr_locality_config(child.config))


def convert_round_robin(
    payload: AnyPayload, resolver: "PolicyListResolver", depth: int
) -> Resolution:
    """Round robin carries nothing but its type."""
    round_robin = unpack(payload, RoundRobin)
    if isinstance(round_robin, Err):
        return round_robin
    return Ok(build_round_robin_config())


def convert_custom(
    payload: AnyPayload, resolver: "PolicyListResolver", depth: int
) -> Resolution:
    """Convert a TypedStruct payload into a config named after its type URL."""
    typed_struct = unpack(payload, TypedStruct)
    if isinstance(typed_struct, Err):
        return typed_struct
    try:
        # An unset struct is an empty object; normalize to a plain JSON value tree
        value = {} if typed_struct.value is None else typed_struct.value
        raw_config = json.loads(json.dumps(value))
    except (TypeError, ValueError) as e:
        return Err(
            ErrorKind.PAYLOAD_DECODE_FAILURE,
            f"Unable to parse custom LB config JSON: {e}",
        )
    if not isinstance(raw_config, Mapping):
        return Err(
            ErrorKind.PAYLOAD_DECODE_FAILURE,
            "Custom LB config does not contain a JSON object",
        )
    return Ok(build_custom_config(typed_struct.type_url, raw_config))


class ConverterTable:
    """Maps payload type URLs to the converters that understand them."""

    def __init__(self) -> None:
        self._converters: dict[str, Converter] = {}

    def register(self, type_url: str, converter: Converter) -> None:
        """Register (or replace) the converter for `type_url`."""
        self._converters[type_url] = converter

    def get(self, type_url: str) -> Converter | None:
        return self._converters.get(type_url)

    def has_converter(self, type_url: str) -> bool:
        return type_url in self._converters

    def type_urls(self) -> list[str]:
        """Registered type URLs in registration order."""
        return list(self._converters)

    def copy(self) -> "ConverterTable":
        table = ConverterTable()
        table._converters = dict(self._converters)
        return table


def default_converters() -> ConverterTable:
    """A fresh table with the built-in policy kinds.

    least_request has no extensible payload type yet, so it can only be
    produced through the legacy selector.
    """
    table = ConverterTable()
    table.register(TypeUrl.RING_HASH.value, convert_ring_hash)
    table.register(TypeUrl.WRR_LOCALITY.value, convert_wrr_locality)
    table.register(TypeUrl.ROUND_ROBIN.value, convert_round_robin)
    table.register(TypeUrl.TYPED_STRUCT.value, convert_custom)
    table.register(TypeUrl.UDPA_TYPED_STRUCT.value, convert_custom)
    return table
