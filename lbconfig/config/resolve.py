"""
resolve provides type-URL normalization for hand-written descriptor files.
"""
from __future__ import annotations

from collections.abc import Mapping

from lbconfig.config.policy import TypeUrl


# Maps shorthand policy names to canonical type URLs so descriptor files
# can say `@type: round_robin` instead of the full envoy type URL
TYPE_ALIASES: dict[str, str] = {
    "ring_hash": TypeUrl.RING_HASH.value,
    "wrr_locality": TypeUrl.WRR_LOCALITY.value,
    "round_robin": TypeUrl.ROUND_ROBIN.value,
    "typed_struct": TypeUrl.TYPED_STRUCT.value,
    "udpa_typed_struct": TypeUrl.UDPA_TYPED_STRUCT.value,
}

# Keys under which an Any envelope names its payload type
TYPE_KEYS: frozenset[str] = frozenset({"@type", "typeUrl", "type_url"})

# Keys whose value is an Any envelope
ENVELOPE_KEYS: frozenset[str] = frozenset({"typedConfig", "typed_config"})


def normalize_type_urls(payload: object, *, in_envelope: bool = False) -> object:
    """
    Recursively expand shorthand type names inside typed payload envelopes.

    Only the type key of an envelope (the mapping stored under `typedConfig`)
    is rewritten. Custom payload fields keep whatever strings they carry,
    including a TypedStruct's own `typeUrl`, which names the custom policy.
    """
    if isinstance(payload, Mapping):
        # In the `@type` form the remaining keys belong to the payload itself
        type_keys = {"@type"} if "@type" in payload else TYPE_KEYS
        result: dict[str, object] = {}
        for k, v in payload.items():
            if in_envelope and k in type_keys and isinstance(v, str):
                result[k] = TYPE_ALIASES.get(v, v)
            else:
                result[k] = normalize_type_urls(v, in_envelope=k in ENVELOPE_KEYS)
        return result
    if isinstance(payload, list):
        return [normalize_type_urls(v) for v in payload]
    if isinstance(payload, tuple):
        return tuple(normalize_type_urls(v) for v in payload)
    return payload
