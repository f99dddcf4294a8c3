"""Extensible load-balancing policy configuration.

The extensible shape is an ordered list of candidate policies. Each candidate
wraps an opaque typed payload: a type URL naming the payload message plus the
encoded message itself. Payloads stay encoded until the resolver reaches them,
so a malformed payload deep in a fallback list is only reported when it is
actually consulted.
"""
from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, model_validator

from lbconfig.config import Config, NonNegativeInt


TYPE_URL_PREFIX = "type.googleapis.com/"


class TypeUrl(str, enum.Enum):
    """Type URLs of the payload messages the built-in converters understand."""

    RING_HASH = (
        TYPE_URL_PREFIX
        + "envoy.extensions.load_balancing_policies.ring_hash.v3.RingHash"
    )
    WRR_LOCALITY = (
        TYPE_URL_PREFIX
        + "envoy.extensions.load_balancing_policies.wrr_locality.v3.WrrLocality"
    )
    ROUND_ROBIN = (
        TYPE_URL_PREFIX
        + "envoy.extensions.load_balancing_policies.round_robin.v3.RoundRobin"
    )
    TYPED_STRUCT = TYPE_URL_PREFIX + "xds.type.v3.TypedStruct"
    UDPA_TYPED_STRUCT = TYPE_URL_PREFIX + "udpa.type.v1.TypedStruct"


class AnyPayload(Config):
    """An opaque typed payload (google.protobuf.Any).

    `value` holds the encoded message: JSON text, or an already-parsed
    mapping when the descriptor was decoded upstream. The proto3 JSON form
    `{"@type": url, ...fields}` is accepted as well.
    """

    type_url: str
    value: Any = None

    @model_validator(mode="before")
    @classmethod
    def _unfold_json_any(cls, data: Any) -> Any:
        """Turn the `@type` form into `type_url` + `value`."""
        if isinstance(data, dict) and "@type" in data:
            fields = {k: v for k, v in data.items() if k != "@type"}
            return {"type_url": data["@type"], "value": fields}
        return data


class TypedExtensionConfig(Config):
    """A named, typed extension config carrying one policy payload."""

    name: str = ""
    typed_config: AnyPayload


class Policy(Config):
    """One candidate in a load-balancing policy list."""

    typed_extension_config: TypedExtensionConfig


class LoadBalancingPolicy(Config):
    """An ordered list of candidate policies; the first usable one wins."""

    policies: list[Policy] = Field(default_factory=list)


# ─────────────────────────────────────────────────────────────────────────────
# Payload messages
# ─────────────────────────────────────────────────────────────────────────────


class HashFunction(str, enum.Enum):
    """Hash functions a ring_hash payload may request."""

    DEFAULT_HASH = "DEFAULT_HASH"
    XX_HASH = "XX_HASH"
    MURMUR_HASH_2 = "MURMUR_HASH_2"


class RingHash(Config):
    """Payload for the ring_hash policy."""

    hash_function: HashFunction = HashFunction.DEFAULT_HASH
    minimum_ring_size: NonNegativeInt | None = None
    maximum_ring_size: NonNegativeInt | None = None


class RoundRobin(Config):
    """Payload for the round_robin policy. It has no parameters."""


class WrrLocality(Config):
    """Payload for locality-weighted round robin over a child policy list."""

    endpoint_picking_policy: LoadBalancingPolicy = Field(
        default_factory=LoadBalancingPolicy
    )


class TypedStruct(Config):
    """Payload for custom policies: a type URL plus a free-form struct."""

    type_url: str = ""
    value: Any = None
