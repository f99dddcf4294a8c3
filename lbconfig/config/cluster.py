"""Cluster descriptor: the input this system resolves a policy for.

A cluster carries its policy choice in one of two shapes. The extensible
`load_balancing_policy` list always wins when present; otherwise the legacy
`lb_policy` enum and its sub-messages are used. Descriptors are normally
handed over already decoded, but can also be loaded from JSON or YAML files.
"""
from __future__ import annotations

import enum
import json
from pathlib import Path

import yaml
from pydantic import ConfigDict, Field

from lbconfig.config import Config, NonNegativeInt
from lbconfig.config.policy import LoadBalancingPolicy
from lbconfig.config.resolve import normalize_type_urls


class LbPolicy(str, enum.Enum):
    """Legacy policy selector."""

    ROUND_ROBIN = "ROUND_ROBIN"
    LEAST_REQUEST = "LEAST_REQUEST"
    RING_HASH = "RING_HASH"
    RANDOM = "RANDOM"
    MAGLEV = "MAGLEV"
    CLUSTER_PROVIDED = "CLUSTER_PROVIDED"
    LOAD_BALANCING_POLICY_CONFIG = "LOAD_BALANCING_POLICY_CONFIG"


class LegacyHashFunction(str, enum.Enum):
    """Hash functions the legacy ring hash config may request."""

    XX_HASH = "XX_HASH"
    MURMUR_HASH_2 = "MURMUR_HASH_2"


class RingHashLbConfig(Config):
    """Legacy ring hash parameters."""

    minimum_ring_size: NonNegativeInt | None = None
    maximum_ring_size: NonNegativeInt | None = None
    hash_function: LegacyHashFunction = LegacyHashFunction.XX_HASH


class LeastRequestLbConfig(Config):
    """Legacy least request parameters."""

    choice_count: NonNegativeInt | None = None


class Cluster(Config):
    """The load-balancing relevant part of a cluster descriptor.

    Fields unrelated to load balancing (timeouts, endpoints, TLS, ...) are
    ignored rather than rejected.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    lb_policy: LbPolicy = LbPolicy.ROUND_ROBIN
    ring_hash_lb_config: RingHashLbConfig = Field(default_factory=RingHashLbConfig)
    least_request_lb_config: LeastRequestLbConfig = Field(
        default_factory=LeastRequestLbConfig
    )
    load_balancing_policy: LoadBalancingPolicy | None = None

    @classmethod
    def from_path(cls, path: Path) -> "Cluster":
        """Load and validate a cluster descriptor from a JSON or YAML file.

        Shorthand payload types such as `@type: round_robin` are expanded to
        their full type URLs before validation.
        """
        text = path.read_text(encoding="utf-8")
        match path.suffix.lower():
            case ".json":
                payload = json.loads(text)
            case ".yml" | ".yaml":
                payload = yaml.safe_load(text)
            case s:
                raise ValueError(f"Unsupported format '{s}'")

        if payload is None:
            raise ValueError("Cluster descriptor is empty.")
        if not isinstance(payload, dict):
            raise ValueError(
                f"Cluster descriptor must be a dict, got {type(payload)!r}"
            )

        return cls.model_validate(normalize_type_urls(payload))
