"""Legacy adapter: the `lb_policy` enum onto the canonical shape.

Older clusters select their policy with a single enum and keep parameters in
policy-specific sub-messages. ROUND_ROBIN and LEAST_REQUEST are wrapped in
the locality envelope, matching what the locality-aware balancer expects for
these clusters. RING_HASH is not wrapped.
"""
from __future__ import annotations

from lbconfig.config.cluster import Cluster, LbPolicy
from lbconfig.lb.builders import (
    build_least_request_config,
    build_ring_hash_config,
    build_round_robin_config,
    build_wrr_locality_config,
    check_hash_function,
)
from lbconfig.lb.result import CanonicalConfig, Err, ErrorKind, Ok, Resolution


def convert_legacy(cluster: Cluster, enable_least_request: bool) -> Resolution:
    """Convert the legacy policy fields of `cluster`.

    LEAST_REQUEST is only honoured when `enable_least_request` is set; any
    selector other than the three supported ones is an error.
    """
    match cluster.lb_policy:
        case LbPolicy.RING_HASH:
            return convert_ring_hash(cluster)
        case LbPolicy.ROUND_ROBIN:
            return Ok(build_wrr_locality_config(build_round_robin_config()))
        case LbPolicy.LEAST_REQUEST if enable_least_request:
            return Ok(build_wrr_locality_config(convert_least_request(cluster)))
        case _:
            pass
    return Err(
        ErrorKind.CONFIG_INVALID,
        f"Cluster {cluster.name}: unsupported lb policy: {cluster.lb_policy.value}",
    )


def convert_ring_hash(cluster: Cluster) -> Resolution:
    lb_config = cluster.ring_hash_lb_config
    err = check_hash_function(lb_config.hash_function, prefix=f"Cluster {cluster.name}: ")
    if err is not None:
        return err
    return Ok(
        build_ring_hash_config(lb_config.minimum_ring_size, lb_config.maximum_ring_size)
    )


def convert_least_request(cluster: Cluster) -> CanonicalConfig:
    return build_least_request_config(cluster.least_request_lb_config.choice_count)
