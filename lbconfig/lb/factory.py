"""Top-level entry: one canonical LB config per cluster.

The extensible `load_balancing_policy` field always wins when it is present,
whatever the legacy fields say. Only clusters without it fall back to the
legacy `lb_policy` selector. The two shapes are never merged.
"""
from __future__ import annotations

from lbconfig.config.cluster import Cluster
from lbconfig.console.logger import Logger
from lbconfig.lb.converters import ConverterTable
from lbconfig.lb.legacy import convert_legacy
from lbconfig.lb.registry import ProviderRegistry
from lbconfig.lb.resolver import resolve_policy_list
from lbconfig.lb.result import Err, ErrorKind, Resolution


def new_config(
    cluster: Cluster,
    registry: ProviderRegistry,
    *,
    enable_least_request: bool = False,
    converters: ConverterTable | None = None,
    logger: Logger | None = None,
) -> Resolution:
    """Resolve the load-balancing config for `cluster`.

    Args:
        cluster: The cluster descriptor.
        registry: Answers which policy names have providers.
        enable_least_request: Honour the legacy LEAST_REQUEST selector.
        converters: Payload converters for the extensible list; the built-in
            table when omitted.
        logger: Receives a warning for every skipped candidate.

    Returns:
        `Ok` with a single-root-key config, or `Err` describing why the
        cluster's LB configuration is invalid.
    """
    if cluster.load_balancing_policy is not None:
        return resolve_policy_list(
            cluster.load_balancing_policy,
            registry,
            converters=converters,
            logger=logger,
        )

    result = convert_legacy(cluster, enable_least_request)
    if isinstance(result, Err):
        return result
    if not registry.has_provider(result.policy_name):
        return Err(
            ErrorKind.CONFIG_INVALID,
            f"Cluster {cluster.name}: no provider registered for "
            f"lb policy: {result.policy_name}",
        )
    return result
