"""Load-balancing policy resolution.

Turns a cluster's policy selection (extensible list or legacy enum) into a
canonical config with a single root key naming the policy:

    {"wrr_locality": {"childPolicy": [{"round_robin": {}}]}}

Resolution never raises. `new_config` returns `Ok` or `Err`; call
`.unwrap()` to get the config or a `ResourceInvalidError`.
"""
from __future__ import annotations

from lbconfig.lb.converters import ConverterTable, default_converters
from lbconfig.lb.factory import new_config
from lbconfig.lb.registry import PolicyRegistry, ProviderRegistry, default_registry
from lbconfig.lb.resolver import MAX_RECURSION, PolicyListResolver
from lbconfig.lb.result import (
    CanonicalConfig,
    Err,
    ErrorKind,
    Ok,
    Resolution,
    ResourceInvalidError,
)

__all__ = [
    "CanonicalConfig",
    "ConverterTable",
    "Err",
    "ErrorKind",
    "MAX_RECURSION",
    "Ok",
    "PolicyListResolver",
    "PolicyRegistry",
    "ProviderRegistry",
    "Resolution",
    "ResourceInvalidError",
    "default_converters",
    "default_registry",
    "new_config",
]
