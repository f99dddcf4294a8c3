"""Process-level defaults for policy resolution.

These are the knobs that do not come from the cluster descriptor itself:
experimental feature flags and the set of policy providers this process can
actually instantiate.
"""
from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from lbconfig.lb.registry import BUILTIN_PROVIDERS


ENABLE_LEAST_REQUEST_ENV = "GRPC_EXPERIMENTAL_ENABLE_LEAST_REQUEST"
EXTRA_PROVIDERS_ENV = "LBCONFIG_EXTRA_PROVIDERS"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class Defaults(BaseModel):
    """Defaults shared by every resolution in this process.

    `enable_least_request` gates the legacy LEAST_REQUEST selector, and
    `providers` lists the policy names the default registry reports as
    implemented.
    """

    enable_least_request: bool = False
    providers: list[str] = Field(default_factory=lambda: list(BUILTIN_PROVIDERS))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Defaults":
        """Build defaults from environment variables."""
        env = os.environ if environ is None else environ
        flag = env.get(ENABLE_LEAST_REQUEST_ENV, "").strip().lower()
        extra = [
            name.strip()
            for name in env.get(EXTRA_PROVIDERS_ENV, "").split(",")
            if name.strip()
        ]
        providers = list(BUILTIN_PROVIDERS)
        for name in extra:
            if name not in providers:
                providers.append(name)
        return cls(enable_least_request=flag in _TRUTHY, providers=providers)
