"""Policy list resolver: pick the first usable candidate.

Candidates are tried in list order. A candidate is usable when its payload
converts into a canonical config and the config's root key has a provider in
the registry. Unknown payload types and unregistered policies are skipped
with a warning; every `Err` a converter returns aborts the whole resolution.
"""
from __future__ import annotations

from rich.markup import escape

from lbconfig.config.policy import LoadBalancingPolicy
from lbconfig.console.logger import Logger, get_logger
from lbconfig.lb.converters import ConverterTable, default_converters
from lbconfig.lb.registry import ProviderRegistry
from lbconfig.lb.result import CanonicalConfig, Err, ErrorKind, Resolution


MAX_RECURSION = 16


class PolicyListResolver:
    """Resolves an extensible policy list into one canonical config.

    The registry and converter table are passed in, never looked up
    globally. The logger defaults to the console singleton.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        converters: ConverterTable | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.registry = registry
        self.converters = converters if converters is not None else default_converters()
        self.logger = logger if logger is not None else get_logger()

    def resolve(self, policy: LoadBalancingPolicy, depth: int = 0) -> Resolution:
        """Resolve `policy` at nesting level `depth` (0 for the cluster's own list)."""
        if depth > MAX_RECURSION:
            return Err(
                ErrorKind.RECURSION_EXCEEDED,
                "Maximum LB config recursion depth reached",
            )

        for candidate in policy.policies:
            typed_config = candidate.typed_extension_config.typed_config
            converter = self.converters.get(typed_config.type_url)
            if converter is not None:
                result = converter(typed_config, self, depth)
                if isinstance(result, Err):
                    return result
                if self.is_registered(result.config):
                    return result

            self.logger.warning(
                f"Policy {escape(typed_config.type_url)} not found in the LB "
                "registry, skipping"
            )

        # Nothing both converted and had a provider
        return Err(ErrorKind.CONFIG_INVALID, f"Invalid LoadBalancingPolicy: {policy!r}")

    def is_registered(self, config: CanonicalConfig) -> bool:
        """A config is usable if its single root key names a registered policy."""
        if len(config) != 1:
            return False
        (name,) = config
        return self.registry.has_provider(name)


def resolve_policy_list(
    policy: LoadBalancingPolicy,
    registry: ProviderRegistry,
    *,
    converters: ConverterTable | None = None,
    logger: Logger | None = None,
) -> Resolution:
    """Resolve `policy` from the top level with a one-off resolver."""
    resolver = PolicyListResolver(registry, converters=converters, logger=logger)
    return resolver.resolve(policy)
