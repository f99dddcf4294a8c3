"""Plan printer: human-readable view of a canonical config.

Canonical configs nest child policies inside locality envelopes. The planner
renders that tree as indented lines so it is easy to see which policy ended
up where, and with which parameters.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable

from lbconfig.lb.builders import CHILD_POLICY_FIELD
from lbconfig.lb.result import CanonicalConfig


class Planner:
    """Renders canonical configs as indented plans."""

    def format(self, config: CanonicalConfig) -> str:
        """Render a human-readable plan for a resolved config."""
        return "\n".join(self.format_policy(config, indent=0, path="config"))

    def is_policy(self, value: Any) -> bool:
        """Check if value looks like a canonical config (one root key, mapping value)."""
        return (
            isinstance(value, Mapping)
            and len(value) == 1
            and isinstance(next(iter(value.values())), Mapping)
        )

    def format_policy(
        self, config: CanonicalConfig, *, indent: int, path: str
    ) -> Iterable[str]:
        """Format a policy node, its parameters and its children."""
        pad = " " * indent
        ((name, params),) = config.items()
        yield f"{pad}- policy={name} path={path}"

        for key, value in params.items():
            children = value if key == CHILD_POLICY_FIELD else None
            if isinstance(children, list) and all(self.is_policy(c) for c in children):
                yield f"{pad}  {key}:"
                for i, child in enumerate(children):
                    yield from self.format_policy(
                        child,
                        indent=indent + 4,
                        path=f"{path}.{name}.{key}[{i}]",
                    )
            else:
                yield f"{pad}  {key}={json.dumps(value, sort_keys=True)}"
