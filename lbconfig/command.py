"""Typed CLI command payloads.

Each command type represents a distinct user intent. The CLI parses arguments
into these typed objects, which are then dispatched to the appropriate handler.
"""
from __future__ import annotations

from dataclasses import dataclass

from lbconfig.config.cluster import Cluster
from lbconfig.config.defaults import Defaults


@dataclass(frozen=True, slots=True)
class ResolveCommand:
    """Request to resolve the LB config of one cluster descriptor."""

    cluster: Cluster
    defaults: Defaults
    print_plan: bool


@dataclass(frozen=True, slots=True)
class PoliciesCommand:
    """Request to list recognised payload types and registered providers."""

    defaults: Defaults


Command = ResolveCommand | PoliciesCommand
