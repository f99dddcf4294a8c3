"""Command-line interface for lbconfig.

Commands:
- resolve: Load a cluster descriptor and print its canonical LB config
- policies: List the payload types and policy providers this build knows
"""
from __future__ import annotations

import argparse
from pathlib import Path

from lbconfig.command import Command, PoliciesCommand, ResolveCommand
from lbconfig.config.cluster import Cluster
from lbconfig.config.defaults import Defaults


class _Args(argparse.Namespace):
    """Typed namespace for CLI arguments."""

    command: str | None = None
    descriptor: Path | None = None
    enable_least_request: bool = False
    providers: list[str] | None = None
    print_plan: bool = False


class CLI(argparse.ArgumentParser):
    """Minimal command-line interface over policy resolution."""

    def __init__(self) -> None:
        """Set up CLI with subcommands."""
        super().__init__(
            prog="lbconfig",
            description="lbconfig - resolve client-side load-balancing policy configs.",
        )

        _ = self.add_argument(
            "--version",
            action="version",
            version="%(prog)s 0.1.0",
            help="Show the version and exit.",
        )

        subparsers = self.add_subparsers(
            dest="command",
            parser_class=argparse.ArgumentParser,
        )

        resolve_parser = subparsers.add_parser(
            "resolve",
            help="Resolve a cluster descriptor into its canonical LB config.",
        )
        _ = resolve_parser.add_argument(
            "descriptor",
            type=Path,
            metavar="cluster",
            help="Cluster descriptor path (.json, .yml, or .yaml).",
        )
        _ = resolve_parser.add_argument(
            "--enable-least-request",
            action="store_true",
            default=False,
            dest="enable_least_request",
            help=" ".join(
                [
                    "Honour the legacy LEAST_REQUEST selector.",
                    "Also enabled by GRPC_EXPERIMENTAL_ENABLE_LEAST_REQUEST=true.",
                ]
            ),
        )
        _ = resolve_parser.add_argument(
            "--print-plan",
            action="store_true",
            default=False,
            dest="print_plan",
            help="Print an indented plan instead of JSON.",
        )
        self._add_provider_argument(resolve_parser)

        policies_parser = subparsers.add_parser(
            "policies",
            help="List recognised payload types and registered providers.",
        )
        self._add_provider_argument(policies_parser)

    @staticmethod
    def _add_provider_argument(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--provider",
            action="append",
            default=None,
            dest="providers",
            metavar="NAME",
            help=" ".join(
                [
                    "Register an additional policy provider name (repeatable).",
                    "Custom policies only resolve when their name is registered.",
                ]
            ),
        )

    def _effective_defaults(self, args: _Args) -> Defaults:
        """Environment defaults, overridden by explicit flags."""
        defaults = Defaults.from_env()
        providers = list(defaults.providers)
        for name in args.providers or []:
            if name not in providers:
                providers.append(name)
        return defaults.model_copy(
            update={
                "enable_least_request": defaults.enable_least_request
                or args.enable_least_request,
                "providers": providers,
            }
        )

    def parse_command(self, argv: list[str] | None = None) -> Command:
        """Parse CLI arguments into a typed command payload."""
        args = self.parse_args(argv, namespace=_Args())

        match args.command:
            case "resolve":
                if args.descriptor is None:
                    raise ValueError("resolve requires a cluster descriptor path.")
                return ResolveCommand(
                    cluster=Cluster.from_path(args.descriptor),
                    defaults=self._effective_defaults(args),
                    print_plan=bool(args.print_plan),
                )
            case "policies":
                return PoliciesCommand(defaults=self._effective_defaults(args))
            case None:
                raise ValueError("No command given; use `lbconfig resolve` or `lbconfig policies`.")
            case _:
                raise ValueError(f"Invalid command: {args.command}")
