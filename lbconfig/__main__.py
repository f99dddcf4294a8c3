"""
__main__ provides the console-script entrypoint for the lbconfig package.
"""
from __future__ import annotations

import json
import sys
import traceback

import yaml

from lbconfig.cli import CLI
from lbconfig.command import PoliciesCommand, ResolveCommand
from lbconfig.console import logger
from lbconfig.lb import PolicyRegistry, default_converters, new_config
from lbconfig.lb.plan import Planner


def main(argv: list[str] | None = None) -> None:
    """
    main is the entrypoint for the `lbconfig` console script.
    """
    try:
        command = CLI().parse_command(argv)

        match command:
            case ResolveCommand() as c:
                registry = PolicyRegistry(c.defaults.providers)
                config = new_config(
                    c.cluster,
                    registry,
                    enable_least_request=c.defaults.enable_least_request,
                ).unwrap()
                if c.print_plan:
                    print(Planner().format(config))
                else:
                    print(json.dumps(config, indent=2))
            case PoliciesCommand() as c:
                logger.table(
                    title="Payload types",
                    columns=["type_url"],
                    rows=[[url] for url in default_converters().type_urls()],
                )
                logger.table(
                    title="Providers",
                    columns=["name"],
                    rows=[[name] for name in PolicyRegistry(c.defaults.providers).names()],
                )
            case _:
                raise ValueError(f"Invalid command payload: {type(command)!r}")
    except SystemExit as e:
        code = int(e.code) if isinstance(e.code, int) else 1
        if code == 0:
            raise
        sys.exit(code)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        print(f"details: {e!r}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"error: invalid YAML descriptor: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"error: unable to read descriptor: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"unexpected error: {type(e).__name__}: {e}", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
