#!/usr/bin/env python3
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psim",
        description="psim: a simulated PowerShell session in your terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  psim                                  # Start interactive session
  psim -c "Get-Location"                # Run one command and exit
  psim -c "Get-Process | Sort-Object"   # Pipelines work too
  psim -c "Get-Date" --json             # Print the result as JSON
  psim --config-reload                  # Reload configuration
        """,
    )

    parser.add_argument(
        "--version", "-v", action="store_true", help="Show version information"
    )
    parser.add_argument(
        "--command", "-c", metavar="TEXT", help="Run a single command line and exit"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="With --command, print the full result as JSON",
    )
    parser.add_argument(
        "--config", metavar="PATH", type=Path, help="Load configuration from PATH"
    )
    parser.add_argument(
        "--config-reload",
        action="store_true",
        help="Reload configuration and exit",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log debug output to the console"
    )
    return parser


def run_command(command: str, as_json: bool = False) -> int:
    from .core.interpreter import PowerShellInterpreter

    result = PowerShellInterpreter().execute(command)

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        if result.output:
            print(result.output)
    else:
        print(result.error, file=sys.stderr)

    return 0 if result.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        from . import __version__

        print(f"psim version {__version__}")
        return 0

    from .config import Config
    from .errors import ConfigError

    if args.config is not None:
        try:
            Config.load_file(args.config)
        except ConfigError as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1

    if args.config_reload:
        if Config.reload():
            print("Configuration reloaded successfully")
        else:
            print("Failed to reload configuration")
        return 0

    if args.command is not None:
        from .app import configure_logging

        configure_logging(args.debug)
        return run_command(args.command, as_json=args.json)

    try:
        from . import app

        return app.main(debug=args.debug)
    except KeyboardInterrupt:
        print("\nBye!")
        return 0


if __name__ == "__main__":
    sys.exit(main())
