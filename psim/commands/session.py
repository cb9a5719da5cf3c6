#!/usr/bin/env python3
import fnmatch
import re
from typing import Any, List, Optional

from ..core.registry import CommandContext, HandlerOutput, OutputShape, command
from ..errors import MissingArgumentError
from .base import flag_value, positional_args, render_properties, render_table

MODULE_VERSION = "7.4.0.0"
VALUE_WIDTH = 30

_NAMED = re.compile(r"^-(Name|Value)(?:\s+|:)(.*)$", re.IGNORECASE | re.DOTALL)


def _display_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    return "[Object]"


def _parse_name_value(args: List[str]):
    named = {}
    positionals: List[str] = []
    index = 0
    while index < len(args):
        token = args[index]
        match = _NAMED.match(token)
        if match:
            named[match.group(1).lower()] = match.group(2)
        elif token.lower() in {"-name", "-value"}:
            if index + 1 >= len(args):
                raise MissingArgumentError(
                    "Set-Variable",
                    token[1:].capitalize(),
                    f"Set-Variable: {token} needs a value.",
                )
            named[token[1:].lower()] = args[index + 1]
            index += 1
        else:
            positionals.append(token)
        index += 1

    name: Optional[str] = named.get("name")
    value: Optional[str] = named.get("value")
    if name is None and positionals:
        name = positionals.pop(0)
    if value is None and positionals:
        value = positionals.pop(0)
    return name, value


@command(
    "Get-Variable",
    summary="Gets the variables in the current session",
    usage="Get-Variable [name-pattern]",
    category="Session",
)
def get_variable(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    pattern = flag_value(args, "-Name") or next(
        iter(positional_args(args, ("-Name",))), None
    )

    rows = []
    for name, value in ctx.state.variables.items():
        if pattern and not fnmatch.fnmatch(name.lower(), pattern.lower()):
            continue
        rows.append((name, _display_value(value)[:VALUE_WIDTH], "None"))

    table = render_table([("Name", 15), ("Value", 32), ("Options", 0)], rows)
    return HandlerOutput(table, OutputShape.TABLE)


@command(
    "Set-Variable",
    summary="Sets the value of a variable",
    usage="Set-Variable <name> <value>",
    category="Session",
    flags=["-Name", "-Value"],
)
def set_variable(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    message = "Set-Variable requires at least a name and value."
    if len(args) < 2:
        raise MissingArgumentError(
            "Set-Variable", "Name" if not args else "Value", message
        )

    name, value = _parse_name_value(args)
    if not name:
        raise MissingArgumentError("Set-Variable", "Name", message)
    if value is None:
        raise MissingArgumentError("Set-Variable", "Value", message)

    ctx.state.variables[name.lstrip("$")] = value
    return HandlerOutput("")


@command(
    "Get-Module",
    summary="Lists the modules imported in the current session",
    category="Session",
)
def get_module(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    rows = [("Manifest", MODULE_VERSION, name) for name in sorted(ctx.state.modules)]
    table = render_table([("ModuleType", 10), ("Version", 10), ("Name", 0)], rows)
    return HandlerOutput(table, OutputShape.TABLE)


@command(
    "Import-Module",
    summary="Adds a module to the current session",
    usage="Import-Module <name>",
    category="Session",
    flags=["-Name"],
)
def import_module(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    name = flag_value(args, "-Name") or next(
        iter(positional_args(args, ("-Name",))), None
    )
    if not name:
        raise MissingArgumentError(
            "Import-Module", "Name", "Import-Module requires a module name."
        )

    ctx.state.modules.add(name)
    return HandlerOutput(f"Module '{name}' imported successfully.")


@command(
    "Get-ExecutionPolicy",
    summary="Gets the execution policy for the current session",
    category="Session",
)
def get_execution_policy(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(str(ctx.state.variables.get("ExecutionPolicy", "")))


@command(
    "Get-PSVersionTable",
    summary="Shows the PowerShell version table",
    category="Session",
)
def get_ps_version_table(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    table = ctx.state.variables.get("PSVersionTable") or {}
    if not isinstance(table, dict):
        return HandlerOutput(_display_value(table))
    lines = [f"{key.ljust(20)} {value}" for key, value in table.items()]
    return HandlerOutput("\n".join(lines))


@command(
    "Get-Host",
    summary="Gets information about the current host",
    category="Session",
)
def get_host(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    version = "7.4.0"
    table = ctx.state.variables.get("PSVersionTable")
    if isinstance(table, dict):
        version = str(table.get("PSVersion", version))

    return HandlerOutput(
        render_properties(
            [
                ("Name", "DevOps Studio PowerShell"),
                ("Version", version),
                ("InstanceId", ctx.instance_id),
                (
                    "UI",
                    "System.Management.Automation.Internal.Host.InternalHostUserInterface",
                ),
                ("CurrentCulture", "en-US"),
                ("CurrentUICulture", "en-US"),
            ]
        )
    )
