#!/usr/bin/env python3
import re
from typing import List

from ..core.registry import CommandContext, HandlerOutput, OutputShape, command
from ..errors import MissingArgumentError
from .base import first_positional, render_table

SEPARATOR = "\\"
DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")

KNOWN_PATHS = ["C:\\", "C:\\Users", "C:\\Windows", "~", "$HOME"]

DEMO_ITEMS = [
    ("d-----", "", "Documents"),
    ("d-----", "", "Desktop"),
    ("d-----", "", "Downloads"),
    ("d-----", "", "Projects"),
    ("-a----", "1234", "DevOps-Studio.lnk"),
    ("-a----", "567", "README.txt"),
]

README_BODY = """# Welcome to Nishen's DevOps Studio

This is a fully operational PowerShell environment running in your terminal.

Features:
- Real PowerShell cmdlets
- Pipeline support
- Variable management
- Module system

Enjoy the full PowerShell experience!"""

SCRIPT_BODY = """# PowerShell Script
Write-Host "Hello from PowerShell!"
Get-Date
Get-Location"""


def _short_date(moment) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def _drive_root(location: str) -> str:
    return location[:2] + SEPARATOR if DRIVE_PATTERN.match(location) else SEPARATOR


def resolve_location(current: str, target: str, home: str) -> str:
    target = target.replace("/", SEPARATOR)

    if target in {"~", "$HOME"}:
        return home

    if DRIVE_PATTERN.match(target):
        return target

    if target in {"", "."}:
        return current

    if target == "..":
        parts = current.rstrip(SEPARATOR).split(SEPARATOR)
        if len(parts) > 1:
            parts.pop()
        parent = SEPARATOR.join(parts)
        if not parent or DRIVE_PATTERN.fullmatch(parent):
            return _drive_root(current)
        return parent

    return current.rstrip(SEPARATOR) + SEPARATOR + target.strip(SEPARATOR)


@command(
    "Get-Location",
    summary="Gets the current working location",
    category="Location",
)
def get_location(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(ctx.state.current_location)


@command(
    "Set-Location",
    summary="Sets the current working location",
    usage="Set-Location [path | ~ | ..]",
    category="Location",
)
def set_location(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    state = ctx.state
    target = args[0] if args else state.variables.get("HOME", state.home)
    state.set_location(resolve_location(state.current_location, target, state.home))
    return HandlerOutput("")


@command(
    "Get-ChildItem",
    summary="Gets the items in a location",
    usage="Get-ChildItem [path]",
    category="Location",
)
def get_child_item(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    path = first_positional(args) or ctx.state.current_location
    modified = _short_date(ctx.clock())

    table = render_table(
        [("Mode", 10), ("LastWriteTime", 20), ("Length", 10), ("Name", 0)],
        [(mode, modified, length, name) for mode, length, name in DEMO_ITEMS],
    )
    return HandlerOutput(f"Directory: {path}\n\n{table}", OutputShape.TABLE)


@command(
    "Get-Content",
    summary="Gets the content of a file",
    usage="Get-Content <path>",
    category="Location",
)
def get_content(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    path = first_positional(args)
    if not path:
        raise MissingArgumentError(
            "Get-Content",
            "Path",
            'Cannot bind argument to parameter "Path" because it is null.',
        )

    name = path.lower()
    if "readme" in name:
        return HandlerOutput(README_BODY)
    if name.endswith(".ps1"):
        return HandlerOutput(SCRIPT_BODY)
    return HandlerOutput(
        f"Sample content for: {path}\nThis is a demonstration of Get-Content cmdlet."
    )


@command(
    "Test-Path",
    summary="Determines whether a path exists",
    usage="Test-Path <path>",
    category="Location",
)
def path_exists(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    path = first_positional(args)
    if not path:
        raise MissingArgumentError(
            "Test-Path", "Path", "Test-Path requires a path parameter."
        )

    lowered = path.lower()
    exists = any(known.lower() in lowered for known in KNOWN_PATHS)
    return HandlerOutput("True" if exists else "False")
