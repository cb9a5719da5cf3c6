#!/usr/bin/env python3
import random
from typing import List

from ..core.registry import CommandContext, HandlerOutput, OutputShape, command
from ..errors import InterpreterError
from .base import first_positional, flag_value, render_properties, render_table

CLEAR_SCREEN = "\x1b[2J\x1b[H"

PROCESSES = [
    (1234, "devops-studio", "2.5", "150MB"),
    (5678, "powershell", "1.2", "85MB"),
    (9012, "chrome", "15.8", "350MB"),
    (3456, "code", "8.3", "250MB"),
    (7890, "explorer", "0.5", "120MB"),
]

SERVICES = [
    ("Running", "Themes", "Themes Service"),
    ("Running", "Spooler", "Print Spooler"),
    ("Stopped", "Fax", "Fax Service"),
    ("Running", "EventLog", "Windows Event Log"),
]

KNOWN_CMDLETS = [
    "Get-ChildItem",
    "Set-Location",
    "Get-Content",
    "Write-Output",
    "Get-Process",
    "Get-Service",
    "Get-Help",
    "Get-Variable",
    "Set-Variable",
    "Get-Module",
    "Import-Module",
    "Test-Path",
    "New-Item",
    "Copy-Item",
    "Move-Item",
    "Remove-Item",
    "Get-Date",
    "Clear-Host",
    "Get-Host",
    "Invoke-WebRequest",
]

GENERAL_HELP = """TOPIC
    PowerShell Help System

SHORT DESCRIPTION
    Gets help for PowerShell cmdlets and concepts.

LONG DESCRIPTION
    The Get-Help cmdlet displays help for PowerShell cmdlets, functions, scripts,
    and concepts.

EXAMPLES
    Get-Help Get-Process
    Get-Help about_Variables
    Get-Help *process*

RELATED LINKS
    Online version: https://docs.microsoft.com/powershell/"""


def _int_flag(args: List[str], flag: str, default: int) -> int:
    raw = flag_value(args, flag)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InterpreterError(
            f'Cannot convert value "{raw}" to type "System.Int32".'
        ) from None


@command(
    "Write-Output",
    summary="Writes the arguments to the output",
    usage="Write-Output <text>",
    category="Utility",
)
def write_output(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(" ".join(args))


@command(
    "Get-Process",
    summary="Gets the processes running on the computer",
    usage="Get-Process [name]",
    category="System",
)
def get_process(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    name = first_positional(args)
    rows = [
        row for row in PROCESSES if not name or name.lower() in row[1].lower()
    ]
    table = render_table(
        [("Id", 8), ("ProcessName", 20), ("CPU", 8), ("WorkingSet", 0)], rows
    )
    return HandlerOutput(table, OutputShape.TABLE)


@command(
    "Get-Service",
    summary="Gets the services on the computer",
    usage="Get-Service [name]",
    category="System",
)
def get_service(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    name = first_positional(args)
    rows = [
        row for row in SERVICES if not name or name.lower() in row[1].lower()
    ]
    table = render_table([("Status", 10), ("Name", 15), ("DisplayName", 0)], rows)
    return HandlerOutput(table, OutputShape.TABLE)


@command(
    "Get-Command",
    summary="Gets the commands available in the session",
    usage="Get-Command [-Name <filter>]",
    category="Utility",
    flags=["-Name"],
)
def get_command(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    name_filter = flag_value(args, "-Name")
    needle = name_filter.strip("*").lower() if name_filter else ""

    rows = [
        ("Cmdlet", cmdlet, "7.0.0.0", "Microsoft.PowerShell.Management")
        for cmdlet in KNOWN_CMDLETS
        if needle in cmdlet.lower()
    ]
    table = render_table(
        [("CommandType", 15), ("Name", 20), ("Version", 10), ("Source", 0)], rows
    )
    return HandlerOutput(table, OutputShape.TABLE)


@command(
    "Get-Help",
    summary="Displays information about commands and concepts",
    usage="Get-Help [topic]",
    category="Utility",
)
def get_help(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    topic = first_positional(args)
    if not topic:
        return HandlerOutput(GENERAL_HELP)

    sections = [
        f"NAME\n    {topic}",
        f"SYNOPSIS\n    Help for {topic}",
    ]

    known = ctx.registry.get(ctx.state.resolve_alias(topic))
    if known is not None:
        sections.append(f"SYNTAX\n    {known.usage}")
        if known.summary:
            sections[1] = f"SYNOPSIS\n    {known.summary}"

    sections.append(
        "DESCRIPTION\n"
        f"    This is a demonstration help entry for {topic}.\n"
        "    In a real PowerShell environment, this would show detailed\n"
        "    help information including syntax, parameters, and examples."
    )
    return HandlerOutput("\n\n".join(sections))


@command(
    "Get-Date",
    summary="Gets the current date and time",
    category="Utility",
)
def get_date(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(ctx.clock().strftime("%A, %B %d, %Y %I:%M:%S %p"))


@command(
    "Get-Random",
    summary="Gets a random number",
    usage="Get-Random [-Minimum <int>] [-Maximum <int>]",
    category="Utility",
    flags=["-Minimum", "-Maximum"],
)
def get_random(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    minimum = _int_flag(args, "-Minimum", 0)
    maximum = _int_flag(args, "-Maximum", 100)
    if minimum > maximum:
        raise InterpreterError(
            f"The Minimum value ({minimum}) cannot be greater than "
            f"the Maximum value ({maximum})."
        )
    return HandlerOutput(str(random.randint(minimum, maximum)))


@command(
    "Clear-Host",
    summary="Clears the display in the host program",
    category="Utility",
)
def clear_host(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(CLEAR_SCREEN)


@command(
    "Get-ComputerInfo",
    summary="Gets system and operating system properties",
    category="System",
)
def get_computer_info(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(
        render_properties(
            [
                ("WindowsProductName", "Microsoft Windows 11 Pro"),
                ("WindowsVersion", "2009"),
                ("TotalPhysicalMemory", "17179869184"),
                ("ProcessorDescription", "Intel(R) Core(TM) i7"),
                ("BiosVersion", "American Megatrends Inc."),
                ("TimeZone", "(UTC-05:00) Eastern Time"),
            ]
        ),
        OutputShape.OBJECT,
    )


@command(
    "Get-WmiObject",
    summary="Gets instances of WMI classes",
    usage="Get-WmiObject [-Class <name>]",
    category="System",
    flags=["-Class"],
)
def get_wmi_object(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    class_name = flag_value(args, "-Class") or first_positional(args, ("-Class",))
    class_name = class_name or "Win32_OperatingSystem"
    moment = ctx.clock()

    return HandlerOutput(
        render_properties(
            [
                ("__CLASS", class_name),
                ("Caption", "Microsoft Windows 11 Pro"),
                ("Version", "10.0.22000"),
                ("BuildNumber", "22000"),
                ("RegisteredUser", "Nishen Harichunder"),
                ("Organization", ""),
                ("InstallDate", f"{moment.month}/{moment.day}/{moment.year}"),
            ]
        ),
        OutputShape.TABLE,
    )


@command(
    "whoami",
    summary="Shows the current user",
    category="System",
)
def whoami(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    user = ctx.state.home.rstrip("\\").split("\\")[-1] or "User"
    return HandlerOutput(f"DEVOPS-STUDIO\\{user}")
