#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Set


DEFAULT_HOME = "C:\\Users\\Nishen"

DEFAULT_ALIASES = {
    "ls": "Get-ChildItem",
    "dir": "Get-ChildItem",
    "cd": "Set-Location",
    "pwd": "Get-Location",
    "cat": "Get-Content",
    "type": "Get-Content",
    "echo": "Write-Output",
    "ps": "Get-Process",
    "gps": "Get-Process",
    "kill": "Stop-Process",
    "cls": "Clear-Host",
    "copy": "Copy-Item",
    "cp": "Copy-Item",
    "move": "Move-Item",
    "mv": "Move-Item",
    "del": "Remove-Item",
    "rm": "Remove-Item",
    "md": "New-Item",
    "mkdir": "New-Item",
    "iwr": "Invoke-WebRequest",
    "help": "Get-Help",
}

DEFAULT_MODULES = (
    "Microsoft.PowerShell.Core",
    "Microsoft.PowerShell.Management",
    "Microsoft.PowerShell.Security",
    "Microsoft.PowerShell.Utility",
)

PS_VERSION_TABLE = {
    "PSVersion": "7.4.0",
    "PSEdition": "Core",
    "Platform": "Win32NT",
    "OS": "Microsoft Windows 11",
    "GitCommitId": "7.4.0",
    "WSManStackVersion": "3.0",
}

DEFAULT_EXECUTION_POLICY = "RemoteSigned"


@dataclass
class InterpreterState:
    home: str = DEFAULT_HOME
    current_location: str = ""
    variables: Dict[str, Any] = field(default_factory=dict)
    aliases: Dict[str, str] = field(default_factory=dict)
    modules: Set[str] = field(default_factory=set)

    @classmethod
    def create(
        cls,
        home: Optional[str] = None,
        extra_aliases: Optional[Mapping[str, str]] = None,
    ) -> "InterpreterState":
        home = home or DEFAULT_HOME
        state = cls(home=home, current_location=home)

        state.variables["PWD"] = home
        state.variables["HOME"] = home
        state.variables["PSVersionTable"] = dict(PS_VERSION_TABLE)
        state.variables["ExecutionPolicy"] = DEFAULT_EXECUTION_POLICY
        state.variables["PROFILE"] = (
            f"{home}\\Documents\\PowerShell\\Microsoft.PowerShell_profile.ps1"
        )

        state.aliases.update(DEFAULT_ALIASES)
        for name, target in (extra_aliases or {}).items():
            state.aliases[name.lower()] = target

        state.modules.update(DEFAULT_MODULES)
        return state

    def resolve_alias(self, name: str) -> str:
        return self.aliases.get(name.lower(), name)

    def set_location(self, location: str) -> None:
        self.current_location = location
        self.variables["PWD"] = location
