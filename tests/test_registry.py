import asyncio

import pytest

from psim.commands import build_default_registry
from psim.core.registry import CommandRegistry, HandlerOutput, OutputShape, command
from psim.core.state import InterpreterState
from psim.errors import CommandNotFoundError

CATALOG = [
    "Get-Location",
    "Set-Location",
    "Get-ChildItem",
    "Get-Content",
    "Write-Output",
    "Get-Process",
    "Get-Service",
    "Get-Command",
    "Get-Help",
    "Get-Variable",
    "Set-Variable",
    "Get-Module",
    "Import-Module",
    "Get-ExecutionPolicy",
    "Test-Path",
    "New-Item",
    "Copy-Item",
    "Move-Item",
    "Remove-Item",
    "Get-Date",
    "Get-Random",
    "Measure-Object",
    "Select-Object",
    "Where-Object",
    "Sort-Object",
    "Format-Table",
    "Format-List",
    "Out-String",
    "Get-Host",
    "Get-PSVersionTable",
    "Invoke-WebRequest",
    "Test-Connection",
    "Get-ComputerInfo",
    "Clear-Host",
    "Get-WmiObject",
    "whoami",
]


def test_default_registry_covers_catalog():
    registry = build_default_registry()
    for name in CATALOG:
        assert name in registry
    assert len(registry) == len(CATALOG)
    assert registry.names() == sorted(CATALOG)


def test_lookup_is_case_insensitive():
    registry = build_default_registry()
    assert registry.get("get-childitem").name == "Get-ChildItem"
    assert registry.get("GET-DATE").name == "Get-Date"


def test_register_handler_requires_decorator():
    registry = CommandRegistry()
    with pytest.raises(ValueError):
        registry.register_handler(lambda ctx, args: HandlerOutput("x"))


def test_dispatch_calls_sync_and_async_handlers():
    @command("Say-Hello", summary="Greets")
    def say_hello(ctx, args):
        return HandlerOutput("hello " + " ".join(args))

    @command("Say-Later")
    async def say_later(ctx, args):
        await asyncio.sleep(0)
        return HandlerOutput("later", OutputShape.OBJECT)

    registry = CommandRegistry()
    registry.register_handler(say_hello)
    registry.register_handler(say_later)

    assert asyncio.run(registry.dispatch("say-hello", ["a", "b"], None)).output == "hello a b"
    result = asyncio.run(registry.dispatch("Say-Later", [], None))
    assert result == HandlerOutput("later", OutputShape.OBJECT)


def test_unknown_command_names_the_typed_text():
    registry = CommandRegistry()
    with pytest.raises(CommandNotFoundError) as excinfo:
        asyncio.run(registry.dispatch("Stop-Process", [], None, typed_name="kill"))
    assert "'kill'" in str(excinfo.value)
    assert excinfo.value.command == "kill"


def test_state_resolves_aliases_case_insensitively():
    state = InterpreterState.create(extra_aliases={"GCI": "Get-ChildItem"})
    assert state.resolve_alias("LS") == "Get-ChildItem"
    assert state.resolve_alias("gci") == "Get-ChildItem"
    assert state.resolve_alias("Unknown-Thing") == "Unknown-Thing"
