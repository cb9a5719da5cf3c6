import asyncio
import math

import pytest

from psim.commands import SimulatedFileOps, build_default_registry
from psim.config import Config
from psim.core.interpreter import CommandResult, PowerShellInterpreter
from psim.core.registry import HandlerOutput, OutputShape, command

from conftest import FIXED_NOW


@pytest.mark.parametrize("line", ["", " ", "\t", "   \n  "])
def test_blank_input_is_an_empty_success(interpreter, line):
    result = interpreter.execute(line)
    assert result.success
    assert result.output == ""
    assert result.output_shape is OutputShape.TEXT
    assert result.error is None


def test_unknown_command_error_names_input(interpreter):
    result = interpreter.execute("Frobnicate-Widget arg1 arg2")
    assert not result.success
    assert "Frobnicate-Widget" in result.error
    assert result.output == ""


def test_alias_and_canonical_name_give_same_listing(interpreter):
    via_alias = interpreter.execute("ls")
    canonical = interpreter.execute("Get-ChildItem")
    lowered = interpreter.execute("get-childitem")

    assert via_alias.output_shape is OutputShape.TABLE
    assert canonical.output_shape is OutputShape.TABLE
    assert via_alias.output == canonical.output == lowered.output


def test_quoted_argument_stays_together(interpreter):
    result = interpreter.execute('echo "hello world"')
    assert result.success
    assert "hello world" in result.output


def test_set_variable_then_get_variable(interpreter):
    assert interpreter.execute("Set-Variable Foo Bar").output == ""

    listing = interpreter.execute("Get-Variable").output
    rows = [line for line in listing.splitlines() if line.startswith("Foo ")]
    assert len(rows) == 1
    assert "Bar" in rows[0]
    assert interpreter.get_variable_value("Foo") == "Bar"


def test_copy_item_with_one_argument_names_destination(interpreter):
    result = interpreter.execute("Copy-Item onlyOneArg")
    assert not result.success
    assert "Copy-Item" in result.error
    assert "Destination" in result.error
    assert result.output == ""


def test_path_test_truthiness(interpreter):
    assert interpreter.execute("Test-Path C:\\").output == "True"
    assert interpreter.execute("Test-Path Q:\\doesnotexist").output == "False"


def test_pipeline_discards_earlier_stage_output(interpreter):
    piped = interpreter.execute("Get-Process | Get-Date")
    alone = interpreter.execute("Get-Date")
    assert piped.success
    assert piped.output == alone.output


def test_random_with_equal_bounds_is_constant(interpreter):
    for _ in range(20):
        assert interpreter.execute("Get-Random -Minimum 5 -Maximum 5").output == "5"


def test_execution_time_is_finite_and_non_negative(interpreter):
    for line in ["", "Get-Date", "Nope-Nope", "Copy-Item x", "Get-Process | Sort-Object"]:
        result = interpreter.execute(line)
        assert result.execution_time_ms >= 0
        assert math.isfinite(result.execution_time_ms)


def test_prompt_follows_location(interpreter):
    assert interpreter.get_prompt() == "PS C:\\Users\\Nishen> "
    interpreter.execute("cd ..")
    assert interpreter.get_prompt() == "PS C:\\Users> "
    assert interpreter.get_current_location() == "C:\\Users"


def test_prompt_prefix_is_fixed_regardless_of_shell_config(interpreter):
    Config.PROMPT_PREFIX = "DEV"
    assert interpreter.get_prompt() == "PS C:\\Users\\Nishen> "


def test_interpreters_do_not_share_state():
    first = PowerShellInterpreter()
    second = PowerShellInterpreter()

    first.execute("Set-Variable Shared yes")
    first.execute("Import-Module PSReadLine")
    first.execute("cd Projects")

    assert second.get_variable_value("Shared") is None
    assert "PSReadLine" not in second.execute("Get-Module").output
    assert second.get_current_location() == "C:\\Users\\Nishen"


def test_alias_to_missing_command_fails_naming_alias(interpreter):
    result = interpreter.execute("kill 1234")
    assert not result.success
    assert "'kill'" in result.error


def test_async_facade_matches_sync_wrapper(interpreter):
    result = asyncio.run(interpreter.execute_command("Get-Date"))
    assert result.success
    assert result.output == FIXED_NOW.strftime("%A, %B %d, %Y %I:%M:%S %p")


def test_unexpected_exception_becomes_failure():
    class BrokenFileOps(SimulatedFileOps):
        def remove(self, path):
            raise RuntimeError("disk gone")

        def create(self, path, item_type):
            raise RuntimeError()

    interpreter = PowerShellInterpreter(file_ops=BrokenFileOps())

    removed = interpreter.execute("Remove-Item a.txt")
    assert not removed.success
    assert removed.error == "disk gone"

    created = interpreter.execute("New-Item a.txt")
    assert not created.success
    assert created.error == "Unknown error occurred"


def test_result_dict_uses_camel_case():
    ok = CommandResult(success=True, output="x", execution_time_ms=3)
    assert ok.to_dict() == {
        "success": True,
        "output": "x",
        "executionTimeMs": 3,
        "outputShape": "text",
    }

    failed = CommandResult(
        success=False, output="", execution_time_ms=0, error="boom"
    ).to_dict()
    assert failed["error"] == "boom"


def test_variable_accessors(interpreter):
    assert interpreter.get_variable_value("Missing") is None
    interpreter.set_variable_value("Answer", 42)
    assert interpreter.get_variable_value("Answer") == 42
    assert interpreter.get_variable_value("HOME") == "C:\\Users\\Nishen"


def test_command_names_include_aliases(interpreter):
    names = interpreter.command_names()
    assert "Get-ChildItem" in names
    assert "ls" in names
    assert interpreter.describe("ls") == interpreter.describe("Get-ChildItem")
    assert interpreter.describe("Nope") is None


def test_config_supplies_home_and_aliases(monkeypatch):
    Config.EXTRA_ALIASES = {"gci": "Get-ChildItem"}
    monkeypatch.setenv("PSIM_HOME_LOCATION", "D:\\Work\\Dana")

    interpreter = PowerShellInterpreter()
    assert interpreter.get_current_location() == "D:\\Work\\Dana"
    assert interpreter.execute("gci").output_shape is OutputShape.TABLE
    assert interpreter.execute("whoami").output == "DEVOPS-STUDIO\\Dana"


async def _later(text):
    return HandlerOutput(text)


@command("Get-Later", summary="Returns an awaitable from a plain function")
def get_later(ctx, args):
    return _later("later")


@command("Get-Nothing", summary="Forgets to return output")
def get_nothing(ctx, args):
    return None


def _custom_interpreter():
    registry = build_default_registry()
    registry.register_handler(get_later)
    registry.register_handler(get_nothing)
    return PowerShellInterpreter(registry=registry)


def test_sync_handler_returning_awaitable_is_awaited():
    result = _custom_interpreter().execute("Get-Later")
    assert result.success
    assert result.output == "later"


def test_handler_without_output_becomes_failure():
    interpreter = _custom_interpreter()
    result = interpreter.execute("Get-Nothing")
    assert not result.success
    assert result.output == ""
    assert "Get-Nothing" in result.error

    piped = interpreter.execute("Get-Process | Get-Nothing")
    assert not piped.success


def test_execute_inside_running_loop_points_to_async_entry(interpreter):
    async def host():
        with pytest.raises(RuntimeError, match="execute_command"):
            interpreter.execute("Get-Date")
        return await interpreter.execute_command("Get-Date")

    result = asyncio.run(host())
    assert result.success
