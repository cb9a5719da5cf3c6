import io

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document
from rich.console import Console

from psim.completion import CmdletCompleter, CommandLineParser
from psim.core.interpreter import PowerShellInterpreter
from psim.core.shell import EXIT, InteractiveShell, get_memory_stats
from psim.ui.highlighter import OutputHighlighter
from psim.ui.theme import PanelTheme

from conftest import FIXED_NOW


def make_shell():
    console = Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)
    shell = InteractiveShell(PowerShellInterpreter(clock=lambda: FIXED_NOW), console=console)
    return shell, console.file


def completions(completer, text):
    document = Document(text, len(text))
    return [c.text for c in completer.get_completions(document, CompleteEvent())]


def test_exit_commands():
    shell, _ = make_shell()
    assert shell.handle_line("exit") == EXIT
    assert shell.handle_line("  QUIT ") == EXIT


def test_commands_are_rendered_and_recorded():
    shell, out = make_shell()
    assert shell.handle_line("Get-Location") is None
    assert shell.handle_line("   ") is None
    assert "C:\\Users\\Nishen" in out.getvalue()
    assert shell.history == ["Get-Location"]


def test_object_output_is_rendered_as_properties():
    shell, out = make_shell()
    shell.handle_line("Get-ComputerInfo")
    text = out.getvalue()
    assert "WindowsProductName" in text
    assert "Microsoft Windows 11 Pro" in text


def test_unknown_command_offers_suggestions():
    shell, out = make_shell()
    shell.handle_line("Get-Locaton")
    text = out.getvalue()
    assert "Command Not Found" in text
    assert "Get-Location" in text


def test_suggestions_use_close_matches():
    shell, _ = make_shell()
    assert shell._suggest_alternatives("get-proces")[0] == "Get-Process"
    assert shell._suggest_alternatives("zzzzzz") == []


def test_missing_argument_is_shown_as_error():
    shell, out = make_shell()
    shell.handle_line("Copy-Item lonely.txt")
    text = out.getvalue()
    assert "Error" in text
    assert "Missing: Destination" in text


def test_clear_host_does_not_print_escape_codes():
    shell, out = make_shell()
    shell.handle_line("cls")
    assert "\x1b[2J" not in out.getvalue()


def test_session_commands():
    shell, out = make_shell()
    assert shell.handle_line("/help") == "handled"
    assert "Keybindings" in out.getvalue()
    assert "Get-ChildItem" in out.getvalue()
    assert "Location Cmdlets" in out.getvalue()
    assert "Network Cmdlets" in out.getvalue()

    shell.handle_line("Get-Date")
    assert shell.handle_line("history") == "handled"
    assert "CommandLine" in out.getvalue()
    assert shell.history == ["Get-Date"]


def test_config_reload_command(isolated_config):
    shell, out = make_shell()
    assert shell.handle_line("/config_reload") == "handled"
    assert (isolated_config / "config.json").exists()
    assert "Configuration reloaded" in out.getvalue()


def test_cleanup_memory_reports_stats():
    shell, out = make_shell()
    assert shell.handle_line("/cleanup_memory") == "handled"
    assert "Memory Cleanup Results" in out.getvalue()

    stats = get_memory_stats()
    assert stats["rss_mb"] > 0
    assert stats["python_objects"] > 0


def test_prompt_lexer_follows_config():
    shell, _ = make_shell()
    assert shell.prompt_lexer is not None


def test_prompt_lexer_can_be_disabled(monkeypatch):
    monkeypatch.setenv("PSIM_PROMPT_LEXER", "auto")
    shell, _ = make_shell()
    assert shell.prompt_lexer is None

    monkeypatch.setenv("PSIM_PROMPT_LEXER", "no-such-language")
    assert make_shell()[0].prompt_lexer is None


def test_parser_classifies_cursor_position():
    parser = CommandLineParser()
    assert parser.parse_input("Get-Lo")["completion_type"] == "command"
    assert parser.parse_input("Get-Random -Mi")["completion_type"] == "flag"
    assert parser.parse_input("Get-Content ")["completion_type"] == "argument"
    piped = parser.parse_input("Get-Process | Sort")
    assert piped["completion_type"] == "command"
    assert piped["current_arg"] == "Sort"


def test_completer_offers_cmdlets_flags_and_items():
    completer = CmdletCompleter(PowerShellInterpreter())
    assert "Get-Location" in completions(completer, "Get-Loc")
    assert "Sort-Object" in completions(completer, "Get-Process | Sort")
    assert "-Minimum" in completions(completer, "Get-Random -Mi")
    assert "-ItemType" in completions(completer, "mkdir logs -Item")
    assert "README.txt" in completions(completer, "cat READ")


def test_panel_theme_styles():
    assert PanelTheme.style_for_shape("table") == "info"
    assert PanelTheme.style_for_shape("unknown") == "default"
    assert PanelTheme.get_style("missing").border_style == "#888888"


def test_highlighter_skips_bad_rules():
    highlighter = OutputHighlighter(
        [
            {"pattern": r"(?P<x>\d+)", "style": "highlight.number"},
            {"pattern": "(", "style": "bold"},
            {"style": "bold"},
        ]
    )
    assert highlighter.rule_count == 1
