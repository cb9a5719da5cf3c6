#!/usr/bin/env python3
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from prompt_toolkit.formatted_text import HTML, FormattedText, to_formatted_text
from prompt_toolkit.styles import Style, merge_styles
from prompt_toolkit.styles.defaults import default_pygments_style, default_ui_style
from rich import box
from rich.console import Console
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..config import Config
from ..core.interpreter import CommandResult
from ..core.registry import OutputShape
from .theme import PanelTheme


def _escape_html(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class UIManager:
    def __init__(self, console: Console) -> None:
        self.console = console

    # ------------------------------------------------------------------
    # Prompt
    # ------------------------------------------------------------------

    def get_prompt_text(self, prefix: str, location: str) -> FormattedText:
        html = (
            f"<prompt_prefix>{_escape_html(prefix)}</prompt_prefix> "
            f"<path>{_escape_html(location)}</path>"
            "<prompt_symbol>&gt;</prompt_symbol> "
        )
        return to_formatted_text(HTML(html))

    def get_style(self) -> Style:
        custom_style = Style.from_dict(
            {**Config.PROMPT_STYLES, **Config.COMPLETION_STYLES}
        )
        return merge_styles(
            [default_ui_style(), default_pygments_style(), custom_style]
        )

    # ------------------------------------------------------------------
    # Banners and help
    # ------------------------------------------------------------------

    def show_welcome(self, version: str, location: str) -> None:
        if not Config.SHOW_STARTUP_BANNER:
            return

        lines = [
            Config.WELCOME_MESSAGE,
            "",
            f"[dim]Version:[/dim] {version}",
            f"[dim]Location:[/dim] {location}",
            "[dim]Type[/dim] [cyan]Get-Help[/cyan] [dim]or[/dim] [cyan]/help[/cyan] "
            "[dim]to get started.[/dim]",
        ]
        self.console.print(PanelTheme.build("\n".join(lines), style="info", fit=True))
        self.console.print()

    def show_help(
        self, commands: Optional[Mapping[str, Sequence[Tuple[str, str]]]] = None
    ) -> None:
        lines = ["[bold]Keybindings[/bold]"]
        for keybind, description in Config.HELP_KEYBINDS:
            lines.append(f"  • [cyan]{keybind}[/cyan] – {description}")

        lines.append("\n[bold]Session Commands[/bold]")
        for name, description in Config.HELP_SPECIAL_COMMANDS:
            lines.append(f"  • [cyan]{name}[/cyan] – {description}")

        for category in sorted(commands or {}):
            lines.append(f"\n[bold]{category} Cmdlets[/bold]")
            for name, summary in commands[category]:
                suffix = f" – {summary}" if summary else ""
                lines.append(f"  • [cyan]{name}[/cyan]{suffix}")

        self.console.print()
        self.console.print(PanelTheme.build("\n".join(lines), title="Help", style="info", fit=True))
        self.console.print()

    def show_history(self, entries: List[str]) -> None:
        if not entries:
            self.console.print(
                PanelTheme.build(
                    "[yellow]No commands in this session yet[/yellow]",
                    title="History",
                    style="warning",
                    fit=True,
                )
            )
            return

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Id", style="dim", justify="right")
        table.add_column("CommandLine", style="white")
        for index, entry in enumerate(entries, start=1):
            table.add_row(str(index), Text(entry))

        self.console.print(PanelTheme.build(table, title="History", style="info", fit=True))

    # ------------------------------------------------------------------
    # Command results
    # ------------------------------------------------------------------

    def display_result(self, command: str, result: CommandResult) -> None:
        if not result.success:
            self.display_error(command, result.error or "Unknown error occurred")
            return

        if not result.output:
            return

        shape = result.output_shape
        style = PanelTheme.style_for_shape(shape.value)
        subtitle = self._timing_subtitle(result)

        body = None
        if shape is OutputShape.OBJECT:
            body = self._object_table(result.output)
        if body is None:
            body = Text(result.output)

        title = Text(f" {command}")
        self.console.print(
            PanelTheme.build(
                body,
                title=title,
                style=style,
                fit=True,
                subtitle=subtitle or None,
                subtitle_align="right",
            )
        )

    @staticmethod
    def _object_table(output: str) -> Optional[Table]:
        """Two-column view of ``Key : Value`` lines, None if any line doesn't fit."""
        rows = []
        for line in output.splitlines():
            if not line.strip():
                continue
            key, sep, value = line.partition(" : ")
            if not sep:
                return None
            rows.append((key.strip(), value.strip()))
        if not rows:
            return None

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value")
        for key, value in rows:
            table.add_row(Text(key), Text(value))
        return table

    @staticmethod
    def _timing_subtitle(result: CommandResult) -> str:
        if not Config.SHOW_TIMING:
            return ""
        return f"{result.execution_time_ms} ms"

    def display_error(self, command: str, error_msg: str) -> None:
        tree = Tree("[bold red]Error[/bold red]")
        tree.add(Text.assemble(("Command: ", "cyan"), command))
        tree.add(Text.assemble(("Message: ", "red"), error_msg))

        self.console.print(
            PanelTheme.build(
                tree,
                title=Text(f" PS: {command}"),
                style="error",
                fit=True,
            )
        )

    def display_command_not_found(
        self,
        command: str,
        error_text: str,
        suggestions: Iterable[str],
    ) -> None:
        tree = Tree("[bold red]Command Not Found[/bold red]")
        tree.add(Text.assemble(("Input: ", "cyan"), command))
        tree.add(Text(error_text, style="red"))

        tips_node = tree.add("[green]Tips[/green]")
        tips_node.add("• Run 'Get-Command' to list the available cmdlets")
        tips_node.add("• Use '/help' to see the session commands")

        suggestions = list(suggestions)
        if suggestions:
            suggestion_node = tree.add("[cyan]Possible similar commands[/cyan]")
            for suggestion in suggestions:
                suggestion_node.add(f"- {suggestion}")

        self.console.print(
            PanelTheme.build(tree, title=Text(f" PS: {command}"), style="error", fit=True)
        )

    # ------------------------------------------------------------------
    # Session housekeeping
    # ------------------------------------------------------------------

    def display_config_reloaded(self, loaded: bool) -> None:
        if loaded:
            message = f"[green]Configuration reloaded from {Config.CONFIG_JSON_FILE}[/green]"
            style = "success"
        else:
            message = f"[yellow]No configuration loaded from {Config.CONFIG_JSON_FILE}[/yellow]"
            style = "warning"
        self.console.print(PanelTheme.build(message, title="Config", style=style, fit=True))

    def display_memory_stats(
        self,
        initial: Dict[str, float],
        final: Dict[str, float],
        collected: int,
    ) -> None:
        table = Table(
            title="Memory Cleanup Results",
            show_header=True,
            header_style="bold cyan",
            box=box.ROUNDED,
        )
        table.add_column("Metric", style="cyan")
        table.add_column("Before", style="yellow")
        table.add_column("After", style="green")
        table.add_column("Change", style="magenta")

        for label, key in (
            ("RSS Memory (MB)", "rss_mb"),
            ("VMS Memory (MB)", "vms_mb"),
            ("Python Objects", "python_objects"),
        ):
            before = initial.get(key, 0)
            after = final.get(key, 0)
            if key == "python_objects":
                table.add_row(label, f"{before:,.0f}", f"{after:,.0f}", f"{after - before:+,.0f}")
            else:
                table.add_row(label, f"{before:.1f}", f"{after:.1f}", f"{after - before:+.1f}")

        self.console.print(table)
        self.console.print(f"[dim]Garbage collector freed {collected} objects[/dim]")

    def display_interrupt(self, message: str = "^C - Input cancelled") -> None:
        self.console.print(f"[yellow]{message}[/yellow]")

    def display_goodbye(self) -> None:
        self.console.print("[yellow]Goodbye![/yellow]")

    def clear(self) -> None:
        self.console.clear()

    def create_status(self, message: str) -> Status:
        return Status(f"[bold green]{message}", console=self.console)
