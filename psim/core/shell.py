#!/usr/bin/env python3
import difflib
import gc
import logging
import os
from typing import Dict, List, Optional, Tuple

import psutil
from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import FileHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.lexers import PygmentsLexer
from pygments.lexers import find_lexer_class_by_name
from pygments.util import ClassNotFound
from rich.console import Console

from .. import __version__
from ..commands.system import CLEAR_SCREEN
from ..completion import CmdletCompleter
from ..config import Config
from ..errors import CommandNotFoundError
from ..ui import UIManager, create_console
from .interpreter import CommandResult, PowerShellInterpreter
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

EXIT = "exit"
EXIT_COMMANDS = {"exit", "quit"}


def get_memory_stats() -> Dict[str, float]:
    memory_info = psutil.Process(os.getpid()).memory_info()
    return {
        "rss_mb": memory_info.rss / 1024 / 1024,
        "vms_mb": memory_info.vms / 1024 / 1024,
        "python_objects": len(gc.get_objects()),
    }


class InteractiveShell:
    def __init__(
        self,
        interpreter: Optional[PowerShellInterpreter] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.interpreter = interpreter or PowerShellInterpreter()
        self.console = console or create_console()
        self.ui = UIManager(self.console)
        self.completer = CmdletCompleter(self.interpreter)
        self.history: List[str] = []
        self.session: Optional[PromptSession] = None

        self._setup_keybindings()
        self.prompt_lexer = self._create_prompt_lexer()

    def _setup_keybindings(self) -> None:
        self.bindings = KeyBindings()

        @self.bindings.add("escape", "h")
        def show_help(event):
            self.show_help()

        @self.bindings.add("c-l")
        def clear_screen(event):
            event.app.renderer.clear()

    def _create_session(self) -> PromptSession:
        Config.ensure_directories()
        return PromptSession(history=FileHistory(str(Config.HISTORY_FILE)))

    def _create_prompt_lexer(self) -> Optional[PygmentsLexer]:
        choice = Config.get_prompt_lexer_choice().strip()
        if not choice or choice.lower() == "auto":
            return None

        try:
            lexer_cls = find_lexer_class_by_name(choice)
        except ClassNotFound:
            logger.warning("Unknown prompt lexer %r, highlighting disabled", choice)
            return None
        return PygmentsLexer(lexer_cls)

    def _get_prompt_message(self):
        return self.ui.get_prompt_text(
            Config.PROMPT_PREFIX, self.interpreter.get_current_location()
        )

    def show_help(self) -> None:
        grouped: Dict[str, List[Tuple[str, str]]] = {}
        for definition in sorted(self.interpreter.registry.values(), key=lambda d: d.name):
            grouped.setdefault(definition.category, []).append(
                (definition.name, definition.summary)
            )
        self.ui.show_help(grouped)

    # ------------------------------------------------------------------
    # Session commands
    # ------------------------------------------------------------------

    def handle_special_commands(self, user_input: str) -> Optional[str]:
        normalized = user_input.strip().lower()

        if normalized in EXIT_COMMANDS:
            return EXIT
        if normalized == "/help":
            self.show_help()
            return "handled"
        if normalized in {"/config_reload", "config_reload"}:
            self._reload_configuration()
            return "handled"
        if normalized == "/cleanup_memory":
            self._cleanup_memory()
            return "handled"
        if normalized == "history":
            self.ui.show_history(self.history)
            return "handled"
        return None

    def _reload_configuration(self) -> None:
        with self.ui.create_status("Reloading configuration..."):
            loaded = Config.reload()

        self.prompt_lexer = self._create_prompt_lexer()
        self.ui.display_config_reloaded(loaded)

    def _cleanup_memory(self) -> None:
        initial = get_memory_stats()
        collected = gc.collect()
        final = get_memory_stats()
        logger.debug("gc.collect() freed %d objects", collected)
        self.ui.display_memory_stats(initial, final, collected)

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------

    def handle_line(self, user_input: str) -> Optional[str]:
        line = user_input.strip()
        if not line:
            return None

        special = self.handle_special_commands(line)
        if special is not None:
            return special

        self.history.append(line)
        result = self.interpreter.execute(line)
        self.display_result(line, result)
        return None

    def display_result(self, line: str, result: CommandResult) -> None:
        if result.success and result.output == CLEAR_SCREEN:
            self.ui.clear()
            return

        if not result.success and self._is_not_found(line, result):
            typed = tokenize(line)[0]
            self.ui.display_command_not_found(
                line, result.error or "", self._suggest_alternatives(typed)
            )
            return

        self.ui.display_result(line, result)

    def _is_not_found(self, line: str, result: CommandResult) -> bool:
        tokens = tokenize(line)
        if not tokens:
            return False
        return result.error == CommandNotFoundError(tokens[0]).message

    def _suggest_alternatives(self, typed: str) -> List[str]:
        names = self.interpreter.command_names()
        lowered = {name.lower(): name for name in names}
        matches = difflib.get_close_matches(typed.lower(), list(lowered), n=3, cutoff=0.6)
        return [lowered[match] for match in matches]

    def run(self) -> None:
        self.ui.show_welcome(__version__, self.interpreter.get_current_location())

        if self.session is None:
            self.session = self._create_session()

        try:
            while True:
                try:
                    user_input = self.session.prompt(
                        message=self._get_prompt_message,
                        key_bindings=self.bindings,
                        style=self.ui.get_style(),
                        auto_suggest=AutoSuggestFromHistory(),
                        completer=self.completer,
                        lexer=self.prompt_lexer,
                        complete_while_typing=Config.COMPLETION_AUTO_POPUP,
                    )
                except KeyboardInterrupt:
                    self.ui.display_interrupt()
                    continue
                except EOFError:
                    self.ui.display_goodbye()
                    break

                if self.handle_line(user_input) == EXIT:
                    self.ui.display_goodbye()
                    break
        except KeyboardInterrupt:
            self.ui.display_goodbye()
