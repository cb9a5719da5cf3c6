#!/usr/bin/env python3
from typing import Dict, Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion, FuzzyWordCompleter
from prompt_toolkit.document import Document

from .commands.location import DEMO_ITEMS
from .core.interpreter import PowerShellInterpreter
from .core.tokenizer import PIPE_SEPARATOR

COMMAND = "command"
FLAG = "flag"
ARGUMENT = "argument"


class CommandLineParser:
    """Works out what is being typed at the cursor: a command, a flag or an argument."""

    def parse_input(self, text: str) -> Dict[str, object]:
        # Only the stage after the last pipe matters.
        stage = text.rsplit(PIPE_SEPARATOR, 1)[-1].lstrip()
        parts = stage.split()

        if not parts or (len(parts) == 1 and not stage.endswith(" ")):
            return {
                "command": parts[0] if parts else "",
                "current_arg": parts[0] if parts else "",
                "completion_type": COMMAND,
            }

        current_arg = "" if stage.endswith(" ") else parts[-1]
        completion_type = FLAG if current_arg.startswith("-") else ARGUMENT
        return {
            "command": parts[0],
            "current_arg": current_arg,
            "completion_type": completion_type,
        }


class CmdletCompleter(Completer):
    def __init__(self, interpreter: PowerShellInterpreter) -> None:
        self.interpreter = interpreter
        self.parser = CommandLineParser()
        self.item_names = [name for _, _, name in DEMO_ITEMS]

    def _command_meta(self) -> Dict[str, str]:
        meta: Dict[str, str] = {}
        for name in self.interpreter.command_names():
            summary = self.interpreter.describe(name)
            if summary:
                meta[name] = summary
        return meta

    def _flags_for(self, command: str) -> List[str]:
        definition = self.interpreter.registry.get(
            self.interpreter.resolve_alias(command)
        )
        return list(definition.flags) if definition else []

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        context = self.parser.parse_input(document.text_before_cursor)
        completion_type = context["completion_type"]
        current_arg = str(context["current_arg"])

        if completion_type == COMMAND:
            words: List[str] = self.interpreter.command_names()
            meta: Optional[Dict[str, str]] = self._command_meta()
        elif completion_type == FLAG:
            words = self._flags_for(str(context["command"]))
            meta = None
        else:
            words = self.item_names
            meta = None

        if not words:
            return

        fuzzy_completer = FuzzyWordCompleter(words=words, meta_dict=meta, WORD=True)
        arg_doc = Document(current_arg, len(current_arg))
        for completion in fuzzy_completer.get_completions(arg_doc, complete_event):
            yield Completion(
                text=completion.text,
                start_position=-len(current_arg),
                display=completion.display,
                display_meta=completion.display_meta,
            )
