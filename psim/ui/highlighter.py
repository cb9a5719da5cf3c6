#!/usr/bin/env python3
import re
from typing import List, Optional, Tuple

from rich.console import Console
from rich.highlighter import Highlighter
from rich.text import Text

from ..config import Config


class OutputHighlighter(Highlighter):
    """Colours cmdlet names, numbers and quoted strings in command output."""

    def __init__(self, rules: List[dict]) -> None:
        super().__init__()
        self._patterns: List[Tuple[re.Pattern[str], str]] = []
        for rule in rules or []:
            compiled = self._compile(rule)
            if compiled is not None:
                self._patterns.append(compiled)

    @staticmethod
    def _compile(rule: dict) -> Optional[Tuple[re.Pattern[str], str]]:
        pattern = rule.get("pattern")
        style = Config.HIGHLIGHTER_STYLES.get(rule.get("style", ""), rule.get("style"))
        if not pattern or not style:
            return None

        flags = re.MULTILINE
        if rule.get("ignore_case"):
            flags |= re.IGNORECASE
        try:
            return re.compile(pattern, flags), style
        except re.error:
            return None

    @property
    def rule_count(self) -> int:
        return len(self._patterns)

    def highlight(self, text: Text) -> None:
        plain = text.plain
        for regex, style in self._patterns:
            for match in regex.finditer(plain):
                start, end = match.span()
                if start != end:
                    text.stylize(style, start, end)


def create_console(**kwargs) -> Console:
    if Config.is_highlighter_enabled() and Config.HIGHLIGHTER_RULES:
        kwargs.setdefault("highlighter", OutputHighlighter(Config.HIGHLIGHTER_RULES))
    return Console(**kwargs)
