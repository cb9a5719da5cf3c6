#!/usr/bin/env python3
from typing import Iterable, List, Optional, Sequence, Tuple


Column = Tuple[str, int]


def flag_value(args: Sequence[str], flag: str, default: Optional[str] = None) -> Optional[str]:
    flag_lower = flag.lower()
    for index, token in enumerate(args):
        if not token.lower().startswith(flag_lower):
            continue

        remainder = token[len(flag):]
        # "-Minimum 5" arrives as one token when the user quoted it.
        if remainder.startswith(" "):
            value = remainder.strip().split(" ")[0]
            return value or default
        if remainder.startswith(":"):
            return remainder[1:] or default
        if remainder:
            continue

        if index + 1 < len(args):
            return args[index + 1]
        return default
    return default


def positional_args(args: Sequence[str], value_flags: Iterable[str] = ()) -> List[str]:
    consumes_next = {flag.lower() for flag in value_flags}
    positionals: List[str] = []
    skip_next = False
    for token in args:
        if skip_next:
            skip_next = False
            continue
        if token.startswith("-") and len(token) > 1:
            if token.lower() in consumes_next:
                skip_next = True
            continue
        positionals.append(token)
    return positionals


def first_positional(args: Sequence[str], value_flags: Iterable[str] = ()) -> Optional[str]:
    positionals = positional_args(args, value_flags)
    return positionals[0] if positionals else None


def render_table(columns: Sequence[Column], rows: Iterable[Sequence[object]]) -> str:
    def render_line(cells: Sequence[str]) -> str:
        parts = []
        last = len(columns) - 1
        for index, ((_, width), cell) in enumerate(zip(columns, cells)):
            parts.append(cell if index == last else cell.ljust(width))
        return " ".join(parts).rstrip()

    lines = [
        render_line([name for name, _ in columns]),
        render_line(["-" * len(name) for name, _ in columns]),
    ]
    for row in rows:
        lines.append(render_line([str(cell) for cell in row]))
    return "\n".join(lines)


def render_properties(pairs: Iterable[Tuple[str, object]]) -> str:
    pairs = list(pairs)
    if not pairs:
        return ""
    width = max(len(key) for key, _ in pairs)
    return "\n".join(f"{key.ljust(width)} : {value}".rstrip() for key, value in pairs)
