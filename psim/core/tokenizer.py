#!/usr/bin/env python3
from typing import List


PIPE_SEPARATOR = " | "


def tokenize(line: str) -> List[str]:
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line or "":
        if char == '"':
            in_quotes = not in_quotes
            continue

        if char.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
            continue

        current.append(char)

    # Unterminated quotes keep whatever was collected.
    if current:
        tokens.append("".join(current))

    return tokens


def split_pipeline(line: str) -> List[str]:
    return [stage.strip() for stage in line.split(PIPE_SEPARATOR)]


def has_pipeline(line: str) -> bool:
    return PIPE_SEPARATOR in line
