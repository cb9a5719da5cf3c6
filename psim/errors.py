#!/usr/bin/env python3
from typing import Optional


class InterpreterError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CommandNotFoundError(InterpreterError):
    def __init__(self, command: str) -> None:
        super().__init__(
            f"The term '{command}' is not recognized as the name of a cmdlet, "
            "function, script file, or operable program."
        )
        self.command = command


class MissingArgumentError(InterpreterError):
    def __init__(
        self, command: str, parameter: str, message: Optional[str] = None
    ) -> None:
        detail = message or f"{command} requires a {parameter} parameter."
        super().__init__(f"{detail} Missing: {parameter}")
        self.command = command
        self.parameter = parameter


class ConfigError(InterpreterError):
    pass
