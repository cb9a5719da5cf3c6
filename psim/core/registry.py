#!/usr/bin/env python3
import inspect
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from ..errors import CommandNotFoundError, InterpreterError
from .state import InterpreterState

logger = logging.getLogger(__name__)


class OutputShape(str, Enum):
    TEXT = "text"
    OBJECT = "object"
    TABLE = "table"


@dataclass(frozen=True)
class HandlerOutput:
    output: str
    shape: OutputShape = OutputShape.TEXT


@dataclass
class CommandContext:
    state: InterpreterState
    registry: "CommandRegistry"
    file_ops: Any
    network_ops: Any
    instance_id: str = ""
    clock: Callable[[], datetime] = datetime.now


HandlerReturn = Union[HandlerOutput, Awaitable[HandlerOutput]]
Handler = Callable[[CommandContext, List[str]], HandlerReturn]


@dataclass
class Command:
    name: str
    handler: Handler
    summary: str = ""
    usage: str = ""
    category: str = "General"
    flags: List[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.name.lower()


def command(
    name: str,
    summary: str = "",
    usage: str = "",
    category: str = "General",
    flags: Optional[Iterable[str]] = None,
) -> Callable[[Handler], Handler]:
    def decorator(func: Handler) -> Handler:
        func.__command_definition__ = Command(
            name=name,
            handler=func,
            summary=summary,
            usage=usage or name,
            category=category,
            flags=list(flags or []),
        )
        return func

    return decorator


class CommandRegistry:
    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}

    def register(self, definition: Command) -> None:
        if definition.key in self._commands:
            logger.debug("Replacing handler for %s", definition.name)
        self._commands[definition.key] = definition

    def register_handler(self, handler: Handler) -> None:
        definition = getattr(handler, "__command_definition__", None)
        if definition is None:
            raise ValueError(f"{handler!r} is not decorated with @command")
        self.register(definition)

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name.lower())

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def names(self) -> List[str]:
        return sorted(cmd.name for cmd in self._commands.values())

    def values(self) -> Iterable[Command]:
        return self._commands.values()

    async def dispatch(
        self,
        name: str,
        args: List[str],
        context: CommandContext,
        typed_name: Optional[str] = None,
    ) -> HandlerOutput:
        definition = self.get(name)
        if definition is None:
            raise CommandNotFoundError(typed_name if typed_name is not None else name)

        result = definition.handler(context, list(args))
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, HandlerOutput):
            raise InterpreterError(
                f"{definition.name} returned {type(result).__name__}, expected HandlerOutput"
            )
        return result
