#!/usr/bin/env python3
import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..commands import (
    FileOps,
    NetworkOps,
    SimulatedFileOps,
    SimulatedNetworkOps,
    build_default_registry,
)
from ..config import Config
from ..errors import CommandNotFoundError, InterpreterError
from .pipeline import PipelineExecutor
from .registry import CommandContext, CommandRegistry, HandlerOutput, OutputShape
from .state import InterpreterState
from .tokenizer import has_pipeline, tokenize

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    success: bool
    output: str
    execution_time_ms: int
    output_shape: OutputShape = OutputShape.TEXT
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "output": self.output,
            "executionTimeMs": self.execution_time_ms,
            "outputShape": self.output_shape.value,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


def _elapsed_ms(started: float) -> int:
    return max(0, int(round((time.perf_counter() - started) * 1000)))


class PowerShellInterpreter:
    def __init__(
        self,
        home: Optional[str] = None,
        extra_aliases: Optional[Mapping[str, str]] = None,
        registry: Optional[CommandRegistry] = None,
        file_ops: Optional[FileOps] = None,
        network_ops: Optional[NetworkOps] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if extra_aliases is None:
            extra_aliases = Config.EXTRA_ALIASES

        self._state = InterpreterState.create(
            home=home or Config.get_home_location(),
            extra_aliases=extra_aliases,
        )
        self._registry = registry or build_default_registry()
        self._context = CommandContext(
            state=self._state,
            registry=self._registry,
            file_ops=file_ops or SimulatedFileOps(),
            network_ops=network_ops or SimulatedNetworkOps(),
            instance_id=str(uuid.uuid4()),
            clock=clock or datetime.now,
        )
        self._pipeline = PipelineExecutor(self._run_single)

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    async def execute_command(self, command_line: str) -> CommandResult:
        started = time.perf_counter()
        trimmed = (command_line or "").strip()

        if not trimmed:
            return CommandResult(
                success=True, output="", execution_time_ms=_elapsed_ms(started)
            )

        try:
            if has_pipeline(trimmed):
                result = await self._pipeline.run(trimmed)
            else:
                result = await self._run_single(trimmed)

            elapsed = _elapsed_ms(started)
            logger.debug("%s completed in %d ms", trimmed, elapsed)
            return CommandResult(
                success=True,
                output=result.output,
                execution_time_ms=elapsed,
                output_shape=result.shape,
            )
        except InterpreterError as error:
            return self._failure(trimmed, error.message, started)
        except Exception as error:
            logger.exception("Unexpected failure while running %r", trimmed)
            return self._failure(trimmed, str(error) or "Unknown error occurred", started)

    def execute(self, command_line: str) -> CommandResult:
        """Synchronous wrapper around ``execute_command``.

        Callers already inside an event loop must await ``execute_command``.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.execute_command(command_line))
        raise RuntimeError(
            "execute() cannot be used inside a running event loop; "
            "await execute_command() instead"
        )

    async def _run_single(self, command_line: str) -> HandlerOutput:
        tokens = tokenize(command_line)
        if not tokens:
            raise CommandNotFoundError(command_line)

        typed, args = tokens[0], tokens[1:]
        return await self._registry.dispatch(
            self._state.resolve_alias(typed), args, self._context, typed_name=typed
        )

    @staticmethod
    def _failure(command_line: str, message: str, started: float) -> CommandResult:
        logger.info("Command failed: %s (%s)", command_line, message)
        return CommandResult(
            success=False,
            output="",
            error=message,
            execution_time_ms=_elapsed_ms(started),
            output_shape=OutputShape.TEXT,
        )

    def get_current_location(self) -> str:
        return self._state.current_location

    def get_prompt(self) -> str:
        return f"PS {self._state.current_location}> "

    def get_variable_value(self, name: str) -> Any:
        return self._state.variables.get(name)

    def set_variable_value(self, name: str, value: Any) -> None:
        self._state.variables[name] = value

    def resolve_alias(self, name: str) -> str:
        return self._state.resolve_alias(name)

    def command_names(self) -> List[str]:
        return sorted(set(self._registry.names()) | set(self._state.aliases))

    def describe(self, name: str) -> Optional[str]:
        definition = self._registry.get(self._state.resolve_alias(name))
        return definition.summary if definition else None
