#!/usr/bin/env python3
import logging
from abc import ABC, abstractmethod
from typing import List

from ..core.registry import CommandContext, HandlerOutput, command
from ..errors import MissingArgumentError
from .base import flag_value, positional_args

logger = logging.getLogger(__name__)

ITEM_FLAGS = ("-ItemType", "-Path", "-Destination", "-Name")


class FileOps(ABC):
    @abstractmethod
    def create(self, path: str, item_type: str) -> str:
        ...

    @abstractmethod
    def copy(self, source: str, destination: str) -> str:
        ...

    @abstractmethod
    def move(self, source: str, destination: str) -> str:
        ...

    @abstractmethod
    def remove(self, path: str) -> str:
        ...


class SimulatedFileOps(FileOps):
    def create(self, path: str, item_type: str) -> str:
        return f"Created {item_type.lower()}: {path}"

    def copy(self, source: str, destination: str) -> str:
        return f"Copied '{source}' to '{destination}'"

    def move(self, source: str, destination: str) -> str:
        return f"Moved '{source}' to '{destination}'"

    def remove(self, path: str) -> str:
        return f"Removed item: {path}"


def _source_and_destination(command_name: str, args: List[str]):
    positionals = positional_args(args, ITEM_FLAGS)
    source = flag_value(args, "-Path") or (positionals[0] if positionals else None)
    destination = flag_value(args, "-Destination")
    if destination is None:
        remaining = positionals[1:] if flag_value(args, "-Path") is None else positionals
        destination = remaining[0] if remaining else None

    message = f"{command_name} requires source and destination parameters."
    if not source:
        raise MissingArgumentError(command_name, "Path", message)
    if not destination:
        raise MissingArgumentError(command_name, "Destination", message)
    return source, destination


@command(
    "New-Item",
    summary="Creates a new item",
    usage="New-Item <path> [-ItemType File|Directory]",
    category="Items",
    flags=["-ItemType", "-Path"],
)
def new_item(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    positionals = positional_args(args, ITEM_FLAGS)
    path = flag_value(args, "-Path") or (positionals[0] if positionals else None)
    if not path:
        raise MissingArgumentError("New-Item", "Path")

    item_type = flag_value(args, "-ItemType") or "File"
    logger.debug("New-Item %s (%s)", path, item_type)
    return HandlerOutput(ctx.file_ops.create(path, item_type))


@command(
    "Copy-Item",
    summary="Copies an item from one location to another",
    usage="Copy-Item <source> <destination>",
    category="Items",
    flags=["-Path", "-Destination"],
)
def copy_item(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    source, destination = _source_and_destination("Copy-Item", args)
    return HandlerOutput(ctx.file_ops.copy(source, destination))


@command(
    "Move-Item",
    summary="Moves an item from one location to another",
    usage="Move-Item <source> <destination>",
    category="Items",
    flags=["-Path", "-Destination"],
)
def move_item(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    source, destination = _source_and_destination("Move-Item", args)
    return HandlerOutput(ctx.file_ops.move(source, destination))


@command(
    "Remove-Item",
    summary="Deletes an item",
    usage="Remove-Item <path>",
    category="Items",
    flags=["-Path"],
)
def remove_item(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    path = flag_value(args, "-Path") or next(
        iter(positional_args(args, ITEM_FLAGS)), None
    )
    if not path:
        raise MissingArgumentError(
            "Remove-Item", "Path", "Remove-Item requires a path parameter."
        )
    return HandlerOutput(ctx.file_ops.remove(path))
