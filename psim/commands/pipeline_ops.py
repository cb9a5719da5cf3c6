#!/usr/bin/env python3
from typing import List

from ..core.registry import CommandContext, HandlerOutput, OutputShape, command
from .base import render_properties

# Stages only acknowledge the operation; earlier stage output is never threaded in.


@command(
    "Measure-Object",
    summary="Calculates numeric properties of objects",
    category="Pipeline",
)
def measure_object(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput(
        render_properties(
            [
                ("Count", 1),
                ("Average", ""),
                ("Sum", ""),
                ("Maximum", ""),
                ("Minimum", ""),
                ("Property", ""),
            ]
        )
    )


@command("Select-Object", summary="Selects object properties", category="Pipeline")
def select_object(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput("Select-Object pipeline operation completed.")


@command("Where-Object", summary="Filters objects", category="Pipeline")
def where_object(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput("Where-Object filter applied.")


@command("Sort-Object", summary="Sorts objects by property", category="Pipeline")
def sort_object(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput("Sort-Object completed.")


@command("Format-Table", summary="Formats output as a table", category="Pipeline")
def format_table(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput("Format-Table applied.", OutputShape.TABLE)


@command("Format-List", summary="Formats output as a list", category="Pipeline")
def format_list(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput("Format-List applied.")


@command("Out-String", summary="Converts objects to strings", category="Pipeline")
def out_string(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    return HandlerOutput("Out-String conversion completed.")
