#!/usr/bin/env python3
from types import ModuleType
from typing import Iterable

from ..core.registry import CommandRegistry
from . import items, location, network, pipeline_ops, session, system
from .items import FileOps, SimulatedFileOps
from .network import NetworkOps, SimulatedNetworkOps

BUILTIN_MODULES = (location, items, session, system, pipeline_ops, network)


def register_module(registry: CommandRegistry, module: ModuleType) -> int:
    count = 0
    for obj in vars(module).values():
        if callable(obj) and hasattr(obj, "__command_definition__"):
            registry.register(obj.__command_definition__)
            count += 1
    return count


def build_default_registry(modules: Iterable[ModuleType] = BUILTIN_MODULES) -> CommandRegistry:
    registry = CommandRegistry()
    for module in modules:
        register_module(registry, module)
    return registry


__all__ = [
    "FileOps",
    "NetworkOps",
    "SimulatedFileOps",
    "SimulatedNetworkOps",
    "build_default_registry",
    "register_module",
]
