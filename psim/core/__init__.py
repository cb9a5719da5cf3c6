from .interpreter import CommandResult, PowerShellInterpreter
from .registry import CommandRegistry, OutputShape
from .state import InterpreterState
from .tokenizer import tokenize

__all__ = [
    "CommandRegistry",
    "CommandResult",
    "InterpreterState",
    "OutputShape",
    "PowerShellInterpreter",
    "tokenize",
]
