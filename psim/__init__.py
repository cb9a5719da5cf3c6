__version__ = "1.0.0"

from .core import CommandResult, OutputShape, PowerShellInterpreter

__all__ = ["CommandResult", "OutputShape", "PowerShellInterpreter", "__version__"]
