from .highlighter import OutputHighlighter, create_console
from .manager import UIManager
from .theme import PanelStyle, PanelTheme

__all__ = [
    "OutputHighlighter",
    "PanelStyle",
    "PanelTheme",
    "UIManager",
    "create_console",
]
