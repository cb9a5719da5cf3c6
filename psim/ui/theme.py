#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Any, Dict, Optional

from rich.panel import Panel
from rich.text import Text

from ..config import Config

_FALLBACK_BORDER = "#888888"


@dataclass(frozen=True)
class PanelStyle:
    border_style: str
    padding: Optional[tuple[int, int]] = (0, 1)
    title_style: Optional[str] = None
    title_align: str = "left"
    background_style: Optional[str] = None
    expand: bool = False

    @classmethod
    def from_mapping(cls, values: Dict[str, Any], fallback: Dict[str, Any]) -> "PanelStyle":
        def pick(key: str, default: Any = None) -> Any:
            return values.get(key, fallback.get(key, default))

        padding = pick("padding")
        if isinstance(padding, list):
            padding = tuple(padding)

        return cls(
            border_style=pick("border_style", _FALLBACK_BORDER),
            padding=padding,
            title_style=values.get("title_style"),
            title_align=pick("title_align", "left"),
            background_style=values.get("background_style"),
            expand=bool(pick("expand", False)),
        )


class PanelTheme:
    @staticmethod
    def get_style(name: str) -> PanelStyle:
        styles = Config.PANEL_STYLES
        fallback = styles.get("default", {})
        return PanelStyle.from_mapping(styles.get(name, fallback), fallback)

    @staticmethod
    def style_for_shape(shape: str) -> str:
        """Panel style name configured for a result's output shape."""
        return Config.OUTPUT_SHAPE_STYLES.get(shape, "default")

    @staticmethod
    def build(
        renderable: Any,
        title: str | Text = "",
        style: str = "default",
        *,
        fit: bool = False,
        **overrides: Any,
    ) -> Panel:
        panel_style = PanelTheme.get_style(style)

        panel_kwargs: Dict[str, Any] = {
            "border_style": panel_style.border_style,
            "title_align": panel_style.title_align,
        }
        if panel_style.padding is not None:
            panel_kwargs["padding"] = panel_style.padding
        if panel_style.background_style:
            panel_kwargs["style"] = panel_style.background_style
        if panel_style.expand and not fit:
            panel_kwargs["expand"] = True
        panel_kwargs.update(overrides)

        if isinstance(title, str) and title and panel_style.title_style:
            title = Text(title, style=panel_style.title_style)

        if fit:
            return Panel.fit(renderable, title=title or None, **panel_kwargs)
        return Panel(renderable, title=title or None, **panel_kwargs)
