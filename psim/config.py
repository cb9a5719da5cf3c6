#!/usr/bin/env python3
import json
import os
from pathlib import Path
from typing import Optional

from .errors import ConfigError


class Config:
    # Session defaults
    HOME_LOCATION = "C:\\Users\\Nishen"
    PROMPT_PREFIX = "PS"
    EXTRA_ALIASES: dict = {}

    WELCOME_MESSAGE = "Welcome to psim, a simulated PowerShell session"
    SHOW_STARTUP_BANNER = True
    SHOW_TIMING = True

    LOG_LEVEL = "WARNING"

    # Prompt lexer choice ("auto" disables highlighting, otherwise pygments lexer name).
    CHOICE_PROMPT_LEXER = "powershell"
    COMPLETION_AUTO_POPUP = True

    CONFIG_DIR = Path.home() / ".psim"
    CONFIG_JSON_FILE = CONFIG_DIR / "config.json"
    LOG_FILE = CONFIG_DIR / "psim.log"
    HISTORY_FILE = CONFIG_DIR / "history"

    HELP_KEYBINDS = [
        ("Alt+H", "Show this help"),
        ("Ctrl+L", "Clear the screen"),
        ("Ctrl+D", "Exit the session"),
    ]

    HELP_SPECIAL_COMMANDS = [
        ("exit", "Exit the session"),
        ("history", "Show commands entered in this session"),
        ("/config_reload", "Reload configuration"),
        ("/cleanup_memory", "Collect garbage and show memory usage"),
        ("/help", "Show this help"),
    ]

    PROMPT_STYLES = {
        "prompt_prefix": "#8caaee bold",
        "path": "#b5cef8 bold",
        "prompt_symbol": "#f2d5cf bold",
        "status_ok": "#a6d189",
        "status_error": "#e78284",
    }

    COMPLETION_STYLES = {
        "completion-menu.completion": "bg:#0a0a0a fg:#aaaaaa bold",
        "completion-menu.completion.current": "bg:#888888 fg:#0a0a0a",
        "completion-menu.meta.completion": "bg:#0a0a0a fg:#737994",
        "completion-menu.meta.completion.current": "bg:#888888",
    }

    PANEL_STYLES = {
        "default": {
            "border_style": "#888888",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "info": {
            "border_style": "#8caaee",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "success": {
            "border_style": "#a6d189",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "error": {
            "border_style": "#e78284",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "warning": {
            "border_style": "#e5c890",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
    }

    # Panel style used for each output shape.
    OUTPUT_SHAPE_STYLES = {
        "text": "default",
        "table": "info",
        "object": "info",
    }

    HIGHLIGHTER_ENABLED = True
    HIGHLIGHTER_RULES = [
        {
            "name": "number",
            "pattern": r"(?P<number>\b\d+(?:\.\d+)?\b)",
            "style": "highlight.number",
        },
        {
            "name": "string",
            "pattern": r"(?P<string>'[^']+')",
            "style": "highlight.string",
        },
        {
            "name": "cmdlet",
            "pattern": r"(?P<cmdlet>\b[A-Z][a-z]+-[A-Z][A-Za-z]+\b)",
            "style": "highlight.cmdlet",
        },
        {
            "name": "boolean",
            "pattern": r"(?P<boolean>^(?:True|False)$)",
            "style": "highlight.boolean",
        },
        {
            "name": "ip",
            "pattern": r"(?P<ip>\b\d{1,3}(?:\.\d{1,3}){3}\b)",
            "style": "highlight.ip",
        },
    ]
    HIGHLIGHTER_STYLES = {
        "highlight.number": "bold cyan",
        "highlight.string": "bold green",
        "highlight.cmdlet": "bold yellow",
        "highlight.boolean": "bold magenta",
        "highlight.ip": "bold magenta",
    }

    @classmethod
    def ensure_directories(cls) -> None:
        cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        if not cls.CONFIG_JSON_FILE.exists():
            cls._write_default_json_config()

    @classmethod
    def get_home_location(cls) -> str:
        env_value = os.getenv("PSIM_HOME_LOCATION")
        if env_value and env_value.strip():
            return env_value.strip()
        return cls.HOME_LOCATION

    @classmethod
    def get_log_level(cls) -> str:
        env_value = os.getenv("PSIM_LOG_LEVEL")
        if env_value and env_value.strip():
            return env_value.strip().upper()
        return str(cls.LOG_LEVEL).upper()

    @classmethod
    def get_prompt_lexer_choice(cls) -> str:
        env_value = os.getenv("PSIM_PROMPT_LEXER")
        if env_value:
            return env_value.strip()
        return getattr(cls, "CHOICE_PROMPT_LEXER", "auto")

    @classmethod
    def is_highlighter_enabled(cls) -> bool:
        env_value = os.getenv("PSIM_HIGHLIGHTER")
        if env_value is not None:
            normalized = env_value.strip().lower()
            if normalized in {"0", "false", "no", "off"}:
                return False
            if normalized in {"1", "true", "yes", "on"}:
                return True
        return cls.HIGHLIGHTER_ENABLED

    # ------------------------------------------------------------------
    # External configuration support (config.json)
    # ------------------------------------------------------------------

    @classmethod
    def _load_external_config(cls) -> None:
        cls._load_json_config()

    @classmethod
    def _load_json_config(cls, path: Optional[Path] = None) -> bool:
        config_path = Path(path) if path is not None else cls.CONFIG_JSON_FILE
        if not config_path.exists():
            return False

        try:
            with config_path.open("r", encoding="utf-8") as f:
                config_data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return False

        if not isinstance(config_data, dict):
            return False

        def get_nested(data, *keys, default=None):
            current = data
            for key in keys:
                if isinstance(current, dict) and key in current:
                    current = current[key]
                else:
                    return default
            return current

        cls.WELCOME_MESSAGE = get_nested(
            config_data, "general", "welcome_message", default=cls.WELCOME_MESSAGE
        )
        cls.SHOW_STARTUP_BANNER = get_nested(
            config_data,
            "general",
            "show_startup_banner",
            default=cls.SHOW_STARTUP_BANNER,
        )
        cls.LOG_LEVEL = get_nested(
            config_data, "general", "log_level", default=cls.LOG_LEVEL
        )

        cls.HOME_LOCATION = get_nested(
            config_data, "session", "home_location", default=cls.HOME_LOCATION
        )
        cls.PROMPT_PREFIX = get_nested(
            config_data, "session", "prompt_prefix", default=cls.PROMPT_PREFIX
        )
        aliases = get_nested(config_data, "session", "aliases", default=None)
        if isinstance(aliases, dict):
            cls.EXTRA_ALIASES = {
                str(name).lower(): str(target) for name, target in aliases.items()
            }

        cls.SHOW_TIMING = get_nested(
            config_data, "ui", "show_timing", default=cls.SHOW_TIMING
        )
        cls.CHOICE_PROMPT_LEXER = get_nested(
            config_data, "ui", "choice_prompt_lexer", default=cls.CHOICE_PROMPT_LEXER
        )
        cls.COMPLETION_AUTO_POPUP = get_nested(
            config_data,
            "ui",
            "completion_auto_popup",
            default=cls.COMPLETION_AUTO_POPUP,
        )
        cls.HIGHLIGHTER_ENABLED = get_nested(
            config_data, "ui", "highlighter_enabled", default=cls.HIGHLIGHTER_ENABLED
        )

        for attribute, key in (
            ("PROMPT_STYLES", "prompt_styles"),
            ("COMPLETION_STYLES", "completion_styles"),
            ("PANEL_STYLES", "panel_styles"),
            ("HIGHLIGHTER_STYLES", "highlighter_styles"),
            ("OUTPUT_SHAPE_STYLES", "output_shape_styles"),
        ):
            value = get_nested(config_data, "ui", key, default=None)
            if isinstance(value, dict):
                merged = dict(getattr(cls, attribute))
                merged.update(value)
                setattr(cls, attribute, merged)

        rules = get_nested(config_data, "ui", "highlighter_rules", default=None)
        if isinstance(rules, list):
            cls.HIGHLIGHTER_RULES = [rule for rule in rules if isinstance(rule, dict)]

        keybinds = get_nested(config_data, "ui", "help_keybinds", default=None)
        if isinstance(keybinds, list):
            cls.HELP_KEYBINDS = [
                tuple(item) for item in keybinds if isinstance(item, (list, tuple))
            ]

        return True

    @classmethod
    def _write_default_json_config(cls) -> None:
        config_data = {
            "general": {
                "welcome_message": cls.WELCOME_MESSAGE,
                "show_startup_banner": cls.SHOW_STARTUP_BANNER,
                "log_level": cls.LOG_LEVEL,
            },
            "session": {
                "home_location": cls.HOME_LOCATION,
                "prompt_prefix": cls.PROMPT_PREFIX,
                "aliases": cls.EXTRA_ALIASES,
            },
            "ui": {
                "show_timing": cls.SHOW_TIMING,
                "choice_prompt_lexer": cls.CHOICE_PROMPT_LEXER,
                "completion_auto_popup": cls.COMPLETION_AUTO_POPUP,
                "help_keybinds": [list(item) for item in cls.HELP_KEYBINDS],
                "prompt_styles": cls.PROMPT_STYLES,
                "completion_styles": cls.COMPLETION_STYLES,
                "panel_styles": cls.PANEL_STYLES,
                "output_shape_styles": cls.OUTPUT_SHAPE_STYLES,
                "highlighter_enabled": cls.HIGHLIGHTER_ENABLED,
                "highlighter_rules": cls.HIGHLIGHTER_RULES,
                "highlighter_styles": cls.HIGHLIGHTER_STYLES,
            },
        }

        try:
            with cls.CONFIG_JSON_FILE.open("w", encoding="utf-8") as f:
                json.dump(config_data, f, indent=2, ensure_ascii=False)
        except OSError:
            pass

    @classmethod
    def load_file(cls, path: Path) -> None:
        path = Path(path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        if not cls._load_json_config(path):
            raise ConfigError(f"Could not parse configuration file: {path}")

    @classmethod
    def reload(cls) -> bool:
        try:
            cls.ensure_directories()
            return cls._load_json_config()
        except OSError:
            return False


Config._load_external_config()
