#!/usr/bin/env python3

import logging
import sys

from rich.logging import RichHandler

from .config import Config
from .core.shell import InteractiveShell
from .ui.highlighter import create_console


def check_dependencies() -> None:
    try:
        import prompt_toolkit  # noqa: F401
        import psutil  # noqa: F401
        import pygments  # noqa: F401
        import rich  # noqa: F401
    except ImportError as error:
        print(f" Required dependency not found: {error}")
        print("Please install required packages:")
        print("pip install rich prompt-toolkit psutil pygments")
        sys.exit(1)


def configure_logging(debug: bool = False) -> None:
    root = logging.getLogger("psim")
    root.handlers.clear()
    root.setLevel(logging.DEBUG if debug else Config.get_log_level())
    root.propagate = False

    try:
        Config.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Config.LOG_FILE, encoding="utf-8")
    except OSError:
        file_handler = None

    if file_handler is not None:
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(file_handler)

    if debug:
        root.addHandler(RichHandler(console=create_console(stderr=True), show_path=False))


def main(debug: bool = False) -> int:
    check_dependencies()
    Config.ensure_directories()
    configure_logging(debug)

    shell = InteractiveShell()
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
