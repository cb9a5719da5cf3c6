import logging
from datetime import datetime

import pytest

from psim.config import Config
from psim.core.interpreter import PowerShellInterpreter

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    for name in ("PSIM_HOME_LOCATION", "PSIM_LOG_LEVEL", "PSIM_HIGHLIGHTER", "PSIM_PROMPT_LEXER"):
        monkeypatch.delenv(name, raising=False)

    saved = {name: value for name, value in vars(Config).items() if name.isupper()}
    config_dir = tmp_path / "psim-home"
    Config.CONFIG_DIR = config_dir
    Config.CONFIG_JSON_FILE = config_dir / "config.json"
    Config.LOG_FILE = config_dir / "psim.log"
    Config.HISTORY_FILE = config_dir / "history"
    Config.HOME_LOCATION = "C:\\Users\\Nishen"
    Config.EXTRA_ALIASES = {}
    Config.PROMPT_PREFIX = "PS"

    yield config_dir

    for name, value in saved.items():
        setattr(Config, name, value)

    logger = logging.getLogger("psim")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def interpreter():
    return PowerShellInterpreter(clock=lambda: FIXED_NOW)
