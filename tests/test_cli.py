import json

from psim import __version__
from psim.cli import main


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"psim version {__version__}"


def test_single_command_prints_output(capsys):
    assert main(["-c", "Get-Location"]) == 0
    assert capsys.readouterr().out.strip() == "C:\\Users\\Nishen"


def test_failed_command_exits_non_zero(capsys):
    assert main(["-c", "Nope-Command"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "'Nope-Command' is not recognized" in captured.err


def test_json_output(capsys):
    assert main(["-c", "Get-Process | Get-Location", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert payload["output"] == "C:\\Users\\Nishen"
    assert payload["outputShape"] == "text"
    assert payload["executionTimeMs"] >= 0


def test_config_option(tmp_path, capsys):
    config_file = tmp_path / "lab.json"
    config_file.write_text(
        json.dumps({"session": {"home_location": "G:\\Lab"}}), encoding="utf-8"
    )
    assert main(["--config", str(config_file), "-c", "pwd"]) == 0
    assert capsys.readouterr().out.strip() == "G:\\Lab"


def test_missing_config_file(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "nope.json"), "-c", "pwd"]) == 1
    assert "Configuration file not found" in capsys.readouterr().err


def test_config_reload(isolated_config, capsys):
    assert main(["--config-reload"]) == 0
    assert "Configuration reloaded successfully" in capsys.readouterr().out
    assert (isolated_config / "config.json").exists()


def test_command_writes_log_file(isolated_config):
    main(["-c", "Get-Date"])
    assert (isolated_config / "psim.log").exists()
