from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import main
from infra.config import CONFIG_FILENAME


def test_validate_config_reports_defaults_for_empty_dir(tmp_path: Path, capsys) -> None:
    assert main(["validate-config", "--config-dir", str(tmp_path)]) == 0

    assert "config ok (engine=unittest_mock, log_level=warning)" in capsys.readouterr().out


def test_validate_config_lists_errors(tmp_path: Path, capsys) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"engine": "moq"}))

    assert main(["validate-config", "--config-dir", str(tmp_path)]) == 1

    out = capsys.readouterr().out
    assert out.startswith("  - engine 'moq' is not available")


def test_engines_lists_available_adapters(capsys) -> None:
    assert main(["engines"]) == 0

    assert capsys.readouterr().out.splitlines() == ["unittest_mock"]


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        main([])
