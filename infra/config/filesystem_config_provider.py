from __future__ import annotations

import json
from pathlib import Path

from domain.models import FakesConfig
from infra.mocking import FAKE_ENGINES
from infra.runtime import LEVELS

CONFIG_FILENAME = "fakekit.json"
_KNOWN_KEYS = {"engine", "log_level"}


class FileSystemConfigProvider:
    """Reads ``fakekit.json`` from a config directory.

    A missing file means defaults. Every public method re-reads from disk
    so edits take effect without restarting the test session.
    """

    def __init__(self, config_dir: str) -> None:
        self._config_dir = Path(config_dir)

    @property
    def config_path(self) -> Path:
        return self._config_dir / CONFIG_FILENAME

    def validate(self) -> list[str]:
        errors: list[str] = []
        path = self.config_path
        if not path.exists():
            return errors
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            return [f"Cannot read {path}: {exc}"]
        if not isinstance(data, dict):
            return [f"{path.name} must contain a JSON object"]

        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            errors.append(f"{path.name} has unknown keys: {', '.join(sorted(unknown))}")

        engine = data.get("engine")
        if engine is not None:
            if not isinstance(engine, str):
                errors.append("engine must be a string.")
            elif engine not in FAKE_ENGINES:
                errors.append(
                    f"engine '{engine}' is not available. Choose one of: {', '.join(sorted(FAKE_ENGINES))}."
                )

        log_level = data.get("log_level")
        if log_level is not None:
            if not isinstance(log_level, str):
                errors.append("log_level must be a string.")
            elif log_level not in LEVELS:
                errors.append(
                    f"log_level '{log_level}' is not valid. Choose one of: {', '.join(sorted(LEVELS))}."
                )
        return errors

    def get_config(self) -> FakesConfig:
        data = self._read_json()
        defaults = FakesConfig()
        return FakesConfig(
            engine=data.get("engine", defaults.engine),
            log_level=data.get("log_level", defaults.log_level),
        )

    # -- internal helpers ---------------------------------------------------

    def _read_json(self) -> dict:
        path = self.config_path
        if not path.exists():
            return {}
        return json.loads(path.read_text(encoding="utf-8"))
