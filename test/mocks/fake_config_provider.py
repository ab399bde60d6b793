from __future__ import annotations

from domain.models import FakesConfig
from domain.ports import ConfigProviderPort


class InMemoryConfigProvider:
    """In-memory test double for ConfigProviderPort."""

    def __init__(
        self,
        *,
        config: FakesConfig | None = None,
        validation_errors: list[str] | None = None,
    ) -> None:
        self._config = config or FakesConfig()
        self._validation_errors = validation_errors or []

    def get_config(self) -> FakesConfig:
        return self._config

    def validate(self) -> list[str]:
        return list(self._validation_errors)


_provider_check: ConfigProviderPort = InMemoryConfigProvider()
