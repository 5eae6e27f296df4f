from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models import Frequency


class PreviewConfig(BaseModel):
    default_frequency: Frequency = Frequency.WEEKLY
    default_interval: int = Field(default=1, ge=1)


class AppConfig(BaseModel):
    preview: PreviewConfig = Field(default_factory=PreviewConfig)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        populate_by_name=True,
    )

    max_count: int = Field(default=100, ge=0, alias="RECURRENCE_MAX_COUNT")
    max_steps: int = Field(default=10_000, ge=1, alias="RECURRENCE_MAX_STEPS")
    # Only used to decide what "today" is when seeding a new rule.
    timezone: str = Field(default="America/New_York", alias="TIMEZONE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    config_path: str = Field(default="config.yaml", alias="APP_CONFIG_PATH")

    _app_config: AppConfig | None = None
    _app_config_mtime: float | None = None

    def load_app_config(self, *, force_reload: bool = False) -> AppConfig:
        """Picker defaults from the YAML file, cached until the file's mtime changes."""
        path = Path(self.config_path)
        if not path.exists():
            self._app_config, self._app_config_mtime = AppConfig(), None
            return self._app_config

        mtime = path.stat().st_mtime
        cached = self._app_config is not None and self._app_config_mtime == mtime
        if cached and not force_reload:
            return self._app_config

        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        self._app_config = AppConfig.model_validate(raw)
        self._app_config_mtime = mtime
        return self._app_config

    def reload_app_config(self) -> AppConfig:
        return self.load_app_config(force_reload=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
