# src/tradejournal/config/settings.py
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tradejournal.analytics.settings import AnalyticsSettings
from tradejournal.export.settings import ExportSettings


class SystemConfig(BaseModel):
    name: str = "Trade Journal Analytics"


class RuntimeConfig(BaseSettings):
    """Runtime overrides read from TRADEJOURNAL_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="TRADEJOURNAL_")

    config_path: str = "config/settings.yaml"
    log_level: str = "INFO"
    initial_capital: float | None = Field(default=None, gt=0)
    output_dir: str | None = None


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        runtime = RuntimeConfig()

        analytics = dict(data.pop("analytics", None) or {})
        if runtime.initial_capital is not None:
            analytics["initial_capital"] = runtime.initial_capital

        export = dict(data.pop("export", None) or {})
        if runtime.output_dir:
            export["output_dir"] = runtime.output_dir

        data.pop("runtime", None)

        return cls(
            **data,
            analytics=analytics,
            export=export,
            runtime=runtime,
        )
