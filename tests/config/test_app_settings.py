# tests/config/test_app_settings.py
from tradejournal.analytics.models import EquityCurvePolicy
from tradejournal.config.settings import RuntimeConfig, Settings, SystemConfig


class TestSettings:
    def test_load_settings_from_yaml(self, tmp_path):
        config_content = """
system:
  name: "Test Journal"

analytics:
  initial_capital: 25000
  bucket_count: 20
  equity_curve_policy: per_day
  time_of_day_buckets:
    - label: "Open"
      start: "09:30"
    - label: "Close"
      start: "15:00"

export:
  output_dir: "out"
  formats: ["json"]
"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(config_content)

        settings = Settings.from_yaml(config_file)

        assert settings.system.name == "Test Journal"
        assert settings.analytics.initial_capital == 25000
        assert settings.analytics.bucket_count == 20
        assert settings.analytics.equity_curve_policy == EquityCurvePolicy.PER_DAY
        assert [b.label for b in settings.analytics.time_of_day_buckets] == ["Open", "Close"]
        assert settings.export.output_dir == "out"
        assert settings.export.formats == ["json"]

    def test_settings_defaults(self, tmp_path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text('system:\n  name: "Minimal"\n')

        settings = Settings.from_yaml(config_file)

        assert settings.analytics.initial_capital == 10000.0
        assert settings.analytics.bucket_count == 10
        assert settings.export.enabled is True

    def test_empty_yaml(self, tmp_path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")

        settings = Settings.from_yaml(config_file)

        assert settings.system.name == "Trade Journal Analytics"

    def test_env_override(self, tmp_path, monkeypatch):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("analytics:\n  initial_capital: 5000\n")
        monkeypatch.setenv("TRADEJOURNAL_INITIAL_CAPITAL", "7500")
        monkeypatch.setenv("TRADEJOURNAL_OUTPUT_DIR", "env_reports")

        settings = Settings.from_yaml(config_file)

        assert settings.analytics.initial_capital == 7500.0
        assert settings.export.output_dir == "env_reports"

    def test_runtime_config_from_env(self, monkeypatch):
        monkeypatch.setenv("TRADEJOURNAL_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TRADEJOURNAL_CONFIG_PATH", "elsewhere.yaml")

        runtime = RuntimeConfig()

        assert runtime.log_level == "DEBUG"
        assert runtime.config_path == "elsewhere.yaml"
        assert runtime.initial_capital is None

    def test_system_section_carries_only_name(self):
        assert set(SystemConfig.model_fields) == {"name"}
