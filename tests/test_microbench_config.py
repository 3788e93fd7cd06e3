"""Unit tests for microbench config loader."""

import pytest

from microbench.config import CalibrationConfig, Config, ConfigManager
from microbench.utils.errors import ConfigError


class TestConfig:
    """Config container get/update."""

    def test_defaults(self):
        c = Config()
        assert c.calibration.warmup_seconds == 0.15
        assert c.calibration.calibration_seconds == 1.0
        assert c.calibration.multiplier == 10.1
        assert c.calibration.min_iterations == 1
        assert c.get("calibration.zero_elapsed_policy") == "clamp"

    def test_update_section(self):
        c = Config({"calibration": {"multiplier": 2.5}})
        assert c.calibration.multiplier == 2.5
        assert c.calibration.warmup_seconds == 0.15

    def test_defaults_not_shared(self):
        Config({"calibration": {"multiplier": 3.0}})
        assert Config().calibration.multiplier == 10.1

    def test_get_missing_returns_default(self):
        assert Config().get("missing.key", "default") == "default"

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError):
            Config({"calibration": {"bogus": 1}})

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError):
            Config({"calibration": 5})

    @pytest.mark.parametrize(
        "override",
        [
            {"warmup_seconds": 0},
            {"calibration_seconds": -1},
            {"multiplier": 0},
            {"min_iterations": 0},
            {"zero_elapsed_policy": "ignore"},
        ],
    )
    def test_invalid_values_rejected(self, override):
        with pytest.raises(ConfigError):
            Config({"calibration": override})

    @pytest.mark.parametrize(
        "override",
        [
            {"warmup_seconds": "fast"},
            {"calibration_seconds": None},
            {"multiplier": True},
            {"multiplier": float("nan")},
            {"min_iterations": 2.5},
            {"reset_between_runs": "yes"},
        ],
    )
    def test_wrong_types_rejected(self, override):
        with pytest.raises(ConfigError):
            Config({"calibration": override})

    def test_wrong_report_type_rejected(self):
        with pytest.raises(ConfigError):
            Config({"report": {"float_precision": "two"}})

    def test_failed_update_keeps_previous_values(self):
        c = Config({"calibration": {"multiplier": 2.0}})
        with pytest.raises(ConfigError):
            c.update({"calibration": {"multiplier": 3.0, "warmup_seconds": "fast"}, "extra": {"a": 1}})
        assert c.calibration.multiplier == 2.0
        assert c.calibration.warmup_seconds == 0.15
        assert c.get("extra") is None

    def test_to_dict(self):
        d = Config({"extra": {"a": 1}}).to_dict()
        assert d["calibration"]["multiplier"] == 10.1
        assert d["report"]["title"] == "Benchmark Results"
        assert d["extra"] == {"a": 1}


class TestConfigManager:
    """Config file parsing (YAML/JSON)."""

    def test_load_yaml(self, fast_config_file):
        config = ConfigManager.load_yaml(str(fast_config_file))
        assert config.calibration.calibration_seconds == 0.05
        assert config.report.title == "CLI Results"

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"calibration": {"min_iterations": 3}}')
        config = ConfigManager.load(str(path))
        assert config.calibration.min_iterations == 3

    def test_roundtrip_yaml(self, tmp_path):
        path = tmp_path / "out" / "config.yaml"
        ConfigManager.save_yaml(Config({"calibration": {"multiplier": 4.0}}), str(path))
        assert ConfigManager.load(str(path)).calibration.multiplier == 4.0

    def test_save_json(self, tmp_path):
        path = tmp_path / "config.json"
        ConfigManager.save_json(Config(), str(path))
        assert ConfigManager.load_json(str(path)).calibration == CalibrationConfig()

    def test_load_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("calibration: [unclosed\n")
        with pytest.raises(ConfigError):
            ConfigManager.load(str(path))

    def test_load_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            ConfigManager.load(str(path))

    def test_load_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            ConfigManager.load(str(path))

    def test_save_json_creates_parent_dir(self, tmp_path):
        path = tmp_path / "a" / "b" / "config.json"
        ConfigManager.save_json(Config(), str(path))
        assert path.exists()

    def test_load_missing_file(self):
        with pytest.raises(ConfigError):
            ConfigManager.load("/nonexistent/microbench.yaml")

    def test_load_unsupported_extension(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("")
        with pytest.raises(ConfigError):
            ConfigManager.load(str(path))

    def test_load_or_default_with_missing_file(self):
        config = ConfigManager.load_or_default("/nonexistent.yaml")
        assert config.calibration == CalibrationConfig()
