import logging

import pytest

from quantitykit.core.config import (
    EngineConfig,
    configure_logging,
    decimal_context,
    load_config,
    reset_config,
)


class TestEngineConfig:
    def test_defaults(self):
        cfg = load_config()
        assert cfg == EngineConfig()
        assert cfg.decimal_precision == 50
        assert cfg.inverter_epsilon == 1e-8
        assert cfg.coarse_epsilon == 1e-3
        assert cfg.warn_on_exhaustion is True
        assert cfg.delta_at_json is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("QUANTITYKIT_DECIMAL_PRECISION", "80")
        monkeypatch.setenv("QUANTITYKIT_INVERTER_EPSILON", "1e-6")
        monkeypatch.setenv("QUANTITYKIT_WARN_ON_EXHAUSTION", "off")
        monkeypatch.setenv("QUANTITYKIT_DELTA_AT_JSON", "/tmp/leaps.json")
        reset_config()
        cfg = load_config()
        assert cfg.decimal_precision == 80
        assert cfg.inverter_epsilon == 1e-6
        assert cfg.warn_on_exhaustion is False
        assert cfg.delta_at_json == "/tmp/leaps.json"

    def test_config_is_cached_until_reset(self, monkeypatch):
        first = load_config()
        monkeypatch.setenv("QUANTITYKIT_DECIMAL_PRECISION", "70")
        assert load_config() is first
        reset_config()
        assert load_config().decimal_precision == 70

    @pytest.mark.parametrize("name, raw", [
        ("QUANTITYKIT_DECIMAL_PRECISION", "many"),
        ("QUANTITYKIT_INVERTER_EPSILON", "small"),
        ("QUANTITYKIT_WARN_ON_EXHAUSTION", "maybe"),
    ])
    def test_unparseable_values(self, monkeypatch, name, raw):
        monkeypatch.setenv(name, raw)
        reset_config()
        with pytest.raises(ValueError, match=name):
            load_config()

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="decimal_precision"):
            EngineConfig(decimal_precision=0)
        with pytest.raises(ValueError, match="tolerances"):
            EngineConfig(coarse_epsilon=-1.0)
        with pytest.raises(ValueError, match="ceilings"):
            EngineConfig(inverter_max_iterations=0)
        with pytest.raises(ValueError, match="initial_step"):
            EngineConfig(inverter_initial_step=0.0)

    def test_decimal_context_follows_precision(self, monkeypatch):
        assert decimal_context().prec == 50
        monkeypatch.setenv("QUANTITYKIT_DECIMAL_PRECISION", "20")
        reset_config()
        assert decimal_context().prec == 20


class TestLogging:
    def test_single_handler(self):
        logger = configure_logging("DEBUG")
        configure_logging("INFO")
        ours = [h for h in logger.handlers if getattr(h, "_quantitykit", False)]
        assert len(ours) == 1
        assert logger.level == logging.INFO

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("QUANTITYKIT_LOG_LEVEL", "error")
        assert configure_logging().level == logging.ERROR

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("LOUD")
