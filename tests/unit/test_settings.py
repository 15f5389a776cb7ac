from numbers_engine.config.settings import Settings, get_settings
from numbers_engine.models.config import RoundingMode


def test_settings_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "DEFAULT_DECIMAL_PLACES", "DEFAULT_ROUNDING_METHOD", "SLOW_REQUEST_MS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.load()
    assert s.LOG_LEVEL == "INFO"
    assert s.DEFAULT_DECIMAL_PLACES == 2
    assert s.DEFAULT_ROUNDING_METHOD is RoundingMode.HALF_UP_SYMMETRIC
    assert s.SLOW_REQUEST_MS == 200.0


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEFAULT_DECIMAL_PLACES", "4")
    monkeypatch.setenv("DEFAULT_ROUNDING_METHOD", "B")
    monkeypatch.setenv("SLOW_REQUEST_MS", "50")
    s = Settings.load()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.DEFAULT_DECIMAL_PLACES == 4
    assert s.DEFAULT_ROUNDING_METHOD is RoundingMode.HALF_EVEN
    assert s.SLOW_REQUEST_MS == 50.0


def test_malformed_values_fall_back(monkeypatch):
    monkeypatch.setenv("DEFAULT_DECIMAL_PLACES", "many")
    monkeypatch.setenv("DEFAULT_ROUNDING_METHOD", "sideways")
    monkeypatch.setenv("SLOW_REQUEST_MS", "fast")
    s = Settings.load()
    assert s.DEFAULT_DECIMAL_PLACES == 2
    assert s.DEFAULT_ROUNDING_METHOD is RoundingMode.HALF_UP_SYMMETRIC
    assert s.SLOW_REQUEST_MS == 200.0


def test_negative_decimal_places_are_clamped(monkeypatch):
    monkeypatch.setenv("DEFAULT_DECIMAL_PLACES", "-3")
    assert Settings.load().DEFAULT_DECIMAL_PLACES == 0


def test_default_format_config(monkeypatch):
    monkeypatch.setenv("DEFAULT_DECIMAL_PLACES", "3")
    monkeypatch.setenv("DEFAULT_ROUNDING_METHOD", "D")
    cfg = get_settings().default_format_config()
    assert cfg.decimal_places == 3
    assert cfg.rounding_method is RoundingMode.DOWN


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
