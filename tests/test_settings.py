from trip_quote.config.settings import PACKAGE_DATA, Settings


def test_defaults(tmp_path, monkeypatch):
    for name in ("TRIP_QUOTE_DATA_DIR", "TRIP_QUOTE_AUTOSAVE_DELAY", "TRIP_QUOTE_LOCALE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.load(project_root=tmp_path)

    assert settings.data_dir == tmp_path / "data"
    assert settings.pricing_config == tmp_path / "data" / "pricingConfig.json"
    assert settings.default_pricing == PACKAGE_DATA / "default_pricing.json"
    assert settings.default_pricing.exists()
    assert settings.default_quote.exists()
    assert settings.autosave_delay == 1.0
    assert settings.default_locale == "en"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("TRIP_QUOTE_DATA_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("TRIP_QUOTE_AUTOSAVE_DELAY", "0.25")
    monkeypatch.setenv("TRIP_QUOTE_LOCALE", "de")

    settings = Settings.load(project_root=tmp_path)

    assert settings.pricing_config == tmp_path / "store" / "pricingConfig.json"
    assert settings.autosave_delay == 0.25
    assert settings.default_locale == "de"
