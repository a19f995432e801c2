from config.settings import Settings, get_settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("CLASSIFIER_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LEDGER_API_URL", "http://ledger.test")
    settings = Settings()
    assert settings.google_api_key == "test-key"
    assert settings.classifier_timeout == 2.5
    assert settings.classifier_max_tokens == 1000
    assert settings.ledger_api_url == "http://ledger.test"


def test_blank_api_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "")
    assert Settings().google_api_key is None


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_max_sessions_setting(monkeypatch):
    monkeypatch.setenv("CHAT_MAX_SESSIONS", "5")
    assert Settings().max_sessions == 5
