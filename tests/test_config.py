import pytest

from innerpeace.config import get_settings, is_demo_mode


@pytest.mark.parametrize("url", ["", "   ", "demo", "demo-database-url"])
def test_missing_or_placeholder_store_means_demo(monkeypatch, url):
    monkeypatch.setenv("DATABASE_URL", url)
    assert is_demo_mode()


def test_configured_store_is_not_demo(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///innerpeace.db")
    assert not is_demo_mode()


def test_settings_are_read_per_call(monkeypatch):
    monkeypatch.setenv("MAPS_API_KEY", "first")
    assert get_settings().MAPS_API_KEY == "first"
    monkeypatch.setenv("MAPS_API_KEY", "second")
    assert get_settings().MAPS_API_KEY == "second"


def test_defaults():
    current = get_settings()
    assert current.STORE_TIMEOUT_SECONDS == 8.0
    assert current.GEMINI_TEMPERATURE == 0.7
    assert current.GEMINI_MAX_OUTPUT_TOKENS == 1024
