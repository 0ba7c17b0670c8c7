import importlib

import pytest


def _reload_config(monkeypatch, **env):
    for key, value in env.items():
        if value is None:
            monkeypatch.delenv(key, raising=False)
        else:
            monkeypatch.setenv(key, value)
    import config  # local import to ensure module exists before reload
    return importlib.reload(config)


@pytest.fixture(autouse=True)
def _restore_config(monkeypatch):
    yield
    monkeypatch.undo()
    import config
    importlib.reload(config)


def test_enable_screenshots_obeys_env(monkeypatch):
    module = _reload_config(monkeypatch, ENABLE_SCREENSHOTS="0")
    assert module.ENABLE_SCREENSHOTS is False

    module = _reload_config(monkeypatch, ENABLE_SCREENSHOTS="TRUE")
    assert module.ENABLE_SCREENSHOTS is True

    module = _reload_config(monkeypatch, ENABLE_SCREENSHOTS=None)
    assert module.ENABLE_SCREENSHOTS is True


def test_directions_flag_uses_bool_parser(monkeypatch):
    module = _reload_config(monkeypatch, OPEN_DIRECTIONS_IN_BROWSER="off")
    assert module.OPEN_DIRECTIONS_IN_BROWSER is False

    module = _reload_config(monkeypatch, OPEN_DIRECTIONS_IN_BROWSER="maybe")
    assert module.OPEN_DIRECTIONS_IN_BROWSER is True


def test_debounce_delay_parses_and_clamps(monkeypatch):
    module = _reload_config(monkeypatch, ROUTE_DEBOUNCE_SECONDS="0.75")
    assert module.DEBOUNCE_SECONDS == pytest.approx(0.75)

    module = _reload_config(monkeypatch, ROUTE_DEBOUNCE_SECONDS="-1")
    assert module.DEBOUNCE_SECONDS == 0.0

    module = _reload_config(monkeypatch, ROUTE_DEBOUNCE_SECONDS="soon")
    assert module.DEBOUNCE_SECONDS == pytest.approx(0.3)


def test_default_region_can_be_overridden(monkeypatch):
    module = _reload_config(
        monkeypatch,
        DEFAULT_REGION_LATITUDE="51.5",
        DEFAULT_REGION_LONGITUDE="-0.12",
        DEFAULT_REGION_SPAN="0.001",
    )

    assert module.DEFAULT_REGION_LATITUDE == pytest.approx(51.5)
    assert module.DEFAULT_REGION_LONGITUDE == pytest.approx(-0.12)
    assert module.DEFAULT_REGION_SPAN == pytest.approx(module.VIEWPORT_PADDING)


def test_unknown_timezone_falls_back(monkeypatch):
    module = _reload_config(monkeypatch, ITINERARY_TIMEZONE="Mars/Olympus")

    assert module.LOCAL_TIMEZONE.zone == "Asia/Kolkata"


def test_dotenv_loaded_only_when_requested(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("ROUTE_DEBOUNCE_SECONDS=1.5\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # Record the variable so the value loaded from .env is removed on undo.
    monkeypatch.setenv("ROUTE_DEBOUNCE_SECONDS", "0.3")
    monkeypatch.delenv("ROUTE_DEBOUNCE_SECONDS")

    module = _reload_config(monkeypatch, CONFIG_LOAD_DOTENV=None)
    assert module.DEBOUNCE_SECONDS == pytest.approx(0.3)

    module = _reload_config(monkeypatch, CONFIG_LOAD_DOTENV="1")
    assert module.DEBOUNCE_SECONDS == pytest.approx(1.5)
