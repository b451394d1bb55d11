import pytest

from mirrorcare.config import ProviderConfig, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "MEDGEMMA_DEMO_MODE",
        "MEDGEMMA_ENDPOINT",
        "MEDGEMMA_URL",
        "MEDGEMMA_TIMEOUT_MS",
        "MIRRORCARE_CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Settings().provider_config()

    assert config == ProviderConfig(demo_mode=True, endpoint="", timeout_ms=20000)
    assert config.has_endpoint is False
    assert config.timeout_sec == 20.0
    assert Settings().cors_origins == ["*"]


def test_demo_mode_only_disabled_by_false_like_values(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MEDGEMMA_DEMO_MODE", "false")
    assert Settings().demo_mode is False

    monkeypatch.setenv("MEDGEMMA_DEMO_MODE", " OFF ")
    assert Settings().demo_mode is False

    monkeypatch.setenv("MEDGEMMA_DEMO_MODE", "true")
    assert Settings().demo_mode is True

    monkeypatch.setenv("MEDGEMMA_DEMO_MODE", "anything")
    assert Settings().demo_mode is True


def test_endpoint_falls_back_to_url_variable(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MEDGEMMA_URL", "http://from-url:8000")
    assert Settings().medgemma_endpoint == "http://from-url:8000"

    monkeypatch.setenv("MEDGEMMA_ENDPOINT", "http://from-endpoint:8000")
    assert Settings().medgemma_endpoint == "http://from-endpoint:8000"


def test_timeout_parsing(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MEDGEMMA_TIMEOUT_MS", "1500")
    assert Settings().provider_config().timeout_ms == 1500

    monkeypatch.setenv("MEDGEMMA_TIMEOUT_MS", "soon")
    assert Settings().provider_config().timeout_ms == 20000


def test_cors_origins_list(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MIRRORCARE_CORS_ORIGINS", "http://localhost:3000, http://127.0.0.1:3000,")

    assert Settings().cors_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_whitespace_endpoint_is_not_configured():
    assert ProviderConfig(endpoint="   ").has_endpoint is False
    assert ProviderConfig(endpoint="http://x").has_endpoint is True
