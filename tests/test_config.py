import pytest

from moodsync.config import (
    DEFAULT_MARKET,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    IMAGE_TAGGING_URL,
    load_settings,
    missing_settings,
)
from moodsync.core import ConfigurationError

FULL_ENV = {
    "HUGGINGFACE_API_TOKEN": "hf",
    "SPOTIFY_CLIENT_ID": "id",
    "SPOTIFY_CLIENT_SECRET": "secret",
}


def test_missing_settings_are_all_listed() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings({"SPOTIFY_CLIENT_ID": "id", "SPOTIFY_CLIENT_SECRET": "  "})

    assert excinfo.value.missing == ["HUGGINGFACE_API_TOKEN", "SPOTIFY_CLIENT_SECRET"]
    assert "HUGGINGFACE_API_TOKEN" in str(excinfo.value)


def test_missing_settings_without_raising() -> None:
    assert missing_settings(FULL_ENV) == []
    assert missing_settings({}) == [
        "HUGGINGFACE_API_TOKEN",
        "SPOTIFY_CLIENT_ID",
        "SPOTIFY_CLIENT_SECRET",
    ]


def test_load_settings_defaults() -> None:
    settings = load_settings(FULL_ENV)

    assert settings.spotify_client_id == "id"
    assert settings.spotify_market == DEFAULT_MARKET
    assert settings.request_timeout == DEFAULT_REQUEST_TIMEOUT_SECONDS
    assert settings.token_refresh_margin == 60
    assert settings.gemini_api_key == ""
    assert settings.image_tagging_url == IMAGE_TAGGING_URL


def test_load_settings_overrides() -> None:
    env = dict(
        FULL_ENV,
        SPOTIFY_MARKET="FR",
        REQUEST_TIMEOUT_SECONDS="2.5",
        VISION_MODEL_URL="https://vision.local/classify",
        GEMINI_API_KEY=" g-key ",
    )
    settings = load_settings(env)

    assert settings.spotify_market == "FR"
    assert settings.request_timeout == 2.5
    assert settings.vision_model_url == "https://vision.local/classify"
    assert settings.gemini_api_key == "g-key"


def test_invalid_timeout_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="REQUEST_TIMEOUT_SECONDS"):
        load_settings(dict(FULL_ENV, REQUEST_TIMEOUT_SECONDS="soon"))
