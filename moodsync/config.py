import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from moodsync.core.errors import ConfigurationError

load_dotenv()

# Image classification (Hugging Face inference API, Places365 scene model)
VISION_MODEL_URL = os.getenv(
    "VISION_MODEL_URL",
    "https://api-inference.huggingface.co/models/csailvision/places365",
)

# Image tagging (Gemini generateContent), optional
IMAGE_TAGGING_URL = os.getenv(
    "IMAGE_TAGGING_URL",
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
)

# Spotify API constants
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

DEFAULT_MARKET = "US"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 15.0
DEFAULT_TOKEN_REFRESH_MARGIN_SECONDS = 60

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Settings that must be present for the pipeline to start
REQUIRED_SETTINGS = (
    "HUGGINGFACE_API_TOKEN",
    "SPOTIFY_CLIENT_ID",
    "SPOTIFY_CLIENT_SECRET",
)


@dataclass(frozen=True)
class Settings:
    huggingface_api_token: str
    spotify_client_id: str
    spotify_client_secret: str
    vision_model_url: str = VISION_MODEL_URL
    gemini_api_key: str = ""
    image_tagging_url: str = IMAGE_TAGGING_URL
    spotify_token_url: str = SPOTIFY_TOKEN_URL
    spotify_api_base: str = SPOTIFY_API_BASE
    spotify_market: str = DEFAULT_MARKET
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    token_refresh_margin: int = DEFAULT_TOKEN_REFRESH_MARGIN_SECONDS


def missing_settings(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    Names of the required settings that are unset or blank.
    """
    env = os.environ if environ is None else environ
    return [name for name in REQUIRED_SETTINGS if not (env.get(name) or "").strip()]


def _float_setting(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError([f"{name} (not a number: {raw!r})"]) from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment (or the given mapping).

    Raises ConfigurationError listing every missing required setting, so a
    misconfigured deployment fails at startup rather than on the first call.
    """
    env = os.environ if environ is None else environ

    missing = missing_settings(env)
    if missing:
        raise ConfigurationError(missing)

    return Settings(
        huggingface_api_token=env["HUGGINGFACE_API_TOKEN"].strip(),
        spotify_client_id=env["SPOTIFY_CLIENT_ID"].strip(),
        spotify_client_secret=env["SPOTIFY_CLIENT_SECRET"].strip(),
        vision_model_url=env.get("VISION_MODEL_URL") or VISION_MODEL_URL,
        gemini_api_key=(env.get("GEMINI_API_KEY") or "").strip(),
        image_tagging_url=env.get("IMAGE_TAGGING_URL") or IMAGE_TAGGING_URL,
        spotify_market=env.get("SPOTIFY_MARKET") or DEFAULT_MARKET,
        request_timeout=_float_setting(
            env, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        token_refresh_margin=int(
            _float_setting(
                env,
                "TOKEN_REFRESH_MARGIN_SECONDS",
                DEFAULT_TOKEN_REFRESH_MARGIN_SECONDS,
            )
        ),
    )
