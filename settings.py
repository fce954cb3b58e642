# settings.py
import os
import logging
from typing import Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_PATH = ".streamlit/secrets.toml"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_PROFILE_STORE_PATH = "MemoryFiles/Profiles.xlsx"


class Settings:
    def __init__(
        self,
        openai_api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        request_timeout: Optional[float] = None,
        profile_store_path: str = DEFAULT_PROFILE_STORE_PATH,
        log_level: str = "INFO",
    ):
        self.openai_api_key = openai_api_key
        self.model = model
        self.request_timeout = request_timeout
        self.profile_store_path = profile_store_path
        self.log_level = log_level

    def require_api_key(self) -> str:
        if not self.openai_api_key:
            raise ValueError(
                "OPENAI_API_KEY is not configured (set it in the environment "
                f"or in {DEFAULT_SECRETS_PATH})"
            )
        return self.openai_api_key

    def __repr__(self):
        # never print the key itself
        return (
            f"Settings(model={self.model!r}, request_timeout={self.request_timeout!r}, "
            f"profile_store_path={self.profile_store_path!r}, log_level={self.log_level!r}, "
            f"openai_api_key={'set' if self.openai_api_key else 'missing'})"
        )


def _load_secrets(secrets_path: str) -> dict:
    if not secrets_path or not os.path.exists(secrets_path):
        return {}
    secrets = toml.load(secrets_path)
    logger.debug("Loaded %d secret(s) from %s", len(secrets), secrets_path)
    return secrets


def load_settings(secrets_path: str = DEFAULT_SECRETS_PATH, environ=None) -> Settings:
    """
    Build Settings from the secrets TOML file (when present), falling back to
    environment variables for anything the file does not set.
    """
    environ = os.environ if environ is None else environ
    secrets = _load_secrets(secrets_path)

    def _get(key, default=None):
        value = secrets.get(key)
        if value in (None, ""):
            value = environ.get(key, default)
        return value

    timeout = _get("OPENAI_TIMEOUT")
    return Settings(
        openai_api_key=_get("OPENAI_API_KEY"),
        model=_get("OPENAI_MODEL", DEFAULT_MODEL),
        request_timeout=float(timeout) if timeout not in (None, "") else None,
        profile_store_path=_get("PROFILE_STORE_PATH", DEFAULT_PROFILE_STORE_PATH),
        log_level=str(_get("LOG_LEVEL", "INFO")).upper(),
    )
