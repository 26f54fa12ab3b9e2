"""CLI settings.

Credentials come from the environment when OXFORD_DICTIONARY_APP_ID is set,
otherwise from a JSON config file:

    {"OxfordDictionary": {"AppID": "...", "AppKey": "..."}}
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adapter.external.oxford_thesaurus import API_TIMEOUT_SECONDS, OXFORD_API_BASE_URL
from domain.model.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.define.conf.json"

APP_ID_ENV = "OXFORD_DICTIONARY_APP_ID"
APP_KEY_ENV = "OXFORD_DICTIONARY_APP_KEY"
BASE_URL_ENV = "OXFORD_DICTIONARY_BASE_URL"
TIMEOUT_ENV = "THESAURUS_TIMEOUT_SECONDS"


class OxfordCredentials(BaseModel):
    """The "OxfordDictionary" section of the config file."""
    model_config = ConfigDict(extra="ignore")

    app_id: str = Field("", alias="AppID")
    app_key: str = Field("", alias="AppKey")


class ConfigFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    oxford_dictionary: OxfordCredentials = Field(
        default_factory=OxfordCredentials, alias="OxfordDictionary",
    )


@dataclass(frozen=True)
class Settings:
    app_id: str
    app_key: str
    base_url: str = OXFORD_API_BASE_URL
    timeout_seconds: float = API_TIMEOUT_SECONDS

    def safe_log_values(self) -> dict[str, str]:
        return {
            "app_id": self.app_id,
            "app_key": "[redacted]" if self.app_key else "",
            "base_url": self.base_url,
            "timeout_seconds": str(self.timeout_seconds),
        }


def expand_path(path: str) -> Path:
    """Expand "~" in a path; unexpandable paths are returned unchanged."""
    try:
        return Path(path).expanduser()
    except RuntimeError:
        return Path(path)


def read_config_file(path: str) -> OxfordCredentials:
    """Read credentials from a JSON config file.

    A missing, unreadable or invalid file is logged and yields empty
    credentials.
    """
    config_path = expand_path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Error reading config", extra={"path": str(config_path), "error": str(e)})
        return OxfordCredentials()

    try:
        return ConfigFile.model_validate_json(raw).oxford_dictionary
    except ValidationError as e:
        logger.warning(
            "Invalid config file",
            extra={"path": str(config_path), "error_count": e.error_count()},
        )
        return OxfordCredentials()


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError:
        return API_TIMEOUT_SECONDS
    return timeout if timeout > 0 else API_TIMEOUT_SECONDS


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """Build Settings from the environment or the config file.

    .env files are loaded by the CLI entry point before this runs.

    Raises:
        ConfigError: no app id / app key could be found.
    """
    if APP_ID_ENV in os.environ:
        app_id = os.getenv(APP_ID_ENV, "").strip()
        app_key = os.getenv(APP_KEY_ENV, "").strip()
    else:
        credentials = read_config_file(config_path)
        app_id = credentials.app_id.strip()
        app_key = credentials.app_key.strip()

    if not app_id or not app_key:
        raise ConfigError(
            f"Missing Oxford Dictionaries credentials: set {APP_ID_ENV} and {APP_KEY_ENV} "
            f"or add OxfordDictionary.AppID/AppKey to {config_path}"
        )

    return Settings(
        app_id=app_id,
        app_key=app_key,
        base_url=os.getenv(BASE_URL_ENV, "").strip() or OXFORD_API_BASE_URL,
        timeout_seconds=_parse_timeout(os.getenv(TIMEOUT_ENV, str(API_TIMEOUT_SECONDS)).strip()),
    )
