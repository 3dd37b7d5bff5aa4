from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings
from typing import Optional
import logging
from functools import lru_cache


class Settings(BaseSettings):
    """
    Centralized client configuration with type validation.
    Automatically reads variables from the environment and the token file.
    """

    BOX_TOKEN_FILE: str = ".box.token"

    # --- API Settings ---
    BOX_API_BASE_URL: str = "https://api.box.com/2.0"
    BOX_ACCESS_TOKEN: Optional[str] = None
    BOX_REQUEST_TIMEOUT: float = 60.0
    BOX_USER_AGENT: str = "boxfolders"

    # --- General Settings ---
    LOG_LEVEL: str = "INFO"

    # --- Constants and Computed Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent

    @model_validator(mode="before")
    def normalize_api_settings(cls, values):
        base_url = values.get("BOX_API_BASE_URL")
        if base_url is None:
            return values

        base_url = str(base_url).strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            raise ValueError("BOX_API_BASE_URL must be an http(s) URL.")
        values["BOX_API_BASE_URL"] = base_url
        return values

    def model_post_init(self, __context):
        """
        If no access token came from the environment, fall back to the
        local token file. Fails when neither source provides one.
        """
        if self.BOX_ACCESS_TOKEN and self.BOX_ACCESS_TOKEN.strip():
            return

        token_file = self.BASE_DIR / self.BOX_TOKEN_FILE
        if token_file.is_file():
            content = token_file.read_text().strip()
            if content:
                self.BOX_ACCESS_TOKEN = content
                logging.info(f"Found access token in file: {token_file}")
                return

        raise ValueError(
            "Box access token not found. Set BOX_ACCESS_TOKEN or create the token file."
        )

    @property
    def LOG_FILE(self) -> Path:
        return self.BASE_DIR / "boxfolders.log"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the client settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
