from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class Credentials:
    api_key: str
    api_secret: str


class Settings(BaseSettings):
    # We load .env manually in get_settings() so a missing env file doesn't break
    # tests / CI / production containers.
    model_config = SettingsConfigDict(extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    upload_dir: str = "./uploads"
    allowed_origins: str = "*"

    pinata_api_key: str | None = None
    pinata_secret_api_key: str | None = None
    pinata_pin_url: str = "https://api.pinata.cloud/pinning/pinFileToIPFS"
    pinata_gateway_url: str = "https://gateway.pinata.cloud"
    pinata_timeout_s: float = 60.0

    max_upload_bytes: int = 100 * 1024 * 1024  # 100MB

    def credentials(self) -> Credentials | None:
        """Both halves of the key pair must be set, otherwise uploads stay on local disk."""
        key = (self.pinata_api_key or "").strip()
        secret = (self.pinata_secret_api_key or "").strip()
        if not key or not secret:
            return None
        return Credentials(api_key=key, api_secret=secret)

    def ensure_dirs(self) -> None:
        Path(self.upload_dir).mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    try:
        from dotenv import load_dotenv

        load_dotenv(".env", override=False)
    except OSError:
        pass
    return Settings()
