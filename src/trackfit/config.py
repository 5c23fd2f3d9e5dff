from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./trackfit.db"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    max_upload_bytes: int = 25 * 1024 * 1024  # largest accepted .fit upload
    fit_check_crc: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
