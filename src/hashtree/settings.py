from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Tree shape and the hash capability injected into it
    height: int = Field(default=4, alias="HASHTREE_HEIGHT")
    hash_function: str = Field(default="sha256", alias="HASHTREE_HASH_FUNCTION")

    log_level: str = Field(default="INFO", alias="HASHTREE_LOG_LEVEL")

    # Bind address for `hashtree serve`
    host: str = Field(default="127.0.0.1", alias="HASHTREE_HOST")
    port: int = Field(default=8000, alias="HASHTREE_PORT")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()  # load at import
