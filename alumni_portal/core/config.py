"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Alumni Advantage"
    log_level: str = "INFO"
    # Extra file handler next to the console one
    log_file: Optional[str] = None

    # Record store: "memory" (tests), "json" (single file) or "mongo"
    store_backend: Literal["memory", "json", "mongo"] = "json"
    data_file: str = "portal_data.json"

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "alumni_portal"

    # JWT Auth (identifies the caller only, no password check)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Workflow policy
    # Roles listed here start APPROVED on registration, every other role starts PENDING.
    auto_approve_roles: List[str] = ["STUDENT"]
    # Applied -> Shortlisted -> Final*, no going back once final
    enforce_forward_only_applications: bool = True

    # Load the demo population on startup when the store is empty
    seed_demo_data: bool = True

    # Clients re-fetch notifications on this interval
    notification_poll_seconds: int = 5

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
