"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "Foxie"
    app_version: str = "1.0.0"
    debug: bool = False  # exposes upstream error details in responses

    # Security
    auth_enabled: bool = False
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 1 day

    # Document storage
    storage_type: str = "local"  # local, firestore
    local_storage_path: str = "./data"
    firebase_service_account: Optional[str] = None  # service account key JSON; ADC if unset
    firebase_project_id: Optional[str] = None

    # File (blob) storage
    blob_store_type: str = "local"  # local, cloudinary
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10 MB

    # LLM Provider settings
    llm_provider: str = "openai"
    llm_api_key: Optional[str] = None
    llm_model: str = "gpt-4"
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_max_tokens: int = 150
    llm_temperature: float = 0.7
    llm_timeout: float = 60.0

    # Legacy key (still accepted)
    openai_api_key: Optional[str] = None

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/foxie.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
