"""
Configuration settings for TaskFlow.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings"""

    # Service information
    service_name: str = os.getenv("SERVICE_NAME", "taskflow")
    service_version: str = os.getenv("SERVICE_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database configuration
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./taskflow.db")
    db_connect_retries: int = int(os.getenv("DB_CONNECT_RETRIES", "10"))
    db_connect_retry_delay: float = float(os.getenv("DB_CONNECT_RETRY_DELAY", "5"))

    # API configuration
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # CORS configuration
    allowed_origins: List[str] = os.getenv("ALLOWED_ORIGINS", "*").split(",")

    # Security
    password_hash_scheme: str = os.getenv("PASSWORD_HASH_SCHEME", "pbkdf2_sha256")

    # Client configuration
    api_url: str = os.getenv("TASKFLOW_API_URL", "http://localhost:8000")
    client_storage_path: str = os.getenv(
        "TASKFLOW_CLIENT_STORAGE",
        os.path.join(os.path.expanduser("~"), ".taskflow", "storage.json")
    )
    request_timeout: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
