from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from urllib.parse import quote


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "Shortlink"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Key-value store
    store_backend: str = "redis"  # Options: "redis", "memory"
    db_address: str = "localhost"
    db_port: int = 6379
    db_password: Optional[str] = None
    db_index: int = 0
    key_prefix: str = "shortlink:"
    schema_version: str = "1"

    # Sessions
    jwt_secret: Optional[str] = None  # Falls back to the secret kept in the store
    session_cookie_name: str = "shortlink-session-token"
    session_duration_seconds: int = 6 * 24 * 3600 + 12 * 3600  # 6.5 days
    cookie_secure: bool = False

    # Accounts
    password_min_length: int = 8
    bcrypt_rounds: int = 10

    # Links
    base_url: Optional[str] = None  # Short URLs use the request host when unset
    slug_length: int = 7
    max_retries: int = 5

    # QR codes
    qr_box_size: int = 10
    qr_border: int = 4

    # Logging
    log_level: str = "INFO"
    role: str = "shortlink"
    color: str = "white"

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def redis_url(self) -> str:
        """Connection URL built from the DB_* variables."""
        auth = f":{quote(self.db_password, safe='')}@" if self.db_password else ""
        return f"redis://{auth}{self.db_address}:{self.db_port}/{self.db_index}"


# Create settings instance
settings = Settings()
