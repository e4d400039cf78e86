"""
Configuration settings for the SchemeFlow approval dashboard
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    app_name: str = Field(default="SchemeFlow", env="APP_NAME")
    app_version: str = Field(default="1.0.0", env="APP_VERSION")
    debug: bool = Field(default=True, env="DEBUG")
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    # API Configuration
    api_prefix: str = Field(default="/api", env="API_PREFIX")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=5000, env="PORT")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        env="CORS_ORIGINS"
    )

    # Storage Configuration
    storage_backend: str = Field(default="local", env="STORAGE_BACKEND")  # local | mongo
    local_store_dir: str = Field(default=".data", env="LOCAL_STORE_DIR")
    mongodb_url: str = Field(default="mongodb://localhost:27017", env="MONGODB_URL")
    mongodb_db_name: str = Field(default="schemeflow_db", env="MONGODB_DB_NAME")

    # Workflow Configuration
    default_facility_name: str = Field(default="Primary Health Center", env="DEFAULT_FACILITY_NAME")
    seed_default_schemes: bool = Field(default=True, env="SEED_DEFAULT_SCHEMES")

    # Session
    session_cookie: str = Field(default="session", env="SESSION_COOKIE")
    session_ttl_minutes: int = Field(default=480, env="SESSION_TTL_MINUTES")
    max_sessions: int = Field(default=1000, env="MAX_SESSIONS")

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]

    def get_storage_backend(self) -> str:
        """Get normalized storage backend name"""
        backend = self.storage_backend.strip().lower()
        if backend not in ("local", "mongo"):
            raise ValueError(f"STORAGE_BACKEND must be 'local' or 'mongo', got: {self.storage_backend}")
        return backend

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Create global settings instance
settings = Settings()
