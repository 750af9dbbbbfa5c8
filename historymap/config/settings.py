"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, Optional, Dict, Any, List, Tuple
from enum import Enum
from pathlib import Path
import os


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BackendSettings(BaseSettings):
    """Remote Uncovering History backend"""

    api_url: Optional[str] = Field(default=None, description="Base URL of the backend API")
    api_token: Optional[str] = Field(default=None, description="Service bearer token injected by proxy routes")
    timeout_seconds: float = Field(default=15.0, gt=0, le=120)

    @field_validator('api_url', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Blank values mean "not configured"; trailing slashes are dropped"""
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            return v or None
        return v

    model_config = {"env_prefix": "BACKEND_", "env_file": ".env", "extra": "ignore"}


class MapSettings(BaseSettings):
    """Map and point pipeline configuration"""

    default_lat: float = Field(default=-30.885, ge=-90, le=90)
    default_lon: float = Field(default=-55.51, ge=-180, le=180)
    default_zoom: int = Field(default=15, ge=1, le=20)
    detail_zoom: int = Field(default=16, ge=1, le=20)
    group_precision: int = Field(default=5, ge=0, le=10)
    recent_limit: int = Field(default=6, ge=1, le=100)

    # Image resolution
    file_proxy_prefix: str = Field(default="/api/files")
    photo_source_order: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["photoUrls", "photoIds"]
    )
    file_cache_control: str = Field(default="public, max-age=31536000, immutable")

    # Marker icons
    icon_base_url: str = Field(default="/leaflet")
    pin_icon_url: str = Field(default="/pin.svg")
    pin_icon_size: int = Field(default=32, ge=8, le=128)

    @field_validator('photo_source_order', mode='before')
    @classmethod
    def parse_photo_source_order(cls, v):
        """Parse source order from a comma-separated environment variable"""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator('photo_source_order')
    @classmethod
    def validate_photo_source_order(cls, v):
        allowed = {"photoUrls", "photoIds"}
        unknown = [source for source in v if source not in allowed]
        if unknown:
            raise ValueError(f"Unknown photo sources: {unknown}")
        if not v:
            raise ValueError("At least one photo source is required")
        return v

    @field_validator('file_proxy_prefix')
    @classmethod
    def normalize_prefix(cls, v):
        return v.rstrip("/") or "/"

    @property
    def default_center(self) -> Tuple[float, float]:
        return (self.default_lat, self.default_lon)

    model_config = {"env_prefix": "MAP_", "env_file": ".env", "extra": "ignore"}


class SecuritySettings(BaseSettings):
    """CORS configuration for the browser front end"""

    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_", "env_file": ".env", "extra": "ignore"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Uncovering History")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_json: bool = Field(default=False)
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    backend: BackendSettings = Field(default_factory=BackendSettings)
    map: MapSettings = Field(default_factory=MapSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def get_log_file_path(self) -> Optional[Path]:
        if not self.log_file:
            return None
        return Path(self.log_file).resolve()

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def settings_from_env_file(env_file: str, environment: Optional[Environment] = None) -> Settings:
    """Build settings with every group (not just the top level) reading ``env_file``"""
    overrides: Dict[str, Any] = {}
    if environment is not None:
        overrides["environment"] = environment
    return Settings(
        _env_file=env_file,
        backend=BackendSettings(_env_file=env_file),
        map=MapSettings(_env_file=env_file),
        security=SecuritySettings(_env_file=env_file),
        **overrides,
    )


def settings_for_environment() -> Settings:
    """
    Settings for the process environment.

    When ``ENVIRONMENT`` names an environment whose ``.env.<name>`` file
    exists, that file is read; otherwise only ``.env`` and the process
    variables apply. ``run.py --env`` exports ``ENVIRONMENT`` so server
    workers started by uvicorn pick up the same file.
    """
    name = os.getenv("ENVIRONMENT")
    if name:
        environment = Environment(name.strip().lower())
        env_file = Path(f".env.{environment.value}")
        if env_file.exists():
            return settings_from_env_file(str(env_file), environment)
    return Settings()


# Global settings instance
settings = settings_for_environment()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = settings_for_environment()
    return settings
