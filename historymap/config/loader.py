"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Environment, Settings, settings_from_env_file

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            return settings_from_env_file(str(env_file_path), env)

        logger.warning(f"Environment file {env_file_path} not found, using default settings")
        return Settings(environment=env)

    @staticmethod
    def get_available_environments(directory: str = ".") -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(directory).glob(".env.*"):
            env_name = env_file.name.replace(".env.", "")
            if env_name.endswith(".sample"):
                continue
            env_files.append(env_name)
        return sorted(env_files)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            env = Environment(environment.lower())
        except ValueError:
            return False

        if not Path(f".env.{env.value}").exists():
            return False

        try:
            settings = ConfigLoader.load_environment_config(env.value)
        except ValueError as e:
            logger.error(f"Invalid configuration for {env.value}: {e}")
            return False

        # Proxy routes are useless without a backend outside of tests
        if env != Environment.TESTING and not settings.backend.api_url:
            logger.error(f"BACKEND_API_URL is not set for {env.value}")
            return False

        return True

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        default_settings = Settings()
        map_settings = default_settings.map

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={default_settings.app_name}
APP_VERSION={default_settings.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={default_settings.host}
PORT={default_settings.port}
RELOAD={'true' if env == Environment.DEVELOPMENT else 'false'}
WORKERS={1 if env == Environment.DEVELOPMENT else 4}

# Logging Configuration
LOG_LEVEL={default_settings.log_level.value}
LOG_JSON={'false' if env == Environment.DEVELOPMENT else 'true'}

# Backend Configuration
BACKEND_API_URL=http://localhost:8080
BACKEND_API_TOKEN=
BACKEND_TIMEOUT_SECONDS={default_settings.backend.timeout_seconds}

# Map Configuration
MAP_DEFAULT_LAT={map_settings.default_lat}
MAP_DEFAULT_LON={map_settings.default_lon}
MAP_DEFAULT_ZOOM={map_settings.default_zoom}
MAP_GROUP_PRECISION={map_settings.group_precision}
MAP_FILE_PROXY_PREFIX={map_settings.file_proxy_prefix}
MAP_PHOTO_SOURCE_ORDER={','.join(map_settings.photo_source_order)}

# Security Configuration
SECURITY_CORS_ORIGINS=*
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path
