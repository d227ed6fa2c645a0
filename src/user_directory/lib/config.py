"""
Configuration management for the user directory service.

Handles loading and validation of configuration from environment variables,
configuration files, and default values.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml
from dotenv import load_dotenv


logger = logging.getLogger(__name__)


class AuthConfig(BaseModel):
    """Configuration for bearer-token validation."""

    issuer: str = Field(default="https://your-issuer.com", description="Expected token issuer")
    audience: str = Field(default="https://your-audience.com", description="Expected token audience")
    secret_key: str = Field(default="your-secret-key", description="Shared symmetric signing secret")
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    clock_skew_seconds: int = Field(default=300, ge=0, description="Leeway applied to expiry checks")
    token_lifetime_minutes: int = Field(default=60, ge=1, description="Lifetime of development tokens")

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        valid_algorithms = ["HS256", "HS384", "HS512"]
        if v.upper() not in valid_algorithms:
            raise ValueError(f"Algorithm must be one of {valid_algorithms}")
        return v.upper()


class APIConfig(BaseModel):
    """Configuration for API server."""

    host: str = Field(default="localhost", description="API server host")
    port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    debug: bool = Field(default=False, description="Enable debug mode and interactive docs")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="CORS allowed origins")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class DirectoryConfig(BaseModel):
    """Configuration for the in-memory user directory."""

    seed_demo_users: bool = Field(default=True, description="Load the demo users at startup")


class Config(BaseModel):
    """Main configuration class combining all configuration sections."""

    model_config = ConfigDict(extra="forbid")

    auth: AuthConfig = Field(default_factory=AuthConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)

    log_dir: Optional[str] = Field(default=None, description="Log directory; console only when unset")


def _env_flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class ConfigManager:
    """
    Manager for loading and accessing configuration.

    Supports configuration from environment variables, YAML files,
    and provides defaults with validation.
    """

    def __init__(self, config_file: Optional[str] = None, env_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to YAML configuration file
            env_file: Path to .env file for environment variables
        """
        self.config_file = config_file
        self.env_file = env_file
        self._config: Optional[Config] = None

        if env_file and Path(env_file).exists():
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv(".env")

    def load_config(self) -> Config:
        """
        Load configuration from all sources.

        Returns:
            Validated configuration object
        """
        if self._config is not None:
            return self._config

        config_data = {}

        if self.config_file and Path(self.config_file).exists():
            config_data = self._load_yaml_config(self.config_file)

        env_overrides = self._load_env_config()
        config_data = self._merge_config(config_data, env_overrides)

        self._config = Config(**config_data)

        self._ensure_directories()

        logger.info("Configuration loaded successfully")
        return self._config

    def _load_yaml_config(self, config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(config_file, 'r') as f:
                config_data = yaml.safe_load(f)
            logger.info(f"Loaded configuration from {config_file}")
            return config_data or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {config_file}: {e}")
            return {}

    def _load_env_config(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}

        auth_config = {}
        if os.getenv("JWT_ISSUER"):
            auth_config["issuer"] = os.getenv("JWT_ISSUER")
        if os.getenv("JWT_AUDIENCE"):
            auth_config["audience"] = os.getenv("JWT_AUDIENCE")
        if os.getenv("JWT_SECRET_KEY"):
            auth_config["secret_key"] = os.getenv("JWT_SECRET_KEY")
        if os.getenv("JWT_CLOCK_SKEW_SECONDS"):
            try:
                auth_config["clock_skew_seconds"] = int(os.getenv("JWT_CLOCK_SKEW_SECONDS"))
            except ValueError:
                logger.warning("Invalid JWT_CLOCK_SKEW_SECONDS, using default")

        if auth_config:
            env_config["auth"] = auth_config

        api_config = {}
        if os.getenv("API_HOST"):
            api_config["host"] = os.getenv("API_HOST")
        if os.getenv("API_PORT"):
            try:
                api_config["port"] = int(os.getenv("API_PORT"))
            except ValueError:
                logger.warning("Invalid API_PORT, using default")
        if os.getenv("API_DEBUG"):
            api_config["debug"] = _env_flag(os.getenv("API_DEBUG"))
        if os.getenv("LOG_LEVEL"):
            api_config["log_level"] = os.getenv("LOG_LEVEL")

        if api_config:
            env_config["api"] = api_config

        if os.getenv("SEED_DEMO_USERS"):
            env_config["directory"] = {"seed_demo_users": _env_flag(os.getenv("SEED_DEMO_USERS"))}

        if os.getenv("LOG_DIR"):
            env_config["log_dir"] = os.getenv("LOG_DIR")

        return env_config

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    def _ensure_directories(self) -> None:
        if self._config and self._config.log_dir:
            Path(self._config.log_dir).mkdir(parents=True, exist_ok=True)

    def get_config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_config(self) -> Config:
        """Reload configuration from sources."""
        self._config = None
        return self.load_config()


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None
) -> ConfigManager:
    """
    Get global configuration manager instance.

    Args:
        config_file: Path to YAML configuration file
        env_file: Path to .env file

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager(config_file, env_file)

    return _config_manager


def get_config() -> Config:
    """Get the current configuration."""
    return get_config_manager().get_config()


def setup_logging(config: Optional[Config] = None) -> None:
    """Setup logging based on configuration."""
    if config is None:
        config = get_config()

    log_level = getattr(logging, config.api.log_level, logging.INFO)

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    simple_formatter = logging.Formatter(
        '%(levelname)s - %(name)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "user_directory.log")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.FileHandler(log_dir / "errors.log")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(error_handler)

    logger.info("Logging setup completed")
