"""
Configuration module for envsync.

This module defines all configuration classes using Pydantic BaseModel and BaseSettings.
Configuration is loaded from environment variables prefixed with "ENVSYNC_",
using "__" as the nested delimiter.

Example environment:
    ENVSYNC_UPDATE__INPUT_PATH=config/.env.example
    ENVSYNC_UPDATE__ONLY_EMPTY=true
    ENVSYNC_APP__LOG_LEVEL=DEBUG

Usage:
    from envsync.config import get_settings
    settings = get_settings()
    print(settings.update.output_path)
"""

from functools import lru_cache

from envsync.config_constants import (
    DEFAULT_ENCODING,
    DEFAULT_INPUT_FILE,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PLACEHOLDER,
    DEFAULT_TEMPLATE_FILE,
    LogFormat,
    LogLevel,
)

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# UPDATE CONFIGURATION
# =============================================================================

class UpdateConfig(BaseModel):
    """
    Settings for synchronizing an output env file with its template.

    Used by UpdateService; the CLI overrides fields from its arguments.
    """

    # Template whose declarations define what the output must contain
    input_path: str = DEFAULT_INPUT_FILE

    # Real configuration file that is created or updated
    output_path: str = DEFAULT_OUTPUT_FILE

    # Only prompt for keys that have no value in the existing output yet
    only_empty: bool = False

    # Only prompt for keys that already have a value in the existing output
    # Combined with only_empty, every key is skipped
    only_filled: bool = False

    # Render the result without writing it to output_path
    dry_run: bool = False


# =============================================================================
# TEMPLATE CONFIGURATION
# =============================================================================

class TemplateConfig(BaseModel):
    """
    Settings for deriving a shareable template from a real env file.

    Every value is replaced by the placeholder; comments stay in place.
    """

    # Real env file holding actual values
    source_path: str = DEFAULT_OUTPUT_FILE

    # Template file to write
    target_path: str = DEFAULT_TEMPLATE_FILE

    # Text written as the value of every declaration
    placeholder: str = DEFAULT_PLACEHOLDER


# =============================================================================
# STORAGE CONFIGURATION
# =============================================================================

class StorageConfig(BaseModel):
    """File access settings shared by every flow."""

    # Encoding used to read and write env files
    encoding: str = DEFAULT_ENCODING


# =============================================================================
# APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseModel):
    """
    General application settings.

    Controls logging verbosity and format.
    """

    # Logging level: DEBUG, INFO, WARNING, ERROR
    # WARNING keeps interactive sessions quiet; DEBUG shows parsing details
    log_level: LogLevel = LogLevel.WARNING

    # console: one colored line per event
    # json: pretty printed JSON records
    log_format: LogFormat = LogFormat.CONSOLE


# =============================================================================
# ROOT SETTINGS (Environment Loading)
# =============================================================================

class Settings(BaseSettings):
    """
    Root settings class that loads all configuration from environment.

    Environment variables use "ENVSYNC_" as prefix and "__" as nested delimiter.
    Example: ENVSYNC_TEMPLATE__PLACEHOLDER sets settings.template.placeholder

    Every field has a default; no environment variable is required.
    """

    # Template to output synchronization
    update: UpdateConfig = UpdateConfig()

    # Template generation
    template: TemplateConfig = TemplateConfig()

    # File access
    storage: StorageConfig = StorageConfig()

    # Application-wide settings
    app: AppConfig = AppConfig()

    model_config = SettingsConfigDict(
        env_prefix="ENVSYNC_",      # Only ENVSYNC_* variables are considered
        case_sensitive=False,       # ENV_VAR and env_var are equivalent
        env_nested_delimiter="__",  # Use __ for nested config (UPDATE__ONLY_EMPTY)
    )


# =============================================================================
# SINGLETON ACCESSOR
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance (singleton pattern).

    Settings are loaded once and cached for the lifetime of the process.

    Returns:
        Settings instance with all configuration loaded from environment
    """
    return Settings()
