"""
Strongly typed configuration using pydantic-settings.

All settings are validated at startup and loaded from:
1. Default values defined here
2. .env file (if present)
3. Environment variables (highest priority)

Environment variable naming:
- BracketSettings: BRACKET_SHUFFLE_SEED
- ServiceSettings: SERVICE_LOCK_TIMEOUT_S
- ObservabilitySettings: ENVIRONMENT, LOG_LEVEL (no prefix)
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class BracketSettings(BaseSettings):
    """Seeding settings shared by both bracket builders."""
    
    model_config = SettingsConfigDict(env_prefix="BRACKET_")
    
    # None = fresh entropy for every build
    shuffle_seed: Optional[int] = Field(default=None, description="Seed for the seeding shuffle")


class ServiceSettings(BaseSettings):
    """Tournament service settings."""
    
    model_config = SettingsConfigDict(env_prefix="SERVICE_")
    
    lock_timeout_s: float = Field(
        default=5.0, gt=0.0, le=300.0,
        description="Max wait for the per-tournament update lock"
    )


class ObservabilitySettings(BaseSettings):
    """Logging and metrics settings."""
    
    model_config = SettingsConfigDict(env_prefix="")  # Direct: ENVIRONMENT, LOG_LEVEL
    
    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format: str = Field(default="console", pattern="^(console|json)$")
    enable_metrics: bool = Field(default=True)


class Settings(BaseSettings):
    """
    Root settings aggregating all subsections.
    
    Usage:
        from bracket_engine.config import settings
        
        settings.bracket.shuffle_seed
        settings.service.lock_timeout_s
        settings.observability.log_level
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    bracket: BracketSettings = Field(default_factory=BracketSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
