"""
Configuration module with strongly typed settings.

Usage:
    from bracket_engine.config import settings
    
    print(settings.bracket.shuffle_seed)
    print(settings.service.lock_timeout_s)
"""
from .settings import (
    Settings,
    BracketSettings,
    ServiceSettings,
    ObservabilitySettings,
)

# Singleton instance - validates on import
settings = Settings()

__all__ = [
    "settings",
    "Settings",
    "BracketSettings",
    "ServiceSettings",
    "ObservabilitySettings",
]
