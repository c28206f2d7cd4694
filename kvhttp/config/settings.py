"""
kvhttp Configuration Settings

This module contains all configuration constants for the kvhttp server.
Values are read from the environment once, at import time.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Server configuration settings."""

    # Network settings
    HOST: str = os.environ.get("KVHTTP_HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("KVHTTP_PORT", "8080"))

    # Status reported for a GET on a key that was never set
    MISSING_KEY_STATUS: int = int(os.environ.get("KVHTTP_MISSING_KEY_STATUS", "500"))

    # Logging settings
    DEBUG: bool = os.environ.get("KVHTTP_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("KVHTTP_LOG_LEVEL", "INFO")
    ACCESS_LOG: bool = os.environ.get("KVHTTP_ACCESS_LOG", "false").lower() == "true"


# Global settings instance
settings = Settings()
