"""Configuration module for kvhttp."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
