"""
Configuration Module

Application configuration settings and utilities.
"""

from care_scheduling.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
