"""
Sensory Haven Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of breathing engine defaults
"""

from haven.config.settings import BreathingSettings, Settings, get_settings

__all__ = ["BreathingSettings", "Settings", "get_settings"]
