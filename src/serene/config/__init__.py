"""
SERENE Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of configured values
"""

from serene.config.settings import AnalysisSettings, Settings, get_settings

__all__ = ["AnalysisSettings", "Settings", "get_settings"]
