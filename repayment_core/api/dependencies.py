"""
Request dependencies
"""

from typing import Optional

from ..policy import SystemSettings
from .schemas import SettingsModel


def get_default_settings() -> SystemSettings:
    """Lending policy from configuration, used when a request carries none"""
    return SystemSettings.from_config()


def resolve_settings(requested: Optional[SettingsModel], default: SystemSettings) -> SystemSettings:
    if requested is None:
        return default
    return requested.to_settings()
