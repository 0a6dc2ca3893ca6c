"""
Core package - Contains main business logic.
"""

from .registry import (
    SettingsRegistry,
    extract_packages,
    merge_packages,
    load_settings,
    load_config,
)
from .state_manager import StateManager, AUTO_CHECK_INTERVAL_MS
from .checker import UpdateChecker, check_updates, check_package_updates

__all__ = [
    'SettingsRegistry',
    'extract_packages',
    'merge_packages',
    'load_settings',
    'load_config',
    'StateManager',
    'AUTO_CHECK_INTERVAL_MS',
    'UpdateChecker',
    'check_updates',
    'check_package_updates',
]
