"""
pinwatch - Update checks for pinned npm and git packages.

Reads the ``packages`` pins from a user-wide and a project settings file,
asks the npm registry and git remotes what is current upstream, and reports
updates, unpinned packages and per-package failures.
"""

from .core.checker import UpdateChecker, check_updates, check_package_updates
from .core.registry import SettingsRegistry, extract_packages, merge_packages
from .core.state_manager import StateManager
from .models.check_result import CheckResult, PackageUpdate
from .models.package_spec import NpmSpec, GitSpec
from .utils.source_parser import parse_source
from .utils.version import compare_version

__version__ = "1.0.0"
__all__ = [
    'UpdateChecker',
    'check_updates',
    'check_package_updates',
    'SettingsRegistry',
    'extract_packages',
    'merge_packages',
    'StateManager',
    'CheckResult',
    'PackageUpdate',
    'NpmSpec',
    'GitSpec',
    'parse_source',
    'compare_version',
]
