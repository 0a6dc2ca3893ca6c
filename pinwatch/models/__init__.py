"""
Models package - Data classes for the application.
"""

from .package_spec import NpmSpec, GitSpec, PackageSpec
from .check_result import CheckResult, PackageOutcome, PackageUpdate

__all__ = [
    'NpmSpec',
    'GitSpec',
    'PackageSpec',
    'CheckResult',
    'PackageOutcome',
    'PackageUpdate',
]
