"""
Abstract base handler for all upstream resolvers.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import logging

from ..models.check_result import PackageOutcome
from ..models.package_spec import PackageSpec


class BaseHandler(ABC):
    """Abstract base class for the per-kind update resolvers."""

    def __init__(self, settings: Dict[str, Any] = None):
        """
        Initialize handler with tool settings.

        Args:
            settings: Tool settings dictionary (see core.registry.DEFAULT_SETTINGS)
        """
        self.settings = settings or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def check(self, spec: PackageSpec) -> PackageOutcome:
        """
        Resolve a spec against its upstream.

        Returns:
            PackageOutcome describing update, unpinned, error or up to date
        """
        pass

    @abstractmethod
    def get_kind(self) -> str:
        """
        Get the spec kind this handler resolves.

        Returns:
            Discriminant value of the matching spec type
        """
        pass

    def get_setting(self, section: str, name: str, default: Any = None) -> Any:
        return self.settings.get(section, {}).get(name, default)

    def handle_error(self, label: str, exception: Optional[Exception] = None) -> None:
        """
        Log a failed upstream lookup.

        Args:
            label: Display label of the spec being checked
            exception: The exception that occurred, if any
        """
        if exception is None:
            self.logger.warning(f"Could not determine upstream state for {label}")
        else:
            self.logger.warning(
                f"Error checking {label}: "
                f"{type(exception).__name__}: {str(exception)}"
            )
