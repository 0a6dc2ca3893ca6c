"""
Update Checker - Resolves every configured pin against its upstream.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, List, Dict, Any, Type

from .registry import SettingsRegistry, DEFAULT_SETTINGS
from ..handlers.base_handler import BaseHandler
from ..handlers.git_handler import GitHandler
from ..handlers.npm_handler import NpmHandler
from ..models.check_result import CheckResult, PackageOutcome
from ..models.package_spec import PackageSpec


class UpdateChecker:
    """Fans one resolution task out per spec and joins them into a CheckResult."""

    HANDLER_MAP: Dict[str, Type[BaseHandler]] = {
        'npm': NpmHandler,
        'git': GitHandler,
    }

    def __init__(self, settings: Dict[str, Any] = None):
        """
        Initialize the checker.

        Args:
            settings: Tool settings (timeouts, registry URL, worker count)
        """
        self.settings = settings if settings is not None else DEFAULT_SETTINGS
        self.logger = logging.getLogger('UpdateChecker')
        self.handlers = {
            kind: handler_class(self.settings)
            for kind, handler_class in self.HANDLER_MAP.items()
        }

    def get_handler(self, spec: PackageSpec) -> BaseHandler:
        handler = self.handlers.get(spec.type)
        if handler is None:
            raise ValueError(f"Unknown package type '{spec.type}'")
        return handler

    def check_package(self, spec: PackageSpec) -> PackageOutcome:
        """
        Check a single spec. Never raises.

        Args:
            spec: Parsed package spec

        Returns:
            PackageOutcome for the spec
        """
        try:
            return self.get_handler(spec).check(spec)
        except Exception as e:
            self.logger.error(f"Error checking {spec.label}: {e}")
            return PackageOutcome.failed(spec.label, f"Failed to check {spec.label}: {e}")

    def check_updates(self, specs: List[PackageSpec]) -> CheckResult:
        """
        Check all specs concurrently.

        Each spec is independent; the result is assembled once every task
        has settled, in input order.

        Args:
            specs: Merged spec list

        Returns:
            CheckResult with updates, unpinned and errors
        """
        result = CheckResult()
        if not specs:
            return result

        # one worker per spec unless a cap is configured
        max_workers = len(specs)
        cap = self.settings.get('checker', {}).get('max_workers')
        if cap:
            max_workers = max(1, min(int(cap), max_workers))

        self.logger.info(f"Checking {len(specs)} package(s)...")
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(self.check_package, specs))

        for outcome in outcomes:
            result.add(outcome)

        self.logger.info(
            f"Done: {len(result.updates)} update(s), "
            f"{len(result.skipped_unpinned)} unpinned, {len(result.errors)} error(s)"
        )
        return result


def check_updates(specs: List[PackageSpec], settings: Dict[str, Any] = None) -> CheckResult:
    """
    Convenience function to check a list of specs.

    Args:
        specs: Merged spec list
        settings: Optional tool settings

    Returns:
        CheckResult object
    """
    return UpdateChecker(settings).check_updates(specs)


def check_package_updates(
    cwd: Optional[str] = None,
    global_settings_path: str = None,
    project_settings_path: str = None,
    settings: Dict[str, Any] = None
) -> CheckResult:
    """
    Load both settings layers, merge them and check every pin.

    Args:
        cwd: Project directory holding ``.pi/settings.json``
        global_settings_path: Override for the user-wide settings file
        project_settings_path: Override for the project settings file
        settings: Optional tool settings

    Returns:
        CheckResult object
    """
    registry = SettingsRegistry(global_settings_path, project_settings_path, cwd=cwd)
    return check_updates(registry.get_packages(), settings)
