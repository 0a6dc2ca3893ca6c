"""
Settings Registry - Loads the two settings layers and the tool configuration.
"""

import copy
import json
import logging
import os
from typing import Dict, Any, List, Optional

import yaml
from dotenv import load_dotenv

from ..models.package_spec import PackageSpec
from ..utils.source_parser import parse_source

logger = logging.getLogger(__name__)

GLOBAL_SETTINGS = os.path.join(os.path.expanduser('~'), '.pi', 'agent', 'settings.json')
PROJECT_SETTINGS = os.path.join('.pi', 'settings.json')
CACHE_FILE = os.path.join(
    os.path.expanduser('~'), '.pi', 'agent', '.cache', 'package-update-notify.json'
)

DEFAULT_SETTINGS: Dict[str, Any] = {
    'npm': {
        'registry_url': 'https://registry.npmjs.org',
        'timeout': 4.5,
        'user_agent': 'pinwatch/1.0',
    },
    'git': {
        'executable': 'git',
        'timeout': 10,
    },
    'checker': {
        'max_workers': None,
    },
    'auto_check': {
        'cache_file': CACHE_FILE,
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': None,
    },
}

# environment variable -> (section, key)
ENV_OVERRIDES = {
    'PINWATCH_NPM_REGISTRY': ('npm', 'registry_url'),
    'PINWATCH_GIT': ('git', 'executable'),
    'PINWATCH_CACHE_FILE': ('auto_check', 'cache_file'),
    'PINWATCH_LOG_LEVEL': ('logging', 'level'),
}


def load_config(path: str) -> Dict[str, Any]:
    """Load a JSON or YAML file, returning {} when missing or unreadable."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.endswith('.json'):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug(f"Config file not found: {path}")
        return {}
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Could not load config {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: top level is not a mapping")
        return {}
    return data


def load_settings(path: str = None) -> Dict[str, Any]:
    """
    Build the tool settings.

    Defaults are overlaid with the YAML file at ``path`` (section by section)
    and then with ``PINWATCH_*`` environment variables, which may come from a
    ``.env`` file.

    Args:
        path: Optional settings YAML file

    Returns:
        Settings dictionary
    """
    load_dotenv()
    settings = copy.deepcopy(DEFAULT_SETTINGS)

    if path:
        for section, values in load_config(path).items():
            if isinstance(values, dict) and isinstance(settings.get(section), dict):
                settings[section].update(values)
            else:
                settings[section] = values

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            settings.setdefault(section, {})[key] = value

    return settings


def extract_packages(settings: Dict[str, Any]) -> List[PackageSpec]:
    """
    Parse the ``packages`` list of one settings layer.

    Entries may be bare strings or objects with a ``source`` field; local
    paths and unparseable entries are skipped.
    """
    specs = []
    for entry in settings.get('packages') or []:
        if isinstance(entry, str):
            source = entry
        elif isinstance(entry, dict):
            source = entry.get('source')
        else:
            source = None
        if not source or not isinstance(source, str):
            continue

        spec = parse_source(source)
        if spec:
            specs.append(spec)
        else:
            logger.debug(f"Skipping unsupported package source: {source}")
    return specs


def merge_packages(
    global_packages: List[PackageSpec],
    project_packages: List[PackageSpec]
) -> List[PackageSpec]:
    """
    Merge the global and project layers.

    Entries are keyed by identity (``npm:<name>`` / ``git:<url>``); a project
    entry replaces a global one with the same key. Whole specs are replaced,
    fields are never merged.
    """
    merged: Dict[str, PackageSpec] = {}
    for spec in global_packages:
        merged[spec.key] = spec
    for spec in project_packages:
        merged[spec.key] = spec
    return list(merged.values())


class SettingsRegistry:
    """Registry that loads both settings layers and exposes the merged pins."""

    def __init__(
        self,
        global_settings_path: str = None,
        project_settings_path: str = None,
        cwd: Optional[str] = None
    ):
        """
        Initialize the registry with settings files.

        Args:
            global_settings_path: Path to the user-wide settings file
            project_settings_path: Path to the project settings file
            cwd: Project directory used when project_settings_path is not given
        """
        if global_settings_path is None:
            global_settings_path = GLOBAL_SETTINGS
        if project_settings_path is None:
            project_settings_path = os.path.join(cwd or os.getcwd(), PROJECT_SETTINGS)

        self.global_settings_path = global_settings_path
        self.project_settings_path = project_settings_path
        self.global_settings = load_config(global_settings_path)
        self.project_settings = load_config(project_settings_path)

    def get_global_packages(self) -> List[PackageSpec]:
        return extract_packages(self.global_settings)

    def get_project_packages(self) -> List[PackageSpec]:
        return extract_packages(self.project_settings)

    def get_packages(self) -> List[PackageSpec]:
        """Merged, de-duplicated pins with project entries winning."""
        packages = merge_packages(self.get_global_packages(), self.get_project_packages())
        logger.debug(f"{len(packages)} package(s) configured")
        return packages
