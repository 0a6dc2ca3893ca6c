"""
Utils package - Shared utility functions.
"""

from .version import compare_version, normalize_version, is_newer
from .git_url import (
    normalize_git_url,
    extract_display_name,
    build_compare_url,
    is_pinned_sha,
    short_sha,
)
from .source_parser import parse_source, parse_npm_source, parse_git_source, is_local_path
from .formatting import format_update_summary, format_detailed_updates, format_unpinned
from .logger import setup_logging, get_logger

__all__ = [
    'compare_version',
    'normalize_version',
    'is_newer',
    'normalize_git_url',
    'extract_display_name',
    'build_compare_url',
    'is_pinned_sha',
    'short_sha',
    'parse_source',
    'parse_npm_source',
    'parse_git_source',
    'is_local_path',
    'format_update_summary',
    'format_detailed_updates',
    'format_unpinned',
    'setup_logging',
    'get_logger',
]
